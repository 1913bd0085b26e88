"""One lint run over a pull request: find the issue key, fetch it, annotate, enforce."""

import logging

from ticketlint import comments
from ticketlint.keys import canonical_key, extract_keys
from ticketlint.models import LintResult, PullRequest
from ticketlint.policy import (
    hotfix_label,
    is_oversized,
    is_project_valid,
    is_status_valid,
    is_type_valid,
    should_skip_branch,
    should_update_description,
)
from ticketlint.providers.base import CodeHost, IssueNotFoundError, IssueTracker
from ticketlint.settings import LintSettings

logger = logging.getLogger(__name__)


def run_lint(pr: PullRequest, settings: LintSettings, tracker: IssueTracker, host: CodeHost) -> LintResult:
    """Lint ``pr`` and return the outcome.

    Policy violations are reported as comments and collected in
    ``LintResult.failures``; deciding whether they fail the workflow is up to
    the caller. Tracker and code-host transport errors propagate.
    """
    policy = settings.policy()

    if not pr.head_ref and not pr.base_ref:
        host.add_comment(pr.number, comments.missing_branches_comment())
        return LintResult(failures=("Unable to get the head and base branch",))

    logger.info("Pull request -> %s", pr.html_url or f"{pr.owner}/{pr.repo}#{pr.number}")
    logger.info("Base branch -> %s", pr.base_ref)
    logger.info("Head branch -> %s", pr.head_ref)

    if should_skip_branch(pr.head_ref, policy.ignore_pattern):
        return LintResult(skipped=True)

    keys = extract_keys(pr.head_ref)
    if not keys:
        logger.info("No issue key in branch name, falling back to PR title")
        keys = extract_keys(pr.title)
    key = canonical_key(keys)
    if key is None:
        host.add_comment(pr.number, comments.no_key_comment(pr.head_ref))
        return LintResult(failures=("Jira issue key is missing in your branch name and PR title.",))

    logger.info("Jira key -> %s", key)
    try:
        details = tracker.get_issue(str(key))
    except IssueNotFoundError:
        host.add_comment(pr.number, comments.no_key_comment(pr.head_ref))
        return LintResult(
            key=str(key),
            failures=(f"Invalid Jira key {key}. Please create a branch with a valid Jira issue key.",),
        )

    type_label = "" if details.type.name in settings.ignored_label_types else details.type.name
    labels = [name for name in (details.project.name, hotfix_label(pr.base_ref), type_label) if name]
    if labels:
        logger.info("Adding labels -> %s", labels)
        host.add_labels(pr.number, labels)

    if should_update_description(pr.body):
        logger.info("Updating PR description")
        host.update_description(
            pr.number, comments.description_block(pr.body, details, open_details=settings.details_open)
        )

        if not settings.skip_comments:
            logger.info("Adding comment for the PR title")
            host.add_comment(pr.number, comments.pr_title_comment(details.summary, pr.title))

            if is_oversized(pr.additions, policy.size_threshold):
                logger.info("Adding comment for huge PR")
                host.add_comment(pr.number, comments.huge_pr_comment(pr.additions, policy.size_threshold))

    failures: list[str] = []
    if not is_status_valid(policy, details):
        host.add_comment(pr.number, comments.invalid_status_comment(details.status, policy.allowed_statuses))
        failures.append(f"Jira issue {key} is not in an allowed status (found '{details.status}').")
    if not is_type_valid(policy, details):
        host.add_comment(pr.number, comments.invalid_type_comment(details.type.name, policy.allowed_types))
        failures.append(f"Jira issue {key} is not an allowed type (found '{details.type.name}').")
    if not is_project_valid(policy, details):
        host.add_comment(pr.number, comments.invalid_project_comment(details.project.key, policy.allowed_projects))
        failures.append(f"Jira issue {key} is not in an allowed project (found '{details.project.key}').")

    if not failures:
        logger.info("Jira issue %s passed all policies", key)
    return LintResult(key=str(key), details=details, failures=tuple(failures))
