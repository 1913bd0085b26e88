"""Pure policy decisions: which branches to skip, when to rewrite the PR body,
whether an issue passes the configured allow-lists, and when a PR is too big.

Nothing here does I/O or keeps state; lint.py sequences these calls.
"""

import logging
import math
import re
from collections.abc import Collection

from ticketlint.models import DEFAULT_SIZE_THRESHOLD, IssueDetails, PolicyConfig

logger = logging.getLogger(__name__)

# Embedded in the generated description block so repeated runs leave it alone.
HIDDEN_MARKER = "added_by_jira_lint"

# Branches opened by bots; matched as a prefix.
BOT_BRANCH_PREFIXES = ("dependabot", "all-contributors")

# Trunk branches; matched exactly.
DEFAULT_BRANCHES = ("main", "master", "production", "gh-pages")

HOTFIX_PRE_PROD_LABEL = "HOTFIX-PRE-PROD"
HOTFIX_PROD_LABEL = "HOTFIX-PROD"


def should_skip_branch(branch: str, ignore_pattern: str | None = None) -> bool:
    """Return True for branches the linter should leave alone.

    Bot branches and default branches are always skipped. ``ignore_pattern``
    is a regular expression searched anywhere in the branch name; anchor it
    with ``^...$`` for an exact match. An empty pattern never matches.

    >>> should_skip_branch("dependabot/npm_and_yarn/lodash-4.17.21")
    True
    >>> should_skip_branch("feature/add-dependabot-config")
    False
    """
    if branch.startswith(BOT_BRANCH_PREFIXES):
        logger.info("Branch %r looks like a bot branch, skipping", branch)
        return True

    if branch in DEFAULT_BRANCHES:
        logger.info("Ignoring check for default branch %r", branch)
        return True

    if ignore_pattern and re.search(ignore_pattern, branch):
        logger.info("Branch %r matches ignore pattern %r, skipping", branch, ignore_pattern)
        return True

    logger.debug("Branch %r does not match ignore pattern %r", branch, ignore_pattern)
    return False


def should_update_description(body: str | None) -> bool:
    """Return False when ``body`` already carries the generated details block."""
    if isinstance(body, str) and HIDDEN_MARKER in body:
        logger.info("Marker found, PR description will not be updated")
        return False
    return True


def is_allowed(enabled: bool, allowed: Collection[str], value: str) -> bool:
    """Allow-list check. Disabled validation always passes; matching is exact."""
    if not enabled:
        return True
    return value in allowed


def is_status_valid(config: PolicyConfig, details: IssueDetails) -> bool:
    if not config.validate_status:
        logger.info("Skipping Jira issue status validation as it is disabled")
    return is_allowed(config.validate_status, config.allowed_statuses, details.status)


def is_type_valid(config: PolicyConfig, details: IssueDetails) -> bool:
    if not config.validate_type:
        logger.info("Skipping Jira issue type validation as it is disabled")
    return is_allowed(config.validate_type, config.allowed_types, details.type.name)


def is_project_valid(config: PolicyConfig, details: IssueDetails) -> bool:
    if not config.validate_project:
        logger.info("Skipping Jira project validation as it is disabled")
    return is_allowed(config.validate_project, config.allowed_projects, details.project.key)


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not math.isnan(value)


def is_oversized(additions: object, threshold: object = DEFAULT_SIZE_THRESHOLD) -> bool:
    """True when ``additions`` exceeds ``threshold``.

    A missing or malformed size on either side never blocks a workflow.
    """
    if not (_is_number(additions) and _is_number(threshold)):
        return False
    return additions > threshold  # type: ignore[operator]


def hotfix_label(base_branch: str) -> str:
    """Label for PRs targeting a release or production branch, or "" for anything else."""
    if base_branch.startswith("release/v"):
        return HOTFIX_PRE_PROD_LABEL
    if base_branch.startswith("production"):
        return HOTFIX_PROD_LABEL
    return ""
