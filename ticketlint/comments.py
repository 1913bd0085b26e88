"""HTML snippets posted to the pull request: description block and comments."""

import re
from collections.abc import Sequence
from difflib import SequenceMatcher

from ticketlint.models import IssueDetails, IssueLabel
from ticketlint.policy import HIDDEN_MARKER

_GUIDE_URL = "https://www.atlassian.com/blog/git/written-unwritten-guide-pull-requests"
_GUIDE_LINK = f'Check out this <a href="{_GUIDE_URL}">guide</a> to learn more about PR best-practices.'


def labels_for_display(labels: Sequence[IssueLabel]) -> str:
    """Comma-separated label links on one line, or "-" when there are none."""
    if not labels:
        return "-"
    markup = ", ".join(f'<a href="{label.url}" title="{label.name}">{label.name}</a>' for label in labels)
    return re.sub(r"\s+", " ", markup)


def description_block(body: str | None, details: IssueDetails, open_details: bool = False) -> str:
    """Prepend the issue details table (and the hidden marker) to the PR body."""
    display_key = details.key.upper()
    estimate = details.estimate if details.estimate not in ("", None) else "N/A"
    lines = [
        "",
        f"<!-- {HIDDEN_MARKER} -->",
        f"<details{' open' if open_details else ''}>",
        f'  <summary><a href="{details.url}" title="{display_key}" target="_blank">{display_key}</a></summary>',
        "  <br />",
        "  <table>",
        f"    <tr><th>Summary</th><td>{details.summary}</td></tr>",
        f'    <tr><th>Type</th><td><img alt="{details.type.name}" src="{details.type.icon_url}" />'
        f" {details.type.name}</td></tr>",
        f"    <tr><th>Status</th><td>{details.status}</td></tr>",
        f"    <tr><th>Points</th><td>{estimate}</td></tr>",
        f"    <tr><th>Labels</th><td>{labels_for_display(details.labels)}</td></tr>",
        "  </table>",
        "</details>",
        "",
        body or "",
    ]
    return "\n".join(lines)


def no_key_comment(branch: str) -> str:
    return f"""A JIRA Issue ID is missing from your branch name or PR title! 🦄

Your branch: `{branch}`

Please either name your branch to contain a valid Jira ID, or include one in your PR title.

Valid sample branch names:

- `feature/shiny-new-feature--mojo-10`
- `chore/changelogUpdate_mojo-123`
- `bugfix/fix-some-strange-bug_GAL-2345`"""


def missing_branches_comment() -> str:
    return "ticketlint is unable to determine the head and base branch"


def _violation_table(
    headline: str,
    detected_label: str,
    detected: str,
    allowed_label: str,
    allowed: Sequence[str],
    hint: str,
) -> str:
    return f"""<p>:broken_heart: {headline} :broken_heart: </p>
<table>
  <tr>
    <th>{detected_label}</th>
    <td>{detected}</td>
    <td>:x:</td>
  </tr>
  <tr>
    <th>{allowed_label}</th>
    <td>{", ".join(allowed)}</td>
    <td>:heavy_check_mark:</td>
  </tr>
</table>
<p>{hint}</p>
"""


def invalid_status_comment(status: str, allowed: Sequence[str]) -> str:
    return _violation_table(
        "The detected issue is not in one of the allowed statuses",
        "Detected Status",
        status,
        "Allowed Statuses",
        allowed,
        "Please ensure your jira story is in one of the allowed statuses",
    )


def invalid_type_comment(issue_type: str, allowed: Sequence[str]) -> str:
    return _violation_table(
        "The detected issue is not an allowed type",
        "Detected Issue Type",
        issue_type,
        "Allowed Issue Types",
        allowed,
        "Please ensure your jira ticket is created as the right type.",
    )


def invalid_project_comment(project: str, allowed: Sequence[str]) -> str:
    return _violation_table(
        "The detected issue is not in one of the allowed projects",
        "Detected Project",
        project,
        "Allowed Projects",
        allowed,
        "Please ensure your jira ticket is created in the right project",
    )


def huge_pr_comment(additions: int, threshold: int) -> str:
    return f"""<p>This PR is too huge for one to review :broken_heart: </p>
<table>
  <tr>
    <th>Additions</th>
    <td>{additions} :no_good_woman: </td>
  </tr>
  <tr>
    <th>Expected</th>
    <td>:arrow_down: {threshold}</td>
  </tr>
</table>
<p>Consider breaking it down into multiple small PRs.</p>
<p>{_GUIDE_LINK}</p>
"""


def title_similarity(first: str, second: str) -> float:
    """Similarity ratio in [0, 1], case-insensitive."""
    return SequenceMatcher(None, first.lower().strip(), second.lower().strip()).ratio()


def pr_title_comment(story_title: str, pr_title: str) -> str:
    """Nudge the author when the PR title drifts from the issue summary."""
    ratio = title_similarity(story_title, pr_title)
    titles = f"""<table>
  <tr>
    <th>Story Title</th>
    <td>{story_title}</td>
  </tr>
  <tr>
    <th>PR Title</th>
    <td>{pr_title}</td>
  </tr>
</table>"""

    if ratio < 0.2:
        return f"""<p>Knock Knock! 🔍</p>
<p>
  Just thought I'd let you know that your <em>PR title</em> and <em>story title</em> look
  <strong>quite different</strong>. PR titles that closely resemble the story title make it easier
  for reviewers to understand the context of the PR.
</p>
{titles}
<p>{_GUIDE_LINK}</p>
"""
    if ratio <= 0.4:
        return f"""<p>Let's make that PR title a 💯 shall we? 💪</p>
<p>
  Your <em>PR title</em> and <em>story title</em> look <strong>slightly different</strong>.
  Just checking in to know if it was intentional!
</p>
{titles}
<p>{_GUIDE_LINK}</p>
"""
    return "<p>I'm a bot and I 👍 this PR title. 🤖</p>"
