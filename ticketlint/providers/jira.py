"""Jira Cloud REST API v3 issue tracker."""

from urllib.parse import quote

import httpx

from ticketlint.models import IssueDetails, IssueLabel, IssueType, Project
from ticketlint.providers.base import IssueNotFoundError, IssueTracker
from ticketlint.settings import LintSettings

API_PATH = "/rest/api/3"

_FIELDS = ("project", "summary", "issuetype", "labels", "status")


class JiraTracker(IssueTracker):
    def __init__(self, settings: LintSettings) -> None:
        if not (settings.jira_base_url and settings.jira_user and settings.jira_token):
            raise RuntimeError("jira_base_url, jira_user and jira_token are required")
        self._base_url = settings.jira_base_url
        self._auth = (settings.jira_user, settings.jira_token.get_secret_value())
        self._estimate_field = settings.jira_estimate_field

    def _get(self, path: str, params: dict | None = None) -> dict:
        response = httpx.get(
            f"{self._base_url}{API_PATH}{path}",
            auth=self._auth,
            headers={"Accept": "application/json"},
            params=params or {},
            timeout=30,
        )
        if response.status_code == 401:
            raise RuntimeError("Jira API returned 401. Check TICKETLINT_JIRA_USER and TICKETLINT_JIRA_TOKEN.")
        if response.status_code == 404:
            raise IssueNotFoundError(f"Jira resource '{path}' not found")
        response.raise_for_status()
        return response.json()

    def _label_url(self, project_key: str, label: str) -> str:
        jql = f"project = {project_key} AND labels = {label} ORDER BY created DESC"
        return f"{self._base_url}/issues?jql={quote(jql, safe='')}"

    def _details_from_node(self, key: str, node: dict) -> IssueDetails:
        fields = node["fields"]
        project = fields["project"]
        issue_type = fields["issuetype"]
        estimate = fields.get(self._estimate_field)
        if isinstance(estimate, bool) or not isinstance(estimate, int | float | str):
            estimate = "N/A"
        return IssueDetails(
            key=key,
            summary=fields.get("summary") or "",
            url=f"{self._base_url}/browse/{key}",
            status=fields["status"]["name"],
            type=IssueType(name=issue_type["name"], icon_url=issue_type.get("iconUrl", "")),
            project=Project(
                name=project["name"],
                url=f"{self._base_url}/browse/{project['key']}",
                key=project["key"],
            ),
            estimate=estimate,
            labels=tuple(
                IssueLabel(name=label, url=self._label_url(project["key"], label))
                for label in fields.get("labels") or []
            ),
        )

    def get_issue(self, key: str) -> IssueDetails:
        try:
            node = self._get(f"/issue/{key}", params={"fields": ",".join((*_FIELDS, self._estimate_field))})
        except IssueNotFoundError:
            raise IssueNotFoundError(f"Issue '{key}' not found in Jira") from None
        return self._details_from_node(key, node)
