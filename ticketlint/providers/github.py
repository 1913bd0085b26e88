"""GitHub REST API v3 code host: labels, PR description and comments."""

import subprocess
from collections.abc import Sequence

import httpx

from ticketlint.models import PullRequest
from ticketlint.providers.base import CodeHost
from ticketlint.settings import LintSettings


def pull_request_from_event(payload: dict) -> PullRequest:
    """Build a PullRequest from a pull_request / pull_request_target event payload."""
    repository = payload.get("repository")
    if not repository:
        raise RuntimeError("Missing 'repository' from GitHub event payload.")
    node = payload.get("pull_request")
    if not node:
        raise RuntimeError("Missing 'pull_request' from GitHub event payload. Run ticketlint on pull_request events.")
    return PullRequest(
        owner=repository["owner"]["login"],
        repo=repository["name"],
        number=node.get("number", 0),
        title=node.get("title") or "",
        body=node.get("body"),
        base_ref=(node.get("base") or {}).get("ref", ""),
        head_ref=(node.get("head") or {}).get("ref", ""),
        additions=node.get("additions"),
        html_url=node.get("html_url"),
    )


class GitHubHost(CodeHost):
    def __init__(self, settings: LintSettings, owner: str, repo: str) -> None:
        self._token = self._resolve_token(settings)
        self._base_url = settings.github_api_url
        self._owner = owner
        self._repo = repo
        self._headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _resolve_token(self, settings: LintSettings) -> str:
        if settings.github_auth == "gh-cli":
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
            )
            if result.returncode != 0:
                raise RuntimeError("gh auth token failed. Run: gh auth login")
            return result.stdout.strip()
        if settings.github_token:
            return settings.github_token.get_secret_value()
        raise RuntimeError("No GitHub credentials. Set TICKETLINT_GITHUB_TOKEN.")

    def _send(self, method: str, path: str, body: dict) -> dict | list:
        response = httpx.request(
            method,
            f"{self._base_url}/repos/{self._owner}/{self._repo}{path}",
            headers=self._headers,
            json=body,
            timeout=30,
        )
        if response.status_code == 401:
            raise RuntimeError("GitHub API returned 401. Check TICKETLINT_GITHUB_TOKEN.")
        response.raise_for_status()
        return response.json()

    def add_labels(self, number: int, labels: Sequence[str]) -> None:
        self._send("POST", f"/issues/{number}/labels", {"labels": list(labels)})

    def update_description(self, number: int, body: str) -> None:
        self._send("PATCH", f"/pulls/{number}", {"body": body})

    def add_comment(self, number: int, body: str) -> None:
        self._send("POST", f"/issues/{number}/comments", {"body": body})
