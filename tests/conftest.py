"""Shared test fixtures."""

import pytest

from ticketlint.models import IssueDetails, IssueLabel, IssueType, PolicyConfig, Project, PullRequest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own TICKETLINT_* variables out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("TICKETLINT_"):
            monkeypatch.delenv(name)


@pytest.fixture
def issue_details() -> IssueDetails:
    return IssueDetails(
        key="MOJO-5611",
        summary="Add new feature to the checkout flow",
        url="https://example.atlassian.net/browse/MOJO-5611",
        status="In Progress",
        type=IssueType(name="Story", icon_url="https://example.atlassian.net/icons/story.svg"),
        project=Project(name="Mojo", url="https://example.atlassian.net/browse/MOJO", key="MOJO"),
        estimate=3,
        labels=(
            IssueLabel(name="frontend", url="https://example.atlassian.net/issues?jql=frontend"),
            IssueLabel(name="checkout", url="https://example.atlassian.net/issues?jql=checkout"),
        ),
    )


@pytest.fixture
def pull_request() -> PullRequest:
    return PullRequest(
        owner="acme",
        repo="shop",
        number=17,
        title="Add new feature to the checkout flow",
        body="Some description",
        base_ref="develop",
        head_ref="feature/newFeature--mojo-5611",
        additions=120,
        html_url="https://github.com/acme/shop/pull/17",
    )


@pytest.fixture
def strict_policy() -> PolicyConfig:
    return PolicyConfig(
        validate_status=True,
        allowed_statuses=("In Progress", "In Test"),
        validate_type=True,
        allowed_types=("Story", "Bug"),
        validate_project=True,
        allowed_projects=("MOJO",),
        size_threshold=500,
    )
