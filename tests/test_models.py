"""Tests for ticketlint.models."""

import pytest
from pydantic import ValidationError

from ticketlint.models import DEFAULT_SIZE_THRESHOLD, IssueDetails, IssueKey, LintResult, PolicyConfig, PullRequest


class TestIssueKey:
    def test_str_is_prefix_dash_number(self) -> None:
        assert str(IssueKey(prefix="MOJO", number="5611")) == "MOJO-5611"

    def test_prefix_uppercased(self) -> None:
        assert str(IssueKey(prefix="mojo", number="1")) == "MOJO-1"

    def test_parse(self) -> None:
        assert IssueKey.parse(" es-172 ") == IssueKey(prefix="ES", number="172")

    @pytest.mark.parametrize("text", ["", "MOJO", "MOJO-", "-12", "ABCDEFGHIJK-1", "A-1 B-2", "A_B-1"])
    def test_parse_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            IssueKey.parse(text)

    def test_rejects_empty_parts(self) -> None:
        with pytest.raises(ValidationError):
            IssueKey(prefix="", number="1")
        with pytest.raises(ValidationError):
            IssueKey(prefix="A", number="")

    def test_frozen(self) -> None:
        key = IssueKey(prefix="A", number="1")
        with pytest.raises(ValidationError):
            key.number = "2"  # type: ignore[misc]


def test_issue_details_frozen(issue_details: IssueDetails) -> None:
    with pytest.raises(ValidationError):
        issue_details.status = "Done"  # type: ignore[misc]


def test_policy_defaults() -> None:
    policy = PolicyConfig()
    assert policy.ignore_pattern is None
    assert not (policy.validate_status or policy.validate_type or policy.validate_project)
    assert policy.size_threshold == DEFAULT_SIZE_THRESHOLD


def test_pull_request_defaults() -> None:
    pr = PullRequest(owner="acme", repo="shop", number=1)
    assert pr.body is None
    assert pr.additions is None
    assert pr.head_ref == ""


def test_lint_result_ok() -> None:
    assert LintResult().ok
    assert not LintResult(failures=("bad status",)).ok
