"""Tests for the generated description block and comments."""

from ticketlint.comments import (
    description_block,
    huge_pr_comment,
    invalid_project_comment,
    invalid_status_comment,
    invalid_type_comment,
    labels_for_display,
    no_key_comment,
    pr_title_comment,
    title_similarity,
)
from ticketlint.models import IssueDetails, IssueLabel, IssueType, Project
from ticketlint.policy import HIDDEN_MARKER, should_update_description


def _details(**kwargs) -> IssueDetails:
    defaults = {
        "key": "ABC-123",
        "summary": "Story title or summary",
        "url": "url",
        "status": "In Progress",
        "type": IssueType(name="feature", icon_url="feature-icon-url"),
        "project": Project(name="project", url="project-url", key="abc"),
        "estimate": 1,
        "labels": (IssueLabel(name="frontend", url="frontend-url"),),
    }
    defaults.update(kwargs)
    return IssueDetails(**defaults)


class TestDescriptionBlock:
    def test_contains_marker_and_details(self) -> None:
        details = _details()
        description = description_block("some_body", details)

        assert should_update_description(description) is False
        assert f"<!-- {HIDDEN_MARKER} -->" in description
        assert details.key in description
        assert "1" in description
        assert details.status in description
        assert "frontend" in description
        assert description.rstrip().endswith("some_body")

    def test_none_body(self) -> None:
        description = description_block(None, _details())
        assert "None" not in description

    def test_open_flag(self) -> None:
        assert "<details open>" in description_block("", _details(), open_details=True)
        assert "<details>" in description_block("", _details())

    def test_missing_estimate_shows_na(self) -> None:
        assert "<td>N/A</td>" in description_block("", _details(estimate="N/A"))
        assert "<td>N/A</td>" in description_block("", _details(estimate=""))

    def test_fields_inserted_verbatim(self) -> None:
        details = _details(summary="Don't show banner", status="Won't Do")
        description = description_block(None, details)
        assert f"<td>{details.summary}</td>" in description
        assert f"<td>{details.status}</td>" in description
        assert "&#x27;" not in description


class TestLabelsForDisplay:
    def test_markup_without_extra_spaces(self) -> None:
        labels = [IssueLabel(name="one", url="url-one"), IssueLabel(name="two", url="url-two")]
        assert labels_for_display(labels) == (
            '<a href="url-one" title="one">one</a>, <a href="url-two" title="two">two</a>'
        )

    def test_empty(self) -> None:
        assert labels_for_display([]) == "-"


def test_no_key_comment_includes_branch() -> None:
    assert "test_new_feature" in no_key_comment("test_new_feature")


def test_invalid_status_comment() -> None:
    body = invalid_status_comment("Assessment", ["In Progress", "In Test"])
    assert "Assessment" in body
    assert "In Progress, In Test" in body


def test_invalid_type_comment() -> None:
    body = invalid_type_comment("Epic", ["Story", "Bug"])
    assert "Epic" in body
    assert "Story, Bug" in body


def test_invalid_project_comment() -> None:
    body = invalid_project_comment("OPS", ["MOJO"])
    assert "OPS" in body
    assert "MOJO" in body


def test_huge_pr_comment() -> None:
    body = huge_pr_comment(1000, 800)
    assert "1000" in body
    assert "800" in body


class TestPrTitleComment:
    def test_identical_titles_approved(self) -> None:
        assert title_similarity("Fix login", "fix login") == 1.0
        assert "👍" in pr_title_comment("Fix login", "Fix login")

    def test_unrelated_titles(self) -> None:
        body = pr_title_comment("Add checkout flow", "zzzz")
        assert "quite different" in body
        assert "Add checkout flow" in body
        assert "zzzz" in body

    def test_titles_inserted_verbatim(self) -> None:
        body = pr_title_comment("Don't show banner", "Q&A page")
        assert "Don't show banner" in body
        assert "Q&A page" in body
