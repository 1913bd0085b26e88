"""Shared pydantic models — the contract between providers, policies and lint.py."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

_KEY_RE = re.compile(r"([A-Z0-9]{1,10})-([0-9]+)")

# Additions above which a pull request is considered too large to review.
DEFAULT_SIZE_THRESHOLD = 800


class IssueKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefix: str  # project key, e.g. MOJO
    number: str  # digits only, kept as text to preserve leading zeros

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        value = value.upper()
        if not re.fullmatch(r"[A-Z0-9]{1,10}", value):
            raise ValueError(f"invalid issue key prefix: {value!r}")
        return value

    @field_validator("number")
    @classmethod
    def _check_number(cls, value: str) -> str:
        if not re.fullmatch(r"[0-9]+", value):
            raise ValueError(f"invalid issue number: {value!r}")
        return value

    @classmethod
    def parse(cls, text: str) -> "IssueKey":
        """Parse a single key such as ``mojo-5611``. Raises ValueError otherwise."""
        match = _KEY_RE.fullmatch(text.strip().upper())
        if not match:
            raise ValueError(f"not an issue key: {text!r}")
        return cls(prefix=match.group(1), number=match.group(2))

    def __str__(self) -> str:
        return f"{self.prefix}-{self.number}"


class IssueType(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon_url: str = ""


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    key: str


class IssueLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class IssueDetails(BaseModel):
    """Read-only snapshot of a tracker issue, as displayed on the pull request."""

    model_config = ConfigDict(frozen=True)

    key: str
    summary: str
    url: str
    status: str
    type: IssueType
    project: Project
    estimate: int | float | str = "N/A"  # story points, "N/A" when unset
    labels: tuple[IssueLabel, ...] = ()


class PolicyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    ignore_pattern: str | None = None
    validate_status: bool = False
    allowed_statuses: tuple[str, ...] = ()
    validate_type: bool = False
    allowed_types: tuple[str, ...] = ()
    validate_project: bool = False
    allowed_projects: tuple[str, ...] = ()
    size_threshold: int = DEFAULT_SIZE_THRESHOLD


class PullRequest(BaseModel):
    """The slice of a pull_request workflow event the linter needs."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int
    title: str = ""
    body: str | None = None
    base_ref: str = ""
    head_ref: str = ""
    additions: int | None = None
    html_url: str | None = None


class LintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    skipped: bool = False
    key: str | None = None
    details: IssueDetails | None = None
    failures: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures
