"""Settings resolution: environment / .env first, then .ticketlint.toml, then defaults."""

import re
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

import tomlkit
import typer
from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, PydanticBaseSettingsSource, SettingsConfigDict

from ticketlint.models import DEFAULT_SIZE_THRESHOLD, PolicyConfig

CONFIG_PATH = Path(".ticketlint.toml")

# Lists arrive as "a, b, c" from workflow inputs; the validators below split them.
StrList = Annotated[list[str], NoDecode]


class LintSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TICKETLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Jira
    jira_base_url: str | None = None
    jira_user: str | None = None
    jira_token: SecretStr | None = None
    jira_estimate_field: str = "customfield_10016"  # story points

    # GitHub
    github_token: SecretStr | None = None
    github_auth: str = "token"  # "token" | "gh-cli"
    github_api_url: str = "https://api.github.com"

    # Behaviour
    skip_branches: str | None = None  # regex, searched in the head branch name
    skip_comments: bool = False
    pr_threshold: int = DEFAULT_SIZE_THRESHOLD
    fail_on_error: bool = True  # False downgrades failures to warnings
    details_open: bool = False
    ignored_label_types: StrList = []

    # Issue policies
    validate_issue_status: bool = False
    allowed_issue_statuses: StrList = []
    validate_type: bool = False
    allowed_types: StrList = []
    validate_project: bool = False
    allowed_projects: StrList = []

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Keyword arguments carry the TOML file values, so the environment wins over them.
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("jira_base_url", "github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        return value.rstrip("/") if value else value

    @field_validator("ignored_label_types", "allowed_issue_statuses", "allowed_types", "allowed_projects", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("pr_threshold", mode="before")
    @classmethod
    def _threshold_or_default(cls, value: Any) -> Any:
        # Blank, unparsable and zero thresholds all mean "use the default".
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_SIZE_THRESHOLD
        if isinstance(value, str):
            try:
                value = int(value)
            except ValueError:
                return DEFAULT_SIZE_THRESHOLD
        if value == 0:
            return DEFAULT_SIZE_THRESHOLD
        return value

    @field_validator("skip_branches")
    @classmethod
    def _compile_pattern(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"skip_branches is not a valid regular expression: {exc}") from exc
        return value

    def policy(self) -> PolicyConfig:
        return PolicyConfig(
            ignore_pattern=self.skip_branches,
            validate_status=self.validate_issue_status,
            allowed_statuses=tuple(self.allowed_issue_statuses),
            validate_type=self.validate_type,
            allowed_types=tuple(self.allowed_types),
            validate_project=self.validate_project,
            allowed_projects=tuple(self.allowed_projects),
            size_threshold=self.pr_threshold,
        )


@lru_cache(maxsize=4)
def _load_toml(path: Path) -> dict[str, Any]:
    """Load the TOML config as plain values, returning an empty dict if missing.

    Keys may use dashes like workflow inputs (``skip-branches``).
    """
    if not path.exists():
        return {}
    with path.open() as fh:
        doc = tomlkit.load(fh)
    return {key.replace("-", "_"): value for key, value in doc.unwrap().items()}


def get_settings(
    config_path: Path | None = None,
    *,
    require_jira: bool = False,
    require_github: bool = False,
) -> LintSettings:
    """Resolve settings and validate the credentials the caller needs.

    Precedence (highest to lowest):
    1. TICKETLINT_* environment variables
    2. .env in cwd
    3. config file (--config, default .ticketlint.toml in cwd)
    4. built-in defaults
    """
    path = config_path or CONFIG_PATH
    file_values = _load_toml(path)
    unknown = sorted(set(file_values) - set(LintSettings.model_fields))
    if unknown:
        typer.echo(f"Ignoring unknown keys in {path}: {', '.join(unknown)}", err=True)

    try:
        settings = LintSettings(**{k: v for k, v in file_values.items() if k in LintSettings.model_fields})
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            typer.echo(f"Invalid configuration for {field}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    if require_jira:
        missing = [
            name
            for name, value in (
                ("jira_base_url", settings.jira_base_url),
                ("jira_user", settings.jira_user),
                ("jira_token", settings.jira_token),
            )
            if not value
        ]
        if missing:
            env_names = ", ".join(f"TICKETLINT_{name.upper()}" for name in missing)
            typer.echo(f"Missing Jira configuration. Set {env_names} or the matching keys in {path}")
            raise typer.Exit(1)

    if require_github and settings.github_auth == "token" and not settings.github_token:
        typer.echo(
            f"Missing GitHub credentials. Set TICKETLINT_GITHUB_TOKEN or github_token in {path}, "
            'or set github_auth = "gh-cli" to use the gh CLI.'
        )
        raise typer.Exit(1)

    return settings
