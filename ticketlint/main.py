"""ticketlint CLI — all commands."""

import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.table import Table

from ticketlint.keys import canonical_key, extract_keys
from ticketlint.lint import run_lint
from ticketlint.models import IssueKey
from ticketlint.policy import should_skip_branch
from ticketlint.providers.github import GitHubHost, pull_request_from_event
from ticketlint.providers.jira import JiraTracker
from ticketlint.settings import get_settings

app = typer.Typer(help="ticketlint: Jira issue linting for GitHub pull requests", no_args_is_help=True)

ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML config file (default: .ticketlint.toml in cwd)"),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar="TICKETLINT_LOG_LEVEL", help="DEBUG, INFO, WARNING or ERROR"),
    ] = "INFO",
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("lint")
def lint_cmd(
    event: Annotated[
        Path | None,
        typer.Option("--event", "-e", envvar="GITHUB_EVENT_PATH", help="Path to the pull_request event JSON"),
    ] = None,
    config: ConfigOpt = None,
) -> None:
    """Lint the pull request described by the workflow event."""
    if event is None or not event.exists():
        typer.echo("error: no event payload. Pass --event or run inside GitHub Actions.", err=True)
        raise typer.Exit(1)

    settings = get_settings(config, require_jira=True, require_github=True)
    pr = pull_request_from_event(json.loads(event.read_text()))
    tracker = JiraTracker(settings)
    host = GitHubHost(settings, pr.owner, pr.repo)

    result = run_lint(pr, settings, tracker, host)

    if result.skipped:
        rprint(f"[dim]Branch '{pr.head_ref}' skipped.[/dim]")
        return
    if result.ok:
        rprint(f"[green]✓[/green] {result.key} passed all checks")
        return

    # Workflow command annotations; see GitHub's "Workflow commands" docs.
    level = "error" if settings.fail_on_error else "warning"
    for failure in result.failures:
        typer.echo(f"::{level}::{failure}")
    if settings.fail_on_error:
        raise typer.Exit(1)


@app.command("keys")
def keys_cmd(
    text: Annotated[str, typer.Argument(help="Branch name, PR title or commit message")],
) -> None:
    """Show the issue keys found in TEXT and the one lint would use."""
    keys = extract_keys(text)
    if not keys:
        rprint("[yellow]No issue key found.[/yellow]")
        raise typer.Exit(1)

    chosen = canonical_key(keys)
    table = Table(title="Issue Keys")
    table.add_column("#", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Used")
    for position, key in enumerate(keys, start=1):
        table.add_row(str(position), str(key), "✓" if position == len(keys) else "")

    rprint(table)
    rprint(f"Canonical key: [bold]{chosen}[/bold]")


@app.command("check-branch")
def check_branch(
    branch: Annotated[str, typer.Argument(help="Head branch name")],
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", "-p", help="Ignore pattern (default: skip_branches from config)"),
    ] = None,
    config: ConfigOpt = None,
) -> None:
    """Print 'skip' if lint would ignore BRANCH, otherwise 'lint'."""
    if pattern is None:
        pattern = get_settings(config).skip_branches
    typer.echo("skip" if should_skip_branch(branch, pattern) else "lint")


@app.command("show-issue")
def show_issue(
    key: Annotated[str, typer.Argument(help="Issue key (e.g. MOJO-5611) or a branch name containing one")],
    config: ConfigOpt = None,
) -> None:
    """Fetch an issue from Jira and show what lint would see."""
    try:
        issue_key = IssueKey.parse(key)
    except ValueError:
        issue_key = canonical_key(extract_keys(key))
    if issue_key is None:
        rprint(f"[red]No issue key found in '{key}'.[/red]")
        raise typer.Exit(1)

    settings = get_settings(config, require_jira=True)
    details = JiraTracker(settings).get_issue(str(issue_key))
    policy = settings.policy()

    table = Table(title=f"{details.key}: {details.summary}")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Status", details.status)
    table.add_row("Type", details.type.name)
    table.add_row("Project", f"{details.project.name} ({details.project.key})")
    table.add_row("Points", str(details.estimate))
    table.add_row("Labels", ", ".join(label.name for label in details.labels) or "none")
    table.add_row("URL", details.url)
    if policy.validate_status:
        table.add_row("Allowed statuses", ", ".join(policy.allowed_statuses))

    rprint(table)


@app.command("config-show")
def config_show(config: ConfigOpt = None) -> None:
    """Show resolved configuration (masks credentials)."""
    settings = get_settings(config)

    def mask(val: str | None) -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    def show(val: object) -> str:
        if val is None or val == []:
            return "[dim](not set)[/dim]"
        if isinstance(val, list):
            return ", ".join(val)
        return str(val)

    table = Table(title="ticketlint Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        if name in ("jira_token", "github_token"):
            secret = getattr(settings, name)
            table.add_row(name, mask(secret.get_secret_value() if secret else None))
        else:
            table.add_row(name, show(value))

    table.add_row("GITHUB_EVENT_PATH", os.environ.get("GITHUB_EVENT_PATH") or "[dim](not set)[/dim]")
    rprint(table)
