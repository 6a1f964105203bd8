"""Command-line interface for worklog-sync."""

import asyncio
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from worklog_sync import __version__
from worklog_sync.clockify import ClockifyClient
from worklog_sync.config import Config
from worklog_sync.jira import JiraClient, JiraIssueResolver
from worklog_sync.sync import OutcomeStatus, SyncEngine, SyncPlan, SyncResult, SyncWindow
from worklog_sync.tempo import TempoClient
from worklog_sync.utils import get_logger, setup_logging

app = typer.Typer(help="Export Clockify time entries to Tempo worklogs")
console = Console()
logger = get_logger(__name__)

STATUS_STYLES = {
    OutcomeStatus.EXPORTED: "green",
    OutcomeStatus.PLANNED: "cyan",
    OutcomeStatus.SKIPPED: "yellow",
    OutcomeStatus.FAILED: "red",
    OutcomeStatus.DELETED: "magenta",
}


async def _resolve_workspace(
    clockify: ClockifyClient, config: Config, default_workspace: str | None
) -> str:
    """Pick the configured workspace, else the user's default, else the first one.

    Raises:
        ValueError: If the user has no workspace at all.
    """
    if config.workspace_id:
        return config.workspace_id
    if default_workspace:
        return default_workspace

    workspaces = await clockify.list_workspaces()
    if not workspaces:
        raise ValueError("No Clockify workspace found for this user")
    logger.info(f"No default workspace, using '{workspaces[0].name}'")
    return workspaces[0].id


async def _run_upload(
    config: Config,
    days: int,
    cleanup_orphaned: bool,
    dry_run: bool,
) -> tuple[SyncPlan, SyncResult]:
    storage = config.storage
    tz = config.timezone

    async with ClockifyClient(
        storage=storage, rate_limiter=config.create_rate_limiter()
    ) as clockify, JiraClient(
        base_url=config.jira_base_url or "",
        user=config.jira_user or "",
        api_token=storage.get_token("jira") or "",
        rate_limiter=config.create_rate_limiter(),
    ) as jira:
        user = await clockify.get_current_user()
        workspace_id = await _resolve_workspace(clockify, config, user.default_workspace)

        running = await clockify.get_running_entry(workspace_id, user.id)
        if running is not None:
            console.print(
                "[yellow]⚠ A timer is currently running; it will not be uploaded "
                "until it is stopped.[/yellow]"
            )

        account_id = await jira.get_account_id()
        async with TempoClient(
            account_id=account_id,
            storage=storage,
            rate_limiter=config.create_rate_limiter(),
        ) as tempo:
            engine = SyncEngine(
                entry_source=clockify,
                worklog_store=tempo,
                issue_resolver=JiraIssueResolver(clockify, jira, workspace_id),
                author=jira,
                workspace_id=workspace_id,
                user_id=user.id,
                tz=tz,
            )
            plan = await engine.plan(SyncWindow.around(date.today(), days))
            result = await engine.execute(plan, cleanup_orphaned=cleanup_orphaned, dry_run=dry_run)
            return plan, result


def _print_results(plan: SyncPlan, result: SyncResult, cleanup_orphaned: bool) -> None:
    if result.outcomes:
        details = Table(title="Entries")
        details.add_column("Item", style="cyan")
        details.add_column("Date")
        details.add_column("Status")
        details.add_column("Detail")
        for outcome in result.outcomes:
            style = STATUS_STYLES[outcome.status]
            details.add_row(
                outcome.item_id,
                outcome.date,
                f"[{style}]{outcome.status.value}[/{style}]",
                outcome.detail or "",
            )
        console.print(details)
    elif not plan.to_export:
        console.print("[green]✓ All time entries are already up to date in Tempo[/green]")

    if plan.orphaned and not cleanup_orphaned:
        console.print(
            f"[yellow]{len(plan.orphaned)} Tempo worklog(s) have no Clockify link. "
            "Use --cleanup-orphaned to delete them.[/yellow]"
        )

    table = Table(title="Upload Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_row("Already synced", str(len(plan.already_synced)))
    table.add_row("Uploaded", str(result.succeeded))
    table.add_row("Skipped (unmapped)", str(result.skipped))
    table.add_row("Failed", str(result.failed))
    table.add_row("Orphaned", str(len(plan.orphaned)))
    table.add_row("Deleted", str(result.deleted))
    console.print(table)


@app.command()
def upload(
    days: Optional[int] = typer.Option(
        None,
        "--days",
        "-d",
        help="Days to look back and ahead of today. Defaults to the configured value (14).",
    ),
    cleanup_orphaned: bool = typer.Option(
        False,
        "--cleanup-orphaned",
        help="Delete Tempo worklogs without a Clockify link (use with caution).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be uploaded without creating or deleting worklogs.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.worklog-sync/",
    ),
) -> None:
    """Upload Clockify time entries to Tempo."""
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
    )

    logger.info(f"worklog-sync v{__version__}")

    config = Config(config_dir)
    if not config.is_configured():
        console.print("[yellow]worklog-sync is not fully configured.[/yellow]")
        console.print("Run: worklog-sync configure")
        raise typer.Exit(code=1)

    window_days = days if days is not None else config.days
    mode_str = "[bold cyan]DRY RUN[/bold cyan]" if dry_run else "[bold green]UPLOAD[/bold green]"
    console.print(f"Starting {mode_str} for the last and next {window_days} days...")
    if cleanup_orphaned:
        console.print("[yellow]⚠ Orphaned entry cleanup is enabled[/yellow]")

    try:
        plan, result = asyncio.run(_run_upload(config, window_days, cleanup_orphaned, dry_run))
    except httpx.HTTPError as e:
        logger.error(f"API request failed: {e}", exc_info=True)
        console.print(f"[red]Error: API request failed: {e}[/red]")
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"Upload failed: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    _print_results(plan, result, cleanup_orphaned)

    raise typer.Exit(code=0 if result.failed == 0 else 1)


@app.command()
def configure(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.worklog-sync/",
    ),
) -> None:
    """Store API tokens and Jira settings."""
    setup_logging(config_dir=config_dir)

    config = Config(config_dir)
    storage = config.storage

    console.print("[bold cyan]worklog-sync Configuration[/bold cyan]")
    console.print()

    storage.set_token("clockify", Prompt.ask("Enter your Clockify API key", password=True))
    config.update(
        jira_base_url=Prompt.ask(
            "Jira site URL (e.g. https://mycompany.atlassian.net)",
            default=config.jira_base_url,
        ),
        jira_user=Prompt.ask("Jira account email", default=config.jira_user),
    )
    storage.set_token("jira", Prompt.ask("Enter your Jira API token", password=True))
    storage.set_token("tempo", Prompt.ask("Enter your Tempo API token", password=True))
    config.update(
        timezone=Prompt.ask(
            "Timezone for worklog dates (IANA name, empty for system local)",
            default=config.get("timezone", ""),
        ),
    )

    console.print("[green]✓ Configuration saved[/green]")
    console.print("Run 'worklog-sync upload' to start uploading time entries.")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"worklog-sync v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
