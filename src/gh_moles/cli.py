"""Command-line interface for gh-moles."""

import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gh_moles import __version__
from gh_moles.config import MolesConfig, load_config
from gh_moles.config.preflight import run_all_checks
from gh_moles.console import console
from gh_moles.github import ApiError, ContextError
from gh_moles.runs import ValidationError, build_policy, run_cleanup

logger = logging.getLogger(__name__)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"gh-moles [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr; debug records only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise SystemExit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """gh-moles - GitHub CLI extension with tools for GitHub repositories.

    \b
    Install it with:
      gh extension install the78mole/gh-moles-extra
    Then use it as:
      gh moles <command>
    """
    _configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
def preflight() -> None:
    """Validate environment is ready (gh installed and authenticated)."""
    if not run_all_checks():
        raise SystemExit(1)


@main.group(invoke_without_command=True)
@click.pass_context
def run(ctx: click.Context) -> None:
    """Manage GitHub Actions workflow runs.

    Use subcommands: gh moles run cleanup
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@run.command()
@click.argument("keep_count", required=False)
@click.option(
    "--yes",
    "-y",
    "auto_confirm",
    is_flag=True,
    help="Skip confirmation prompt (auto-confirm deletion).",
)
@click.option(
    "--failed",
    "-f",
    "failed_only",
    is_flag=True,
    help="Delete all failed runs instead of keeping recent ones.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show which runs would be deleted without deleting them.",
)
def cleanup(
    keep_count: str | None, auto_confirm: bool, failed_only: bool, dry_run: bool
) -> None:
    """Delete old GitHub Actions workflow runs.

    Keeps only the KEEP_COUNT most recent runs (default: 20), or with
    --failed deletes every failed run instead.

    \b
    Examples:
      gh moles run cleanup           # Keep 20 most recent runs (with confirmation)
      gh moles run cleanup -y        # Keep 20 most recent runs (no confirmation)
      gh moles run cleanup 50        # Keep 50 most recent runs (with confirmation)
      gh moles run cleanup -y 50     # Keep 50 most recent runs (no confirmation)
      gh moles run cleanup --failed  # Delete all failed runs (with confirmation)
      gh moles run cleanup -y -f     # Delete all failed runs (no confirmation)
    """
    config = load_config()
    try:
        policy = build_policy(
            keep_count,
            failed_only=failed_only,
            auto_confirm=auto_confirm,
            dry_run=dry_run,
            **_policy_defaults(config),
        )
        run_cleanup(policy)
    except (ValidationError, ContextError) as e:
        _fail(str(e))
    except ApiError as e:
        logger.debug("Listing workflow runs failed", exc_info=True)
        _fail(f"failed to get workflow runs: {e}")


def _policy_defaults(config: MolesConfig) -> dict[str, int | float]:
    """Extract policy defaults from the merged configuration."""
    result: dict[str, int | float] = {}
    if config.keep_count is not None:
        result["default_keep_count"] = config.keep_count
    if config.batch_size is not None:
        result["batch_size"] = config.batch_size
    if config.batch_pause is not None:
        result["batch_pause"] = config.batch_pause
    return result
