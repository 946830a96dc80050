"""Deletion of old or failed workflow runs."""

import logging
import time
from collections.abc import Callable

from gh_moles.console import console
from gh_moles.github.api import ApiError, GhApi
from gh_moles.github.context import Repository, resolve_repository
from gh_moles.runs.lister import list_all_runs, runs_endpoint
from gh_moles.runs.models import (
    CleanupStatus,
    CleanupSummary,
    DeletionOutcome,
    DeletionPlan,
    PolicyMode,
)
from gh_moles.runs.selection import CleanupPolicy, select_runs

logger = logging.getLogger(__name__)

AFFIRMATIVE_RESPONSES = frozenset({"y", "yes"})

PromptFunc = Callable[[str], str]
SleepFunc = Callable[[float], None]


def is_affirmative(response: str | None) -> bool:
    """Return True only for "y" or "yes", ignoring case and surrounding blanks."""
    if response is None:
        return False
    return response.strip().lower() in AFFIRMATIVE_RESPONSES


def prompt_confirmation(message: str) -> str:
    """Read one line of input from the terminal; EOF counts as an empty answer."""
    try:
        return console.input(message)
    except EOFError:
        return ""


def confirm_deletion(plan: DeletionPlan, prompt: PromptFunc) -> bool:
    """Ask the user to confirm a deletion plan."""
    kind = (
        "failed workflow runs"
        if plan.mode is PolicyMode.FAILED_ONLY
        else "workflow runs"
    )
    console.print(
        f"[yellow]This will permanently delete {len(plan)} {kind}.[/yellow]"
    )
    return is_affirmative(prompt("Continue? (y/N): "))


def delete_runs(
    api: GhApi,
    repository: Repository,
    run_ids: tuple[int, ...] | list[int],
    batch_size: int,
    batch_pause: float,
    sleep: SleepFunc = time.sleep,
) -> list[DeletionOutcome]:
    """Delete runs one by one, pausing after every `batch_size` deletions.

    A failing delete is recorded and the loop moves on to the next run.
    """
    base = runs_endpoint(repository.owner, repository.name)
    outcomes: list[DeletionOutcome] = []

    for index, run_id in enumerate(run_ids, start=1):
        try:
            api.delete(f"{base}/{run_id}")
        except ApiError as e:
            logger.debug("Delete of run %d failed: %s", run_id, e.message)
            console.print(
                f"   Deleting run {run_id}... "
                "[red]✗ (failed or already deleted)[/red]"
            )
            outcomes.append(
                DeletionOutcome(run_id=run_id, succeeded=False, error=e.message)
            )
        else:
            console.print(f"   Deleting run {run_id}... [green]✓[/green]")
            outcomes.append(DeletionOutcome(run_id=run_id, succeeded=True))

        if index % batch_size == 0 and index < len(run_ids):
            sleep(batch_pause)

    return outcomes


def _print_summary(summary: CleanupSummary) -> None:
    console.print("\n[bold]Cleanup Summary:[/bold]")
    console.print(f"   [green]✓[/green] Successfully deleted: {summary.deleted} runs")
    if summary.failed:
        console.print(f"   [red]✗[/red] Failed to delete: {summary.failed} runs")
    if summary.kept is None:
        console.print("   Deleted all failed runs")
    else:
        console.print(f"   Remaining runs: {summary.kept} (newest)")
    console.print("\n[bold green]Cleanup completed![/bold green]")


def run_cleanup(
    policy: CleanupPolicy,
    api: GhApi | None = None,
    repository: Repository | None = None,
    prompt: PromptFunc = prompt_confirmation,
    sleep: SleepFunc = time.sleep,
) -> CleanupSummary:
    """Delete the workflow runs selected by `policy`.

    Validation, repository resolution and listing failures are raised before
    anything is deleted. Individual delete failures are only counted.

    Args:
        policy: Validated cleanup parameters.
        api: GitHub API handle; defaults to a gh-backed one.
        repository: Target repository; resolved from the working directory
            when omitted.
        prompt: Reads the confirmation answer.
        sleep: Pause between deletion batches.

    Raises:
        ValidationError: If the policy is out of range.
        ContextError: If the repository or credentials cannot be resolved.
        ApiError: If listing the runs fails.
    """
    policy.validate()

    console.print("[bold]GitHub Actions Run Cleanup[/bold]")
    if policy.failed_only:
        console.print("Deleting all failed runs...")
    else:
        console.print(f"Keeping the {policy.keep_count} most recent runs...")

    if repository is None:
        repository = resolve_repository()
    if api is None:
        api = GhApi()

    console.print(f"\n[dim]Analyzing workflow runs of {repository.full_name}...[/dim]")
    runs = list_all_runs(api, repository.owner, repository.name)
    plan = select_runs(runs, policy)
    kept = None if policy.failed_only else policy.keep_count

    if policy.failed_only:
        console.print(f"   Found {len(plan)} failed runs")
        if plan.empty:
            console.print("[green]No failed runs found - nothing to clean up[/green]")
            return CleanupSummary(CleanupStatus.NOTHING_TO_DO, total_runs=len(runs))
        console.print(f"Will delete all {len(plan)} failed runs")
    else:
        console.print(f"   Found {len(runs)} total runs")
        if plan.empty:
            console.print(
                f"[green]No cleanup needed - only {len(runs)} runs found "
                f"(keeping {policy.keep_count})[/green]"
            )
            return CleanupSummary(
                CleanupStatus.NOTHING_TO_DO, total_runs=len(runs), kept=kept
            )
        console.print(
            f"Will delete {len(plan)} old runs (keeping newest {policy.keep_count})"
        )

    if policy.dry_run:
        console.print(
            "\n[yellow]Dry run - the following runs would be deleted:[/yellow]"
        )
        for run_id in plan.run_ids:
            console.print(f"  - {run_id}")
        return CleanupSummary(
            CleanupStatus.DRY_RUN, total_runs=len(runs), selected=len(plan), kept=kept
        )

    console.print()
    if policy.auto_confirm:
        console.print("[dim]Auto-confirming deletion (--yes flag used)[/dim]")
    elif not confirm_deletion(plan, prompt):
        console.print("[yellow]Cleanup cancelled[/yellow]")
        return CleanupSummary(
            CleanupStatus.ABORTED, total_runs=len(runs), selected=len(plan), kept=kept
        )

    logger.info("Deleting %d runs from %s", len(plan), repository.full_name)
    console.print(
        "\n[bold]Deleting failed runs...[/bold]"
        if policy.failed_only
        else "\n[bold]Deleting old runs...[/bold]"
    )
    outcomes = delete_runs(
        api,
        repository,
        plan.run_ids,
        batch_size=policy.batch_size,
        batch_pause=policy.batch_pause,
        sleep=sleep,
    )

    summary = CleanupSummary(
        CleanupStatus.COMPLETED,
        total_runs=len(runs),
        selected=len(plan),
        kept=kept,
        outcomes=outcomes,
    )
    _print_summary(summary)
    return summary
