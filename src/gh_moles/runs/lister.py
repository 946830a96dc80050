"""Listing of every workflow run of a repository."""

import logging

from gh_moles.github.api import GhApi, ParseError
from gh_moles.runs.models import WorkflowRun

logger = logging.getLogger(__name__)

# Maximum page size accepted by the REST API.
PAGE_SIZE = 100


def runs_endpoint(owner: str, name: str) -> str:
    """Return the REST path of the workflow runs collection."""
    return f"repos/{owner}/{name}/actions/runs"


def _parse_page(endpoint: str, data: object) -> tuple[int, list[WorkflowRun]]:
    """Extract `total_count` and the runs from one listing page."""
    if not isinstance(data, dict):
        raise ParseError(endpoint, "expected a JSON object")
    try:
        total_count = int(data["total_count"])
        entries = data["workflow_runs"]
        if not isinstance(entries, list):
            raise TypeError("workflow_runs is not a list")
        runs = [WorkflowRun.from_api(entry) for entry in entries]
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(endpoint, f"unexpected listing format: {e}") from e
    return total_count, runs


def _warn_if_unordered(runs: list[WorkflowRun]) -> None:
    """Log a warning when creation timestamps contradict newest-first order."""
    stamps = [run.created_at for run in runs if run.created_at]
    # ISO8601 UTC timestamps sort lexicographically
    if any(older > newer for newer, older in zip(stamps, stamps[1:])):
        logger.warning(
            "Workflow runs are not listed newest first; keep-count selection "
            "relies on that order"
        )


def list_all_runs(
    api: GhApi, owner: str, name: str, page_size: int = PAGE_SIZE
) -> list[WorkflowRun]:
    """Fetch every workflow run of a repository, newest first.

    Pages are requested until one comes back short or the accumulated count
    reaches the `total_count` reported by the first page. Any failing page
    aborts the whole listing; a partial list is never returned.

    Raises:
        ApiError: If a page request fails.
        ParseError: If a page is not a valid listing document.
    """
    base = runs_endpoint(owner, name)
    runs: list[WorkflowRun] = []
    total_count: int | None = None
    page = 1

    while True:
        endpoint = f"{base}?per_page={page_size}&page={page}"
        total, page_runs = _parse_page(endpoint, api.get_json(endpoint))
        if total_count is None:
            total_count = total
        runs.extend(page_runs)
        logger.debug(
            "Page %d: %d runs (%d/%d)", page, len(page_runs), len(runs), total_count
        )

        if len(page_runs) < page_size or len(runs) >= total_count:
            break
        page += 1

    _warn_if_unordered(runs)
    return runs
