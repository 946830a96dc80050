"""Workflow run data models."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self

FAILURE_CONCLUSION = "failure"


@dataclass(frozen=True)
class WorkflowRun:
    """Immutable record of one workflow run, as listed by the API."""

    id: int
    conclusion: str = ""  # empty while the run is still in progress
    created_at: str | None = None  # ISO8601 UTC, e.g. "2024-01-01T12:00:00Z"

    @property
    def failed(self) -> bool:
        """Return True if the run concluded with a failure."""
        return self.conclusion == FAILURE_CONCLUSION

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        """Create from a `workflow_runs` entry of the REST API.

        Raises KeyError/TypeError/ValueError on malformed entries.
        """
        run_id = data["id"]
        if isinstance(run_id, bool) or not isinstance(run_id, int):
            raise ValueError(f"invalid run id: {run_id!r}")
        return cls(
            id=run_id,
            conclusion=data.get("conclusion") or "",
            created_at=data.get("created_at"),
        )


class PolicyMode(StrEnum):
    """Which retention policy produced a deletion plan."""

    KEEP_NEWEST = "keep_newest"
    FAILED_ONLY = "failed_only"


@dataclass(frozen=True)
class DeletionPlan:
    """Run identifiers selected for deletion, in deletion order."""

    mode: PolicyMode
    total_runs: int
    run_ids: tuple[int, ...] = ()

    @property
    def empty(self) -> bool:
        """Return True if nothing was selected."""
        return not self.run_ids

    def __len__(self) -> int:
        return len(self.run_ids)


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of a single delete call."""

    run_id: int
    succeeded: bool
    error: str | None = None


class CleanupStatus(StrEnum):
    """How a cleanup invocation ended."""

    NOTHING_TO_DO = "nothing_to_do"
    ABORTED = "aborted"
    DRY_RUN = "dry_run"
    COMPLETED = "completed"


@dataclass
class CleanupSummary:
    """Aggregated result of one cleanup invocation."""

    status: CleanupStatus
    total_runs: int = 0
    selected: int = 0
    kept: int | None = None  # configured keep count in keep-newest mode
    outcomes: list[DeletionOutcome] = field(default_factory=list)

    @property
    def deleted(self) -> int:
        """Number of runs deleted successfully."""
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        """Number of runs that could not be deleted."""
        return sum(1 for outcome in self.outcomes if not outcome.succeeded)

    @property
    def failed_ids(self) -> list[int]:
        """Identifiers of the runs that could not be deleted."""
        return [outcome.run_id for outcome in self.outcomes if not outcome.succeeded]
