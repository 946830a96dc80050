"""Workflow run listing, selection and cleanup."""

from gh_moles.runs.cleanup import (
    delete_runs,
    is_affirmative,
    run_cleanup,
)
from gh_moles.runs.lister import PAGE_SIZE, list_all_runs
from gh_moles.runs.models import (
    CleanupStatus,
    CleanupSummary,
    DeletionOutcome,
    DeletionPlan,
    PolicyMode,
    WorkflowRun,
)
from gh_moles.runs.selection import (
    CleanupPolicy,
    ValidationError,
    build_policy,
    select_runs,
)

__all__ = [
    "PAGE_SIZE",
    "CleanupPolicy",
    "CleanupStatus",
    "CleanupSummary",
    "DeletionOutcome",
    "DeletionPlan",
    "PolicyMode",
    "ValidationError",
    "WorkflowRun",
    "build_policy",
    "delete_runs",
    "is_affirmative",
    "list_all_runs",
    "run_cleanup",
    "select_runs",
]
