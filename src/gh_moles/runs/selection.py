"""Cleanup policy validation and run selection."""

from dataclasses import dataclass

from gh_moles.runs.models import DeletionPlan, PolicyMode, WorkflowRun

DEFAULT_KEEP_COUNT = 20
DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_PAUSE = 1.0


class ValidationError(Exception):
    """Raised when cleanup arguments are invalid or contradictory."""


@dataclass(frozen=True)
class CleanupPolicy:
    """Parameters of one cleanup invocation.

    `keep_count` is ignored when `failed_only` is set.
    """

    keep_count: int = DEFAULT_KEEP_COUNT
    failed_only: bool = False
    auto_confirm: bool = False
    dry_run: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_pause: float = DEFAULT_BATCH_PAUSE

    @property
    def mode(self) -> PolicyMode:
        """Return the retention policy in effect."""
        return PolicyMode.FAILED_ONLY if self.failed_only else PolicyMode.KEEP_NEWEST

    def validate(self) -> None:
        """Raise ValidationError if any parameter is out of range."""
        if not self.failed_only and (
            isinstance(self.keep_count, bool) or self.keep_count < 1
        ):
            raise ValidationError("KEEP_COUNT must be a positive integer")
        if self.batch_size < 1:
            raise ValidationError("batch size must be a positive integer")
        if self.batch_pause < 0:
            raise ValidationError("batch pause must not be negative")


def parse_keep_count(value: str) -> int:
    """Parse a KEEP_COUNT argument into a positive integer.

    Only plain ASCII digits are accepted.
    """
    text = value.strip()
    if not text.isascii() or "_" in text:
        raise ValidationError("KEEP_COUNT must be a positive integer")
    try:
        count = int(text)
    except ValueError:
        raise ValidationError("KEEP_COUNT must be a positive integer") from None
    if count < 1:
        raise ValidationError("KEEP_COUNT must be a positive integer")
    return count


def build_policy(
    keep_count_arg: str | None = None,
    failed_only: bool = False,
    auto_confirm: bool = False,
    dry_run: bool = False,
    *,
    default_keep_count: int = DEFAULT_KEEP_COUNT,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_pause: float = DEFAULT_BATCH_PAUSE,
) -> CleanupPolicy:
    """Validate raw command-line input and build a CleanupPolicy.

    Raises:
        ValidationError: If KEEP_COUNT is combined with failed-only mode, is
            not a positive integer, or the pacing parameters are out of range.
    """
    if keep_count_arg is not None and failed_only:
        raise ValidationError("KEEP_COUNT and --failed are mutually exclusive")

    keep_count = (
        parse_keep_count(keep_count_arg)
        if keep_count_arg is not None
        else default_keep_count
    )
    policy = CleanupPolicy(
        keep_count=keep_count,
        failed_only=failed_only,
        auto_confirm=auto_confirm,
        dry_run=dry_run,
        batch_size=batch_size,
        batch_pause=batch_pause,
    )
    policy.validate()
    return policy


def select_runs(runs: list[WorkflowRun], policy: CleanupPolicy) -> DeletionPlan:
    """Compute which runs to delete.

    Failed-only mode picks every failed run in list order. Keep-newest mode
    assumes `runs` is ordered newest first and picks every run past the first
    `keep_count` positions.
    """
    total = len(runs)
    if policy.failed_only:
        return DeletionPlan(
            mode=PolicyMode.FAILED_ONLY,
            total_runs=total,
            run_ids=tuple(run.id for run in runs if run.failed),
        )

    return DeletionPlan(
        mode=PolicyMode.KEEP_NEWEST,
        total_runs=total,
        run_ids=tuple(run.id for run in runs[policy.keep_count :]),
    )
