"""Tests for cleanup policy validation and run selection."""

import pytest

from gh_moles.runs import (
    CleanupPolicy,
    PolicyMode,
    ValidationError,
    WorkflowRun,
    build_policy,
    select_runs,
)


def make_runs(conclusions: list[str]) -> list[WorkflowRun]:
    """Create runs newest first, ids counting down from 100."""
    return [
        WorkflowRun(id=100 - i, conclusion=conclusion)
        for i, conclusion in enumerate(conclusions)
    ]


class TestBuildPolicy:
    """Tests for argument validation."""

    def test_defaults(self) -> None:
        """Test the default keep-newest policy."""
        policy = build_policy()
        assert policy == CleanupPolicy(keep_count=20)
        assert policy.mode is PolicyMode.KEEP_NEWEST
        assert policy.batch_size == 5
        assert policy.batch_pause == 1.0

    def test_explicit_keep_count(self) -> None:
        """Test that KEEP_COUNT is parsed."""
        assert build_policy("50").keep_count == 50
        assert build_policy(" 7 ").keep_count == 7

    def test_configured_default_keep_count(self) -> None:
        """Test that the configured default applies only without KEEP_COUNT."""
        assert build_policy(default_keep_count=40).keep_count == 40
        assert build_policy("3", default_keep_count=40).keep_count == 3

    @pytest.mark.parametrize(
        "value", ["0", "-3", "abc", "1.5", "", "1_000", "５", "٣"]
    )
    def test_invalid_keep_count(self, value: str) -> None:
        """Test that KEEP_COUNT must be a positive integer."""
        with pytest.raises(ValidationError, match="positive integer"):
            build_policy(value)

    def test_keep_count_and_failed_are_exclusive(self) -> None:
        """Test that KEEP_COUNT cannot be combined with --failed."""
        with pytest.raises(ValidationError, match="mutually exclusive"):
            build_policy("10", failed_only=True)

    def test_failed_only(self) -> None:
        """Test failed-only mode."""
        policy = build_policy(failed_only=True, auto_confirm=True)
        assert policy.mode is PolicyMode.FAILED_ONLY
        assert policy.auto_confirm is True

    def test_invalid_pacing(self) -> None:
        """Test that batch size and pause are range-checked."""
        with pytest.raises(ValidationError):
            build_policy(batch_size=0)
        with pytest.raises(ValidationError):
            build_policy(batch_pause=-1.0)

    def test_invalid_configured_keep_count(self) -> None:
        """Test that a non-positive configured default is rejected."""
        with pytest.raises(ValidationError):
            build_policy(default_keep_count=0)

    def test_configured_keep_count_ignored_when_failed_only(self) -> None:
        """Test that failed-only mode does not check the configured keep count."""
        policy = build_policy(failed_only=True, default_keep_count=0)
        assert policy.mode is PolicyMode.FAILED_ONLY

    def test_keep_count_with_surrounding_whitespace(self) -> None:
        """Test that ASCII digits with surrounding blanks still parse."""
        assert build_policy(" 15 ").keep_count == 15


class TestKeepNewest:
    """Tests for keep-newest-N selection."""

    @pytest.mark.parametrize(("keep", "total"), [(1, 0), (1, 1), (20, 5), (20, 20)])
    def test_nothing_selected_when_within_limit(self, keep: int, total: int) -> None:
        """Test that nothing is selected when total <= N."""
        runs = make_runs(["success"] * total)
        plan = select_runs(runs, CleanupPolicy(keep_count=keep))
        assert plan.empty
        assert plan.total_runs == total

    @pytest.mark.parametrize(("keep", "total"), [(1, 2), (3, 10), (20, 25), (5, 150)])
    def test_selects_everything_after_n(self, keep: int, total: int) -> None:
        """Test that exactly positions [N, total) are selected."""
        runs = make_runs(["success"] * total)

        plan = select_runs(runs, CleanupPolicy(keep_count=keep))

        assert len(plan) == total - keep
        assert plan.run_ids == tuple(run.id for run in runs[keep:])

    def test_keep_20_of_25(self) -> None:
        """Test that the 5 oldest of 25 runs are selected."""
        runs = make_runs(["success"] * 25)

        plan = select_runs(runs, CleanupPolicy(keep_count=20))

        assert plan.run_ids == (80, 79, 78, 77, 76)
        assert plan.mode is PolicyMode.KEEP_NEWEST

    def test_ignores_conclusions(self) -> None:
        """Test that keep-newest selection is purely positional."""
        runs = make_runs(["failure", "success", "", "failure"])

        plan = select_runs(runs, CleanupPolicy(keep_count=2))

        assert plan.run_ids == (98, 97)


class TestFailedOnly:
    """Tests for failed-only selection."""

    def test_selects_failed_runs_in_order(self) -> None:
        """Test that exactly the failed runs are selected, in list order."""
        runs = make_runs(["failure", "success", "cancelled", "failure", "", "failure"])

        plan = select_runs(runs, CleanupPolicy(failed_only=True))

        assert plan.run_ids == (100, 97, 95)
        assert plan.mode is PolicyMode.FAILED_ONLY

    def test_no_failed_runs(self) -> None:
        """Test that nothing is selected without failures."""
        runs = make_runs(["success", "cancelled", "skipped"])

        assert select_runs(runs, CleanupPolicy(failed_only=True)).empty

    def test_ignores_keep_count(self) -> None:
        """Test that old and new failures are both selected."""
        runs = make_runs(["failure"] * 30)

        plan = select_runs(runs, CleanupPolicy(keep_count=20, failed_only=True))

        assert len(plan) == 30


@pytest.mark.parametrize(
    "policy", [CleanupPolicy(keep_count=3), CleanupPolicy(failed_only=True)]
)
def test_selection_is_idempotent(policy: CleanupPolicy) -> None:
    """Test that selecting twice yields the same plan."""
    runs = make_runs(["failure", "success", "failure", "success", "failure"])

    assert select_runs(runs, policy) == select_runs(runs, policy)
