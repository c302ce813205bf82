"""Tests for run summaries."""

import pytest

from compile_snapshot.errors import FailureKind, TestsFailedError
from compile_snapshot.models.result import RunSummary
from compile_snapshot.testing.factories import TestOutcomeFactory


def test_counts_outcomes() -> None:
    """Totals reflect successes and failures."""
    summary = RunSummary(
        outcomes=[
            TestOutcomeFactory.build(),
            TestOutcomeFactory.build(status="failure", kind=FailureKind.MISMATCH),
            TestOutcomeFactory.build(),
        ]
    )

    assert summary.total == 3
    assert summary.failures == 1
    assert summary.passed == 2


def test_check_raises_with_failure_count() -> None:
    """Check reports the number of failed tests out of the total."""
    summary = RunSummary(
        outcomes=[
            TestOutcomeFactory.build(status="failure", kind=FailureKind.RUN_FAILED),
            TestOutcomeFactory.build(),
        ]
    )

    with pytest.raises(TestsFailedError, match="1 of 2 tests failed"):
        summary.check()


def test_check_passes_for_empty_run() -> None:
    """A run without tests is a success."""
    RunSummary(outcomes=[]).check()
