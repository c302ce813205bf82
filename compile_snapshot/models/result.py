"""Models for compile test results."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from compile_snapshot.errors import FailureKind, TestsFailedError
from compile_snapshot.models.definition import Expected


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Result of running a single compile test.

    ``diagnostics`` holds the normalized build output when the test got as
    far as building, ``expected_diagnostics`` the fixture text on a mismatch.
    ``staged_fixture`` is set when a missing fixture was bootstrapped into
    the staging directory; the test still counts as a success.
    """

    __test__ = False

    name: str
    path: Path
    expected: Expected
    status: Literal["success", "failure"]
    duration: float
    kind: FailureKind | None = None
    message: str | None = None
    diagnostics: str | None = None
    expected_diagnostics: str | None = None
    staged_fixture: Path | None = None


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Aggregate of every outcome in a run, in declaration order."""

    outcomes: Sequence[TestOutcome]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == "failure")

    @property
    def passed(self) -> int:
        return self.total - self.failures

    def check(self) -> None:
        """Raise TestsFailedError if any test failed."""
        if self.failures:
            raise TestsFailedError(f"{self.failures} of {self.total} tests failed")
