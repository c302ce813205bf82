"""Exception taxonomy for preparation and per-test failures."""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar


class FailureKind(StrEnum):
    """Closed set of reasons a single test can fail."""

    SOURCE_NOT_FOUND = "source-not-found"
    EXPANSION_FAILED = "expansion-failed"
    BUILD_FAILED = "build-failed"
    RUN_FAILED = "run-failed"
    SHOULD_NOT_HAVE_COMPILED = "should-not-have-compiled"
    MISMATCH = "mismatch"
    FIXTURE_IO = "fixture-io"
    BUILD_TOOL = "build-tool-failed"


class HarnessError(Exception):
    """Base class for all harness errors."""


class PreparationError(HarnessError):
    """Raised when the synthetic project cannot be prepared.

    Fatal: no test runs once this is raised.
    """


class TestsFailedError(HarnessError):
    """Raised when a completed run recorded one or more failures."""

    __test__ = False


class TestFailure(HarnessError):
    """Failure isolated to a single test; the run continues with the next."""

    __test__ = False

    kind: ClassVar[FailureKind]


class SourceNotFoundError(TestFailure):
    """Raised when a declared test source does not exist."""

    kind = FailureKind.SOURCE_NOT_FOUND

    def __init__(self, path: Path) -> None:
        super().__init__(f"Test source not found: {path}")
        self.path = path


class GlobExpansionError(TestFailure):
    """Raised when a glob pattern cannot be resolved."""

    kind = FailureKind.EXPANSION_FAILED

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Failed to expand glob pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class BuildFailedError(TestFailure):
    """Raised when a pass test does not build."""

    kind = FailureKind.BUILD_FAILED

    def __init__(self, diagnostics: str) -> None:
        super().__init__("Build failed for a test expected to pass")
        self.diagnostics = diagnostics


class RunFailedError(TestFailure):
    """Raised when a pass test builds but its binary exits unsuccessfully."""

    kind = FailureKind.RUN_FAILED

    def __init__(self) -> None:
        super().__init__("Execution of the test binary failed")


class ShouldNotHaveCompiledError(TestFailure):
    """Raised when a compile-fail test builds successfully."""

    kind = FailureKind.SHOULD_NOT_HAVE_COMPILED

    def __init__(self, warnings: str) -> None:
        super().__init__("Expected test case to fail to compile, but it succeeded")
        self.warnings = warnings


class MismatchError(TestFailure):
    """Raised when diagnostics differ from the recorded fixture."""

    kind = FailureKind.MISMATCH

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__("Compiler error does not match the expected error")
        self.expected = expected
        self.actual = actual


class BuildToolError(TestFailure):
    """Raised when the build tool itself cannot be started."""

    kind = FailureKind.BUILD_TOOL

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to invoke build tool: {reason}")
        self.reason = reason


class FixtureIOError(TestFailure):
    """Raised when a fixture cannot be read or a staged fixture written."""

    kind = FailureKind.FIXTURE_IO

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to access fixture {path}: {reason}")
        self.path = path
