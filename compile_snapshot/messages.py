"""User-facing messages emitted while compile tests run."""

import difflib
import logging
from pathlib import Path

from compile_snapshot.models.result import RunSummary, TestOutcome

log = logging.getLogger("compile_snapshot")

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
    "staged": "📝",
}


def begin_test(path: Path) -> None:
    log.info("test %s ...", path)


def finish_test(outcome: TestOutcome) -> None:
    """Log the status line of a finished test."""
    key = "staged" if outcome.staged_fixture is not None else outcome.status
    symbol = STATUS_SYMBOLS[key]
    if outcome.status == "success":
        log.info("%s %s: ok (%.2fs)", symbol, outcome.path, outcome.duration)
    else:
        log.error(
            "%s %s: %s (%.2fs)",
            symbol,
            outcome.path,
            outcome.kind,
            outcome.duration,
        )
        if outcome.message:
            log.error("  Message: %s", outcome.message)


def failed_to_build(diagnostics: str) -> None:
    log.error("Build failed:\n%s", diagnostics or "(no diagnostics)")


def output(warnings: str, stdout: bytes, stderr: bytes) -> None:
    """Log the build warnings and the output of a test binary."""
    if warnings:
        log.warning("Warnings:\n%s", warnings)
    if stdout:
        log.info("Output:\n%s", stdout.decode("utf-8", errors="replace"))
    if stderr:
        log.info("Stderr:\n%s", stderr.decode("utf-8", errors="replace"))


def should_not_have_compiled(warnings: str) -> None:
    log.error("Expected test case to fail to compile, but it succeeded.")
    if warnings:
        log.warning("Warnings:\n%s", warnings)


def write_stderr(staged_path: Path, fixture_path: Path, diagnostics: str) -> None:
    """Announce a bootstrapped fixture and how to promote it."""
    log.warning(
        "Wrote stderr to %s\nReview and move it to %s to accept it:\n%s",
        staged_path,
        fixture_path,
        diagnostics,
    )


def nice() -> None:
    log.info("Diagnostics match the expected output.")


def mismatch(expected: str, actual: str) -> None:
    """Log both texts and their unified diff."""
    diff = "".join(
        difflib.unified_diff(
            expected.splitlines(keepends=True),
            actual.splitlines(keepends=True),
            fromfile="expected",
            tofile="actual",
        )
    )
    log.error(
        "Mismatch in compiler error.\nEXPECTED:\n%s\nACTUAL:\n%s\nDIFF:\n%s",
        expected,
        actual,
        diff,
    )


def no_tests_enabled() -> None:
    log.warning("There are no compile tests enabled yet, be sure to add some!")


def prepare_fail(error: Exception) -> None:
    log.error("Failed to prepare compile tests: %s", error)


def summary(run_summary: RunSummary) -> None:
    """Log a framed summary of the run."""
    log.info("=" * 80)
    log.info("Compile Test Results Summary:")
    log.info("=" * 80)
    for outcome in run_summary.outcomes:
        symbol = STATUS_SYMBOLS[outcome.status]
        log.info("%s %s: %s", symbol, outcome.name, outcome.kind or outcome.status)
    if run_summary.failures:
        log.error("%d of %d tests failed", run_summary.failures, run_summary.total)
    else:
        log.info("%d of %d tests passed", run_summary.passed, run_summary.total)
