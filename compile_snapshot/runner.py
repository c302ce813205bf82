"""Sequential execution of compile tests against the synthetic project."""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from compile_snapshot import messages
from compile_snapshot.build_tools.base import BuildTool
from compile_snapshot.errors import (
    BuildFailedError,
    BuildToolError,
    FixtureIOError,
    MismatchError,
    RunFailedError,
    ShouldNotHaveCompiledError,
    SourceNotFoundError,
    TestFailure,
)
from compile_snapshot.expander import ExpandedTest, ExpansionFailed, expand_globs
from compile_snapshot.models.definition import DependencySpec, Expected, TestSpec
from compile_snapshot.models.project import Project, ProjectConfig
from compile_snapshot.models.result import RunSummary, TestOutcome
from compile_snapshot.normalize import (
    NormalizationContext,
    diagnostics,
    normalize_line_endings,
)
from compile_snapshot.project import ProjectBuilder, target_name

log = logging.getLogger(__name__)

FIXTURE_SUFFIX = ".stderr"

Check: TypeAlias = Callable[
    ["TestRunner", TestSpec, str, bool, str], Awaitable[Path | None]
]


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Builds and checks tests one at a time, in declaration order."""

    __test__ = False

    build_tool: BuildTool
    project: Project
    config: ProjectConfig

    @property
    def context(self) -> NormalizationContext:
        return NormalizationContext(
            project_dir=self.project.dir,
            target_dir=self.project.target_dir,
            manifest_dir=self.config.manifest_dir,
        )

    def source_path(self, test: TestSpec) -> Path:
        """Resolve a test path against the directory of the crate under test."""
        return self.config.manifest_dir / test.path

    def staging_dir(self) -> Path:
        return self.config.manifest_dir / self.config.staging_dir

    async def run_all(self, tests: Sequence[ExpandedTest]) -> RunSummary:
        """Run every test, continuing past failures.

        Args:
            tests: Expanded tests in declaration order

        Returns:
            Summary holding one outcome per test

        """
        if not tests:
            messages.no_tests_enabled()
            return RunSummary(outcomes=[])

        outcomes: list[TestOutcome] = []
        for expanded in tests:
            outcomes.append(await self.run_test(expanded))

        return RunSummary(outcomes=outcomes)

    async def run_test(self, expanded: ExpandedTest) -> TestOutcome:
        """Build and check a single test, isolating its failures."""
        test = expanded.test
        name = target_name(test.path)
        messages.begin_test(test.path)
        start = time.monotonic()

        normalized: str | None = None
        try:
            if isinstance(expanded, ExpansionFailed):
                raise expanded.error

            source = self.source_path(test)
            if not source.is_file():
                raise SourceNotFoundError(test.path)

            try:
                output = await self.build_tool.build_test(self.project, name)
            except OSError as exc:
                raise BuildToolError(str(exc)) from exc
            normalized = diagnostics(output.stderr, self.context)

            check = CHECKS[test.expected]
            staged = await check(self, test, name, output.success, normalized)
        except TestFailure as failure:
            outcome = TestOutcome(
                name=name,
                path=test.path,
                expected=test.expected,
                status="failure",
                duration=time.monotonic() - start,
                kind=failure.kind,
                message=str(failure),
                diagnostics=normalized,
                expected_diagnostics=(
                    failure.expected if isinstance(failure, MismatchError) else None
                ),
            )
        else:
            outcome = TestOutcome(
                name=name,
                path=test.path,
                expected=test.expected,
                status="success",
                duration=time.monotonic() - start,
                diagnostics=normalized,
                staged_fixture=staged,
            )

        messages.finish_test(outcome)
        return outcome

    async def check_pass(
        self, test: TestSpec, name: str, success: bool, stderr: str
    ) -> Path | None:
        """Require the test to build, then to run successfully."""
        if not success:
            messages.failed_to_build(stderr)
            raise BuildFailedError(stderr)

        try:
            output = await self.build_tool.run_test(self.project, name)
        except OSError as exc:
            raise BuildToolError(str(exc)) from exc
        messages.output(stderr, output.stdout, output.stderr)

        if not output.success:
            raise RunFailedError()
        return None

    async def check_compile_fail(
        self, test: TestSpec, name: str, success: bool, stderr: str
    ) -> Path | None:
        """Require the build to fail with diagnostics matching the fixture.

        A missing fixture is bootstrapped into the staging directory and the
        test succeeds; the fixture itself is never written.
        """
        if success:
            messages.should_not_have_compiled(stderr)
            raise ShouldNotHaveCompiledError(stderr)

        fixture_path = self.source_path(test).with_suffix(FIXTURE_SUFFIX)
        if not fixture_path.exists():
            return self.stage_fixture(fixture_path, stderr)

        try:
            expected = normalize_line_endings(fixture_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise FixtureIOError(fixture_path, str(exc)) from exc

        if expected != stderr:
            messages.mismatch(expected, stderr)
            raise MismatchError(expected, stderr)

        messages.nice()
        return None

    def stage_fixture(self, fixture_path: Path, stderr: str) -> Path:
        """Write freshly normalized diagnostics for manual review."""
        staged_path = self.staging_dir() / fixture_path.name
        messages.write_stderr(staged_path, fixture_path, stderr)
        try:
            staged_path.parent.mkdir(parents=True, exist_ok=True)
            staged_path.write_text(stderr, encoding="utf-8")
        except OSError as exc:
            raise FixtureIOError(staged_path, str(exc)) from exc
        return staged_path


CHECKS: Mapping[Expected, Check] = {
    Expected.PASS: TestRunner.check_pass,
    Expected.COMPILE_FAIL: TestRunner.check_compile_fail,
}


async def run_suite(
    config: ProjectConfig,
    build_tool: BuildTool,
    tests: Sequence[TestSpec],
    dependencies: Mapping[str, DependencySpec] | None = None,
) -> RunSummary:
    """Expand, prepare and run a whole suite.

    Raises:
        PreparationError: If the project cannot be prepared; no test runs

    """
    expanded = expand_globs(tests, root=config.manifest_dir)

    builder = ProjectBuilder(
        config=config,
        build_tool=build_tool,
        dependencies=dict(dependencies or {}),
    )
    project = await builder.prepare(expanded)

    log.info("Running %d compile test(s)...", len(expanded))
    runner = TestRunner(build_tool=build_tool, project=project, config=config)
    summary = await runner.run_all(expanded)

    messages.summary(summary)
    return summary

