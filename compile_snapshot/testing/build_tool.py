"""Scripted build tool replaying canned outputs per binary target."""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from compile_snapshot.build_tools.base import BuildOutput, BuildTool
from compile_snapshot.models.project import Project

SUCCESS = BuildOutput(success=True)


@dataclass(frozen=True, kw_only=True)
class ScriptedBuildTool(BuildTool):
    """Build tool returning configured outputs and recording every call.

    Targets without a configured output build and run successfully.
    """

    builds: Mapping[str, BuildOutput] = field(default_factory=dict)
    runs: Mapping[str, BuildOutput] = field(default_factory=dict)
    dependencies: BuildOutput = SUCCESS
    calls: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    @asynccontextmanager
    async def scripted(
        cls, **kwargs: object
    ) -> AsyncGenerator["ScriptedBuildTool", None]:
        """Create the tool in the same shape as real tool factories."""
        yield cls(**kwargs)  # type: ignore[arg-type]

    async def build_dependencies(self, project: Project) -> BuildOutput:
        self.calls.append(("build_dependencies", project.name))
        return self.dependencies

    async def build_test(self, project: Project, name: str) -> BuildOutput:
        self.calls.append(("build_test", name))
        return self.builds.get(name, SUCCESS)

    async def run_test(self, project: Project, name: str) -> BuildOutput:
        self.calls.append(("run_test", name))
        return self.runs.get(name, SUCCESS)
