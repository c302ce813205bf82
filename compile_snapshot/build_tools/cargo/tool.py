"""Cargo build tool implementation."""

import asyncio
import logging
import os
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

from compile_snapshot.build_tools.base import BuildOutput, BuildTool
from compile_snapshot.build_tools.cargo.config import CargoConfig
from compile_snapshot.models.project import Project

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class CargoBuildTool(BuildTool):
    """Builds and runs test binaries of the synthetic project with cargo."""

    config: CargoConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CargoConfig
    ) -> AsyncGenerator["CargoBuildTool", None]:
        """Create the build tool."""
        yield cls(config=config)

    async def build_dependencies(self, project: Project) -> BuildOutput:
        """Build the project's own no-op binary, compiling all dependencies."""
        log.info("Building dependencies of %s", project.name)
        return await self.cargo(project, "build", "--bin", project.name)

    async def build_test(self, project: Project, name: str) -> BuildOutput:
        """Build one test binary."""
        return await self.cargo(project, "build", "--bin", name, "--quiet")

    async def run_test(self, project: Project, name: str) -> BuildOutput:
        """Run one previously built test binary."""
        return await self.cargo(project, "run", "--bin", name, "--quiet")

    def command(self, *args: str) -> Sequence[str]:
        """Return the full cargo command line for the given subcommand args."""
        command = [self.config.cargo, *args, "--color", "never"]
        if self.config.offline:
            command.append("--offline")
        command.extend(self.config.extra_args)
        return command

    async def cargo(self, project: Project, *args: str) -> BuildOutput:
        """Run cargo in the project directory and capture its output."""
        command = self.command(*args)
        log.debug("Running %s in %s", " ".join(command), project.dir)

        env = dict(os.environ)
        env["CARGO_TARGET_DIR"] = str(project.target_dir)

        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=project.dir,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()

        return BuildOutput(
            success=process.returncode == 0,
            stdout=stdout,
            stderr=stderr,
        )
