"""Abstract base class for build tools driving the synthetic project."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from compile_snapshot.models.project import Project


@dataclass(frozen=True, kw_only=True)
class BuildOutput:
    """Exit status and captured output of a build tool invocation."""

    success: bool
    stdout: bytes = b""
    stderr: bytes = b""


@dataclass(frozen=True, kw_only=True)
class BuildTool(ABC):
    """Abstract base for build tools.

    Every call blocks the run until the underlying process exits; there is
    no timeout and no cancellation.
    """

    @abstractmethod
    async def build_dependencies(self, project: Project) -> BuildOutput:
        """Build everything the tests depend on, once per run.

        Args:
            project: Prepared synthetic project

        Returns:
            Outcome of the dependency build

        """

    @abstractmethod
    async def build_test(self, project: Project, name: str) -> BuildOutput:
        """Build the single binary target of one test.

        Args:
            project: Prepared synthetic project
            name: Binary target name derived from the test path

        Returns:
            Outcome of the build, stderr holding raw diagnostics

        """

    @abstractmethod
    async def run_test(self, project: Project, name: str) -> BuildOutput:
        """Run a previously built test binary.

        Args:
            project: Prepared synthetic project
            name: Binary target name derived from the test path

        Returns:
            Exit status and output of the binary

        """
