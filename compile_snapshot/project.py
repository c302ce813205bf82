"""Synthesis of the throwaway project that hosts one binary per test."""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from compile_snapshot.build_tools.base import BuildTool
from compile_snapshot.errors import PreparationError
from compile_snapshot.expander import ExpandedTest, Resolved
from compile_snapshot.models.definition import DependencySpec
from compile_snapshot.models.manifest import (
    Bin,
    BuildConfig,
    Dependency,
    Manifest,
    Package,
)
from compile_snapshot.models.project import Project, ProjectConfig
from compile_snapshot.normalize import NormalizationContext, diagnostics

log = logging.getLogger(__name__)

MAIN_SOURCE = "fn main() {}\n"
NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")


def target_name(path: Path) -> str:
    """Derive the binary target name of a test from its file stem."""
    stem = path.stem or path.name
    return NON_IDENTIFIER.sub("_", stem)


@dataclass(frozen=True, kw_only=True)
class ProjectBuilder:
    """Writes the synthetic project to disk and prebuilds its dependencies."""

    config: ProjectConfig
    build_tool: BuildTool
    dependencies: Mapping[str, DependencySpec] = field(default_factory=dict)

    def make_project(self) -> Project:
        """Derive the project layout from the config."""
        target_dir = self.config.resolved_target_dir()
        return Project(
            dir=target_dir / "tests" / self.config.crate_name,
            target_dir=target_dir,
            name=f"{self.config.crate_name}-tests",
        )

    def make_manifest(
        self, project: Project, tests: Sequence[ExpandedTest]
    ) -> Manifest:
        """Build the in-memory manifest.

        The crate under test and every extra dependency with a relative path
        are registered relative to the crate's directory. Tests that failed
        glob expansion get no binary target.
        """
        manifest_dir = self.config.manifest_dir

        dependencies: dict[str, Dependency] = {
            self.config.crate_name: Dependency(path=str(manifest_dir)),
        }
        for name, spec in self.dependencies.items():
            path = manifest_dir / spec.path if spec.path is not None else None
            dependencies[name] = Dependency(
                version=spec.version,
                path=str(path) if path is not None else None,
                rest=dict(spec.model_extra or {}),
            )

        bins = [Bin(name=project.name, path="main.rs")]
        for expanded in tests:
            if isinstance(expanded, Resolved):
                bins.append(
                    Bin(
                        name=target_name(expanded.test.path),
                        path=str(manifest_dir / expanded.test.path),
                    )
                )

        return Manifest(
            package=Package(
                name=project.name,
                edition=self.config.edition,
            ),
            dependencies=dependencies,
            bins=bins,
        )

    def make_config(self) -> BuildConfig:
        """Build the config silencing noisy but harmless lints."""
        return BuildConfig.allowing(self.config.ignored_lints)

    async def prepare(self, tests: Sequence[ExpandedTest]) -> Project:
        """Write the project and build its dependencies.

        Raises:
            PreparationError: If serialization, a filesystem write or the
                dependency build fails

        """
        project = self.make_project()

        try:
            manifest_toml = self.make_manifest(project, tests).to_toml()
            config_toml = self.make_config().to_toml()
        except (TypeError, ValueError) as exc:
            raise PreparationError(f"Failed to serialize project files: {exc}") from exc

        try:
            (project.dir / ".cargo").mkdir(parents=True, exist_ok=True)
            (project.dir / ".cargo" / "config.toml").write_text(config_toml)
            (project.dir / "Cargo.toml").write_text(manifest_toml)
            (project.dir / "main.rs").write_text(MAIN_SOURCE)
        except OSError as exc:
            raise PreparationError(
                f"Failed to write project files to {project.dir}: {exc}"
            ) from exc

        log.info("Prepared project %s at %s", project.name, project.dir)

        try:
            output = await self.build_tool.build_dependencies(project)
        except OSError as exc:
            raise PreparationError(f"Failed to invoke build tool: {exc}") from exc

        if not output.success:
            context = NormalizationContext(
                project_dir=project.dir,
                target_dir=project.target_dir,
                manifest_dir=self.config.manifest_dir,
            )
            raise PreparationError(
                "Failed to build dependencies:\n"
                + diagnostics(output.stderr, context)
            )

        return project
