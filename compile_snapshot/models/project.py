"""Configuration and layout of the synthetic build project."""

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, field_validator

from compile_snapshot.errors import PreparationError


class ProjectConfig(BaseModel):
    """Identity of the crate under test and where to build its tests.

    Passed explicitly to the project builder instead of being looked up from
    the environment, so builders can be created with synthetic inputs.
    """

    crate_name: str
    manifest_dir: Path
    target_dir: Path | None = None
    staging_dir: Path = Path("wip")
    ignored_lints: Sequence[str] = ("dead_code",)
    edition: str = "2018"

    @field_validator("manifest_dir")
    @classmethod
    def make_absolute(cls, value: Path) -> Path:
        """Anchor a relative crate directory at the current directory.

        The directory is written into the synthetic manifest, which lives
        elsewhere, and is replaced in diagnostics by its full spelling.
        """
        return value.absolute()

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> "ProjectConfig":
        """Build config from the variables the build tool exports to tests.

        Keyword overrides take precedence over the environment.

        Raises:
            PreparationError: If the crate name or directory is not exposed

        """
        env = os.environ if environ is None else environ

        values: dict[str, object] = {}
        if crate_name := env.get("CARGO_PKG_NAME"):
            values["crate_name"] = crate_name
        if manifest_dir := env.get("CARGO_MANIFEST_DIR"):
            values["manifest_dir"] = Path(manifest_dir)
        if target_dir := env.get("CARGO_TARGET_DIR"):
            values["target_dir"] = Path(target_dir)
        values.update(overrides)

        if not values.get("crate_name"):
            raise PreparationError(
                "Failed to determine name of the crate under test: "
                "CARGO_PKG_NAME is not set"
            )
        if not values.get("manifest_dir"):
            raise PreparationError(
                "Failed to determine location of the crate under test: "
                "CARGO_MANIFEST_DIR is not set"
            )
        return cls.model_validate(values)

    def resolved_target_dir(self) -> Path:
        """Return the shared build artifact directory."""
        if self.target_dir is None:
            return self.manifest_dir / "target"
        if self.target_dir.is_absolute():
            return self.target_dir
        return self.manifest_dir / self.target_dir


@dataclass(frozen=True, kw_only=True)
class Project:
    """Throwaway project holding one binary target per test."""

    dir: Path
    target_dir: Path
    name: str
