"""Models for compile test declarations loaded from suite files."""

from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path

from pydantic import ConfigDict, Field

from compile_snapshot.models.base import Model


class Expected(StrEnum):
    """Declared outcome of a compile test."""

    PASS = "pass"
    COMPILE_FAIL = "compile-fail"


class TestSpec(Model):
    """Single declared test: a source path or glob pattern plus its outcome."""

    __test__ = False

    path: Path = Field(..., description="Source file path or glob pattern")
    expected: Expected = Field(..., description="Expected build outcome")


class DependencySpec(Model):
    """Extra dependency merged into the synthetic manifest.

    Fields other than ``version`` and ``path`` (features, default-features,
    git, ...) are kept verbatim and written to the manifest as given.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    version: str | None = Field(default=None, description="Version requirement")
    path: Path | None = Field(
        default=None, description="Local path, relative to the crate under test"
    )


class SuiteDefinition(Model):
    """Complete suite declaration loaded from a YAML file."""

    version: str = Field(..., description="Suite definition schema version")
    tests: Sequence[TestSpec] = Field(
        default_factory=list, description="Declared tests in run order"
    )
    dependencies: Mapping[str, DependencySpec] = Field(
        default_factory=dict, description="Extra dependencies by name"
    )
