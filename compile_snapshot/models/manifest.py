"""Models for the synthetic project manifest and build configuration."""

from collections.abc import Mapping, Sequence
from typing import Any

import toml
from pydantic import Field

from compile_snapshot.models.base import Model


class Package(Model):
    """Package identity of the synthetic project."""

    name: str
    version: str = "0.0.0"
    edition: str = "2018"
    publish: bool = False


class Dependency(Model):
    """Dependency table entry."""

    version: str | None = None
    path: str | None = None
    rest: Mapping[str, Any] = Field(default_factory=dict)

    def to_table(self) -> dict[str, Any]:
        """Flatten into a manifest table, dropping unset keys."""
        table: dict[str, Any] = dict(self.rest)
        if self.version is not None:
            table["version"] = self.version
        if self.path is not None:
            table["path"] = self.path
        return table


class Bin(Model):
    """Binary target entry."""

    name: str
    path: str


class Manifest(Model):
    """In-memory representation of the synthetic project's manifest."""

    package: Package
    dependencies: Mapping[str, Dependency] = Field(default_factory=dict)
    bins: Sequence[Bin] = Field(default_factory=list)

    def to_toml(self) -> str:
        """Serialize to manifest TOML.

        An empty ``[workspace]`` table keeps the throwaway project out of any
        workspace enclosing the build directory.
        """
        document: dict[str, Any] = {
            "package": self.package.model_dump(),
            "dependencies": {
                name: dependency.to_table()
                for name, dependency in self.dependencies.items()
            },
            "bin": [target.model_dump() for target in self.bins],
            "workspace": {},
        }
        return toml.dumps(document)


class BuildConfig(Model):
    """Build tool configuration written next to the manifest."""

    rustflags: Sequence[str] = Field(default_factory=list)

    @classmethod
    def allowing(cls, lints: Sequence[str]) -> "BuildConfig":
        """Create a config that silences each of the given lints."""
        rustflags: list[str] = []
        for lint in lints:
            rustflags.extend(("-A", lint))
        return cls(rustflags=rustflags)

    def to_toml(self) -> str:
        """Serialize to build tool config TOML."""
        return toml.dumps({"build": {"rustflags": list(self.rustflags)}})
