"""Discovery of build tools registered under the entry point group."""

from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Any

from compile_snapshot.build_tools.manifest import BuildToolManifest
from compile_snapshot.errors import HarnessError

ENTRY_POINT_GROUP = "compile_snapshot.build_tools"


class BuildToolNotFoundError(HarnessError):
    """Raised when no build tool is registered under a key."""

    def __init__(self, key: str, available: Sequence[str]) -> None:
        names = ", ".join(available) or "none"
        super().__init__(
            f"Build tool '{key}' not found. Available build tools: {names}"
        )
        self.key = key
        self.available = available


def available_build_tools() -> list[str]:
    """Return the registered build tool keys, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_build_tool_manifest(key: str) -> BuildToolManifest[Any]:
    """Load a build tool manifest by key.

    Args:
        key: The build tool key as registered in pyproject.toml
             (e.g., "cargo")

    Returns:
        The build tool manifest instance

    Raises:
        BuildToolNotFoundError: If no build tool with the given key is found

    """
    for entry in entry_points(group=ENTRY_POINT_GROUP, name=key):
        manifest: BuildToolManifest[Any] = entry.load()
        return manifest

    raise BuildToolNotFoundError(key, available_build_tools())
