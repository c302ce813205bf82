"""Build tool manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from compile_snapshot.build_tools.base import BuildTool

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class BuildToolManifest(Generic[ConfigT]):
    """Manifest describing a build tool plugin.

    Holds the configuration class and the factory creating the tool, so a
    plugin is only imported once it is selected by key.
    """

    config_cls: type[ConfigT]
    tool_factory: Callable[[ConfigT], AbstractAsyncContextManager[BuildTool]]
