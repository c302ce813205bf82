"""Cargo build tool manifest."""

from compile_snapshot.build_tools.cargo.config import CargoConfig
from compile_snapshot.build_tools.cargo.tool import CargoBuildTool
from compile_snapshot.build_tools.manifest import BuildToolManifest

cargo_manifest = BuildToolManifest(
    config_cls=CargoConfig,
    tool_factory=CargoBuildTool.from_config,
)
