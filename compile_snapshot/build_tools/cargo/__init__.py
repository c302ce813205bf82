"""Cargo build tool module."""

from compile_snapshot.build_tools.cargo.config import CargoConfig
from compile_snapshot.build_tools.cargo.manifest import cargo_manifest
from compile_snapshot.build_tools.cargo.tool import CargoBuildTool

__all__ = ["CargoBuildTool", "CargoConfig", "cargo_manifest"]
