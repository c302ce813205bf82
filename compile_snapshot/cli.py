"""CLI entry point for compile snapshot tests."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from compile_snapshot import messages
from compile_snapshot.build_tools.loading import load_build_tool_manifest
from compile_snapshot.definition_loader import load_suite_definition
from compile_snapshot.errors import PreparationError
from compile_snapshot.models.project import ProjectConfig
from compile_snapshot.models.result import RunSummary
from compile_snapshot.runner import run_suite


def make_project_config(
    crate_name: str | None,
    manifest_dir: Path | None,
    target_dir: Path | None,
    staging_dir: Path | None,
) -> ProjectConfig:
    """Build the project config, falling back to the environment.

    Raises:
        PreparationError: If the crate identity is neither given nor exported

    """
    arguments = {
        "crate_name": crate_name,
        "manifest_dir": manifest_dir,
        "target_dir": target_dir,
        "staging_dir": staging_dir,
    }
    overrides = {key: value for key, value in arguments.items() if value is not None}
    return ProjectConfig.from_environ(**overrides)


async def run(
    suite_path: Path,
    build_tool_key: str,
    build_tool_config_json: str,
    crate_name: str | None = None,
    manifest_dir: Path | None = None,
    target_dir: Path | None = None,
    staging_dir: Path | None = None,
) -> int:
    """Run a compile test suite and return exit code."""
    log = logging.getLogger("compile_snapshot")

    log.info("Loading build tool: %s", build_tool_key)
    manifest = load_build_tool_manifest(build_tool_key)

    config_dict = json.loads(build_tool_config_json)
    tool_config = manifest.config_cls(**config_dict)

    log.info("Loading suite definition: %s", suite_path)
    suite = await load_suite_definition(suite_path)

    try:
        project_config = make_project_config(
            crate_name, manifest_dir, target_dir, staging_dir
        )
        async with manifest.tool_factory(tool_config) as build_tool:
            summary = await run_suite(
                project_config, build_tool, suite.tests, suite.dependencies
            )
    except PreparationError as e:
        messages.prepare_fail(e)
        return 1

    print(json.dumps(format_output(summary), indent=2))

    return 1 if summary.failures else 0


def format_output(summary: RunSummary) -> dict[str, Any]:
    """Format a run summary for JSON output."""
    return {
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failures,
        "results": [
            {
                "name": outcome.name,
                "path": str(outcome.path),
                "expected": str(outcome.expected),
                "status": outcome.status,
                "kind": str(outcome.kind) if outcome.kind is not None else None,
                "duration": outcome.duration,
                "message": outcome.message,
                "diagnostics": outcome.diagnostics,
                "expected_diagnostics": outcome.expected_diagnostics,
                "staged_fixture": (
                    str(outcome.staged_fixture)
                    if outcome.staged_fixture is not None
                    else None
                ),
            }
            for outcome in summary.outcomes
        ],
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run compile-pass and compile-fail snapshot tests"
    )
    parser.add_argument(
        "--suite",
        type=Path,
        required=True,
        help="Path to the suite declaration YAML file",
    )
    parser.add_argument(
        "--build-tool",
        default="cargo",
        help="Build tool key (default: cargo)",
    )
    parser.add_argument(
        "--build-tool-config",
        default="{}",
        help="JSON configuration for the build tool",
    )
    parser.add_argument(
        "--crate-name",
        default=None,
        help="Name of the crate under test (default: $CARGO_PKG_NAME)",
    )
    parser.add_argument(
        "--manifest-dir",
        type=Path,
        default=None,
        help="Directory of the crate under test (default: $CARGO_MANIFEST_DIR)",
    )
    parser.add_argument(
        "--target-dir",
        type=Path,
        default=None,
        help="Shared build artifact directory (default: <manifest-dir>/target)",
    )
    parser.add_argument(
        "--staging-dir",
        type=Path,
        default=None,
        help="Directory receiving bootstrapped fixtures (default: wip)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            suite_path=args.suite,
            build_tool_key=args.build_tool,
            build_tool_config_json=args.build_tool_config,
            crate_name=args.crate_name,
            manifest_dir=args.manifest_dir,
            target_dir=args.target_dir,
            staging_dir=args.staging_dir,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
