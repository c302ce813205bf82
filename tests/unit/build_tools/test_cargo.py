"""Tests for the Cargo build tool."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

from compile_snapshot.build_tools.cargo import CargoBuildTool, CargoConfig
from compile_snapshot.models.project import Project


@pytest.fixture
def project(tmp_path: Path) -> Project:
    """Create a project layout."""
    return Project(
        dir=tmp_path / "target" / "tests" / "demo",
        target_dir=tmp_path / "target",
        name="demo-tests",
    )


def test_command_defaults() -> None:
    """Disables colors by default."""
    tool = CargoBuildTool(config=CargoConfig())

    assert tool.command("build", "--bin", "x") == [
        "cargo",
        "build",
        "--bin",
        "x",
        "--color",
        "never",
    ]


def test_command_with_options() -> None:
    """Appends offline and extra arguments."""
    tool = CargoBuildTool(
        config=CargoConfig(cargo="/opt/cargo", offline=True, extra_args=["--locked"])
    )

    assert tool.command("run") == [
        "/opt/cargo",
        "run",
        "--color",
        "never",
        "--offline",
        "--locked",
    ]


async def test_build_test_invokes_cargo_in_project(project: Project) -> None:
    """Builds the named binary in the project dir with the shared target dir."""
    process = Mock(returncode=101)
    process.communicate = AsyncMock(return_value=(b"", b"error: boom\n"))

    async with CargoBuildTool.from_config(CargoConfig()) as tool:
        with patch(
            "compile_snapshot.build_tools.cargo.tool.asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            return_value=process,
        ) as mock_exec:
            output = await tool.build_test(project, "bad_case")

    assert output.success is False
    assert output.stderr == b"error: boom\n"
    args, kwargs = mock_exec.call_args
    assert args == (
        "cargo",
        "build",
        "--bin",
        "bad_case",
        "--quiet",
        "--color",
        "never",
    )
    assert kwargs["cwd"] == project.dir
    assert kwargs["env"]["CARGO_TARGET_DIR"] == str(project.target_dir)


async def test_build_dependencies_builds_project_binary(project: Project) -> None:
    """Prebuilds through the project's own binary."""
    process = Mock(returncode=0)
    process.communicate = AsyncMock(return_value=(b"", b""))
    tool = CargoBuildTool(config=CargoConfig())

    with patch(
        "compile_snapshot.build_tools.cargo.tool.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
        return_value=process,
    ) as mock_exec:
        output = await tool.build_dependencies(project)

    assert output.success is True
    assert mock_exec.call_args.args[:4] == ("cargo", "build", "--bin", "demo-tests")


async def test_run_test_runs_binary(project: Project) -> None:
    """Runs the named binary and captures its stdout."""
    process = Mock(returncode=0)
    process.communicate = AsyncMock(return_value=(b"hello\n", b""))
    tool = CargoBuildTool(config=CargoConfig())

    with patch(
        "compile_snapshot.build_tools.cargo.tool.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
        return_value=process,
    ) as mock_exec:
        output = await tool.run_test(project, "ok")

    assert output.success is True
    assert output.stdout == b"hello\n"
    assert mock_exec.call_args.args[:4] == ("cargo", "run", "--bin", "ok")
