"""Fixtures for integration tests."""

import stat
from pathlib import Path
from typing import Protocol

import pytest


class FakeCargoFn(Protocol):
    """Protocol for fake cargo creation function."""

    def __call__(
        self, *, exit_code: int = 0, stdout: str = "", stderr: str = ""
    ) -> Path:
        """Create an executable standing in for cargo and return its path."""


@pytest.fixture
def invocations(tmp_path: Path) -> Path:
    """Return the file the fake cargo appends its invocations to."""
    return tmp_path / "invocations.log"


@pytest.fixture
def fake_cargo(tmp_path: Path, invocations: Path) -> FakeCargoFn:
    """Return a function to create a scripted cargo executable."""

    def _create(*, exit_code: int = 0, stdout: str = "", stderr: str = "") -> Path:
        (tmp_path / "stdout.txt").write_text(stdout)
        (tmp_path / "stderr.txt").write_text(stderr)
        script = tmp_path / "cargo"
        script.write_text(
            "#!/bin/sh\n"
            f'echo "$(pwd) $CARGO_TARGET_DIR $*" >> "{invocations}"\n'
            f'cat "{tmp_path / "stdout.txt"}"\n'
            f'cat "{tmp_path / "stderr.txt"}" >&2\n'
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        return script

    return _create


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    """Create a minimal library crate with a ui test directory."""
    root = tmp_path / "demo"
    (root / "src").mkdir(parents=True)
    (root / "tests" / "ui").mkdir(parents=True)
    (root / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "0.1.0"\nedition = "2018"\n'
    )
    (root / "src" / "lib.rs").write_text(
        "pub fn double(value: u32) -> u32 {\n    value * 2\n}\n"
    )
    return root
