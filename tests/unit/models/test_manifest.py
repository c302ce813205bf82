"""Tests for manifest and build config serialization."""

import toml

from compile_snapshot.models.manifest import (
    Bin,
    BuildConfig,
    Dependency,
    Manifest,
    Package,
)


def test_manifest_to_toml() -> None:
    """Serializes package, dependencies, binaries and an empty workspace."""
    manifest = Manifest(
        package=Package(name="demo-tests"),
        dependencies={
            "demo": Dependency(path="/src/demo"),
            "serde": Dependency(version="1.0", rest={"features": ["derive"]}),
        },
        bins=[
            Bin(name="demo-tests", path="main.rs"),
            Bin(name="bad_case", path="/src/demo/tests/ui/bad-case.rs"),
        ],
    )

    parsed = toml.loads(manifest.to_toml())

    assert parsed["package"] == {
        "name": "demo-tests",
        "version": "0.0.0",
        "edition": "2018",
        "publish": False,
    }
    assert parsed["dependencies"] == {
        "demo": {"path": "/src/demo"},
        "serde": {"version": "1.0", "features": ["derive"]},
    }
    assert parsed["bin"] == [
        {"name": "demo-tests", "path": "main.rs"},
        {"name": "bad_case", "path": "/src/demo/tests/ui/bad-case.rs"},
    ]
    assert parsed["workspace"] == {}


def test_dependency_table_omits_unset_keys() -> None:
    """Unset version and path are left out of the table."""
    assert Dependency(rest={"git": "https://x/y.git"}).to_table() == {
        "git": "https://x/y.git"
    }


def test_build_config_allows_each_lint() -> None:
    """Each ignored lint becomes an allow flag pair."""
    config = BuildConfig.allowing(["dead_code", "unused_imports"])

    assert config.rustflags == ["-A", "dead_code", "-A", "unused_imports"]
    assert toml.loads(config.to_toml()) == {
        "build": {"rustflags": ["-A", "dead_code", "-A", "unused_imports"]}
    }
