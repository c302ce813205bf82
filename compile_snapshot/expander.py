"""Expand declared test paths containing glob patterns into concrete tests."""

import glob
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from compile_snapshot.errors import GlobExpansionError
from compile_snapshot.models.definition import TestSpec

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Resolved:
    """Test whose path is concrete (it may still not exist on disk)."""

    test: TestSpec


@dataclass(frozen=True, kw_only=True)
class ExpansionFailed:
    """Declared test whose pattern could not be expanded.

    The error is reported when the test's turn comes in the run, so that
    failures stay in declaration order.
    """

    test: TestSpec
    error: GlobExpansionError


ExpandedTest: TypeAlias = Resolved | ExpansionFailed


def expand_globs(
    tests: Sequence[TestSpec], root: Path | None = None
) -> list[ExpandedTest]:
    """Expand every glob pattern in declaration order.

    Relative patterns are resolved against ``root`` (the current directory
    when omitted) and their matches stay relative to it.

    Paths without glob characters pass through untouched, even when missing.
    Matches of a pattern are sorted and inherit the pattern's expectation.
    """
    expanded: list[ExpandedTest] = []

    for test in tests:
        pattern = str(test.path)
        if not glob.has_magic(pattern):
            expanded.append(Resolved(test=test))
            continue

        try:
            paths = resolve_pattern(pattern, root)
        except GlobExpansionError as error:
            log.warning("%s", error)
            expanded.append(ExpansionFailed(test=test, error=error))
            continue

        log.debug("Pattern %s matched %d file(s)", pattern, len(paths))
        expanded.extend(
            Resolved(test=TestSpec(path=path, expected=test.expected))
            for path in paths
        )

    return expanded


def resolve_pattern(pattern: str, root: Path | None = None) -> list[Path]:
    """Resolve a glob pattern against the filesystem.

    Raises:
        GlobExpansionError: If the pattern is malformed or the filesystem
            cannot be read

    """
    validate_pattern(pattern)
    try:
        matches = glob.glob(pattern, root_dir=root, recursive=True)
    except OSError as exc:
        raise GlobExpansionError(pattern, str(exc)) from exc
    return [Path(match) for match in sorted(matches)]


def validate_pattern(pattern: str) -> None:
    """Reject patterns the glob module would silently misinterpret.

    A recursive wildcard must be a whole path component and every character
    class must be closed.
    """
    for component in pattern.replace("\\", "/").split("/"):
        if "**" in component and component != "**":
            raise GlobExpansionError(
                pattern, "recursive wildcards must form an entire path component"
            )

        position = 0
        while (start := component.find("[", position)) != -1:
            # A "]" right after "[" or "[!" is a literal member of the class.
            search_from = start + 1
            if component.startswith("!", search_from):
                search_from += 1
            end = component.find("]", search_from + 1)
            if end == -1:
                raise GlobExpansionError(pattern, "unclosed character class")
            position = end + 1
