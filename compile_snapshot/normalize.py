"""Normalize raw build diagnostics into environment-independent text."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

DROPPED_LINE_PREFIXES: Sequence[str] = (
    "Compiling ",
    "Checking ",
    "Finished ",
    "Running ",
    "Blocking waiting for file lock",
    "warning: unused manifest key",
    "error: could not compile",
    "error: Could not compile",
    "error: aborting due to",
    "To learn more, run the command again with --verbose.",
)

VERSION_BANNER = re.compile(
    r"^(?:note: )?(?:rustc|cargo) \d+\.\d+\.\d+\S*(?: .*)?$"
)

ABSOLUTE_SPELLING = re.compile(r"^(?:[/\\]|[A-Za-z]:[/\\])")

# A directory only matches when the path ends or continues after it.
PATH_BOUNDARY = r"(?=[/\\:\s]|$)"


@dataclass(frozen=True, kw_only=True)
class NormalizationContext:
    """Absolute directories whose spelling must not leak into diagnostics."""

    project_dir: Path | None = None
    target_dir: Path | None = None
    manifest_dir: Path | None = None

    def replacements(self) -> list[tuple[re.Pattern[str], str]]:
        """Return (pattern, placeholder) pairs, longest directory first.

        Longest first so a project dir nested in the target dir is replaced
        before its parent. Relative spellings are skipped since they would
        match ordinary message text.
        """
        pairs: set[tuple[str, str]] = set()
        for directory, placeholder in (
            (self.project_dir, "$DIR"),
            (self.target_dir, "$TARGET"),
            (self.manifest_dir, "$CRATE"),
        ):
            if directory is None:
                continue
            spelling = str(directory).rstrip("/\\")
            if not ABSOLUTE_SPELLING.match(spelling):
                continue
            pairs.add((spelling, placeholder))
            pairs.add((spelling.replace("\\", "/"), placeholder))
            pairs.add((spelling.replace("/", "\\"), placeholder))
        return [
            (re.compile(re.escape(needle) + PATH_BOUNDARY), placeholder)
            for needle, placeholder in sorted(
                pairs, key=lambda pair: (-len(pair[0]), pair)
            )
        ]


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def diagnostics(raw: bytes, context: NormalizationContext | None = None) -> str:
    """Map raw build stderr to canonical text for comparison and storage.

    Deterministic and idempotent; message text, spans and severity labels
    are left as they are.
    """
    text = normalize_line_endings(raw.decode("utf-8", errors="replace"))
    replacements = context.replacements() if context is not None else []

    lines: list[str] = []
    for line in text.split("\n"):
        if is_noise(line):
            continue
        for pattern, placeholder in replacements:
            line = pattern.sub(placeholder, line)
        lines.append(line.rstrip())

    while lines and not lines[-1]:
        lines.pop()
    while lines and not lines[0]:
        lines.pop(0)

    return "\n".join(lines) + "\n" if lines else ""


def is_noise(line: str) -> bool:
    """Whether a line only carries build tool chatter, versions or timings."""
    stripped = line.strip()
    if stripped.startswith(DROPPED_LINE_PREFIXES):
        return True
    return VERSION_BANNER.match(stripped) is not None
