"""Load compile test suite declarations from YAML files."""

import asyncio
from pathlib import Path

import yaml
from pydantic import ValidationError

from compile_snapshot.models.definition import SuiteDefinition


async def load_suite_definition(suite_path: Path) -> SuiteDefinition:
    """Load and validate a suite declaration file.

    Args:
        suite_path: Path to the suite YAML file

    Returns:
        Parsed suite definition

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML or fails validation

    """
    if not suite_path.is_file():
        raise FileNotFoundError(f"Suite file not found: {suite_path}")

    content = await asyncio.to_thread(suite_path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {suite_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty suite file: {suite_path}")

    try:
        return SuiteDefinition.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid suite definition schema in {suite_path}: {e}") from e
