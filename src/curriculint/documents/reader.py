"""Curriculum document reading from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML

from curriculint.models.curriculum import Curriculum
from curriculint.observability.logging import get_logger

log = get_logger(__name__)


class DocumentNotFoundError(Exception):
    """Raised when a curriculum document doesn't exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Curriculum document not found: {path}")


class DocumentParseError(Exception):
    """Raised when a curriculum document can't be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse curriculum document at {path}: {reason}")


class DocumentValidationError(Exception):
    """Raised when a parsed document doesn't match the curriculum models.

    Attributes:
        path: Document location.
        errors: ``field.path: message`` lines, one per problem.
    """

    def __init__(self, path: Path, errors: list[str]) -> None:
        self.path = path
        self.errors = errors
        error_list = "\n  - ".join(errors)
        super().__init__(f"Invalid curriculum document at {path}:\n  - {error_list}")


def pydantic_errors_to_lines(error: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``loc: msg`` lines."""
    lines: list[str] = []
    for detail in error.errors():
        loc = ".".join(str(part) for part in detail["loc"])
        lines.append(f"{loc}: {detail['msg']}" if loc else detail["msg"])
    return lines


def load_raw(path: Path) -> dict[str, Any]:
    """Load a document as a raw dictionary.

    ``.json`` files are read as JSON, everything else as YAML.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the file can't be parsed or isn't a mapping.
    """
    if not path.exists():
        raise DocumentNotFoundError(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = YAML(typ="safe").load(f)
    except Exception as e:
        raise DocumentParseError(path, str(e)) from e

    if data is None:
        raise DocumentParseError(path, "Empty file")
    if not isinstance(data, dict):
        raise DocumentParseError(
            path, f"Expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def read_curriculum(path: Path) -> Curriculum:
    """Read and validate a curriculum document.

    Args:
        path: Path to a YAML or JSON document.

    Returns:
        The parsed curriculum.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the file can't be parsed.
        DocumentValidationError: If the content doesn't match the models.
    """
    data = load_raw(path)
    try:
        curriculum = Curriculum.model_validate(data)
    except ValidationError as e:
        lines = pydantic_errors_to_lines(e)
        log.debug("document_validation_failed", path=str(path), error_count=len(lines))
        raise DocumentValidationError(path, lines) from e

    log.debug(
        "document_loaded",
        path=str(path),
        units=len(curriculum.units),
        scenarios=len(curriculum.boss_scenarios),
    )
    return curriculum
