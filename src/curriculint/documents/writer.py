"""Curriculum document writing to YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML

if TYPE_CHECKING:
    from curriculint.models.curriculum import Curriculum


class DocumentWriteError(Exception):
    """Raised when a curriculum document can't be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write curriculum document at {path}: {reason}")


def dump_curriculum(curriculum: Curriculum) -> dict[str, Any]:
    """Serialize to the camelCase document shape, dropping unset fields."""
    return curriculum.model_dump(mode="json", by_alias=True, exclude_none=True)


def write_curriculum(curriculum: Curriculum, path: Path) -> Path:
    """Write a curriculum document.

    ``.json`` paths are written as indented JSON, everything else as YAML.

    Args:
        curriculum: Document to write.
        path: Destination file. Parent directories are created.

    Returns:
        The path written.

    Raises:
        DocumentWriteError: If the document can't be written.
    """
    data = dump_curriculum(curriculum)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            else:
                yaml = YAML()
                yaml.default_flow_style = False
                yaml.indent(mapping=2, sequence=4, offset=2)
                yaml.dump(data, f)
    except OSError as e:
        raise DocumentWriteError(path, str(e)) from e
    return path
