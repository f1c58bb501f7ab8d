"""Curriculum document reading, writing and record-store conversion."""

from curriculint.documents.reader import (
    DocumentNotFoundError,
    DocumentParseError,
    DocumentValidationError,
    load_raw,
    pydantic_errors_to_lines,
    read_curriculum,
)
from curriculint.documents.records import (
    curriculum_from_records,
    node_from_record,
    unit_from_record,
)
from curriculint.documents.writer import (
    DocumentWriteError,
    dump_curriculum,
    write_curriculum,
)

__all__ = [
    "DocumentNotFoundError",
    "DocumentParseError",
    "DocumentValidationError",
    "DocumentWriteError",
    "curriculum_from_records",
    "dump_curriculum",
    "load_raw",
    "node_from_record",
    "pydantic_errors_to_lines",
    "read_curriculum",
    "unit_from_record",
    "write_curriculum",
]
