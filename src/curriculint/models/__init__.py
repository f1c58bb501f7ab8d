"""Pydantic models for curriculum documents.

Two graphs live in one document:
- Boss scenarios: scenes (nodes) joined by options (edges)
- The course: units of nodes joined by prerequisites, with boss nodes
  pointing at boss scenarios
"""

from curriculint.models.curriculum import (
    Curriculum,
    CurriculumNode,
    NodeType,
    Unit,
    UnitRequirements,
)
from curriculint.models.scenario import (
    DocumentModel,
    Option,
    Outcome,
    Scenario,
    Scene,
    coerce_id,
    next_free_id,
)

__all__ = [
    "Curriculum",
    "CurriculumNode",
    "DocumentModel",
    "NodeType",
    "Option",
    "Outcome",
    "Scenario",
    "Scene",
    "Unit",
    "UnitRequirements",
    "coerce_id",
    "next_free_id",
]
