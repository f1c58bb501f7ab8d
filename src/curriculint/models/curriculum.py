"""Curriculum (course graph) models.

A curriculum is an ordered list of units, each an ordered list of nodes.
Nodes gate each other through ``prerequisites`` and boss nodes point at a
boss scenario through ``boss_scenario_id``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from curriculint.models.scenario import DocumentModel, Scenario, coerce_id

NodeType = Literal["lesson", "activity", "challenge", "boss", "chest", "trait_module"]


class CurriculumNode(DocumentModel):
    """A single stop on the course path.

    Display fields the lint does not inspect (``targetDimension``,
    ``contentBlocks`` and friends) are kept as extras so a document survives
    a read/write round trip.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(min_length=1)
    type: NodeType
    title: str = ""
    description: str | None = None
    xp_reward: int = 0
    prerequisites: list[str] | None = None
    boss_scenario_id: str | None = None

    @field_validator("id", "boss_scenario_id", mode="before")
    @classmethod
    def ids_as_str(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("prerequisites", mode="before")
    @classmethod
    def prerequisite_ids_as_str(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [coerce_id(v) for v in value]
        return value

    @property
    def is_boss(self) -> bool:
        return self.type == "boss"


class UnitRequirements(DocumentModel):
    """Unlock requirement for a unit."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    min_xp: int = Field(default=0, alias="minXP", ge=0)


class Unit(DocumentModel):
    """An ordered group of nodes plus display metadata."""

    id: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    color: str = "indigo"
    requirements: UnitRequirements = Field(default_factory=UnitRequirements)
    nodes: list[CurriculumNode] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("requirements", mode="before")
    @classmethod
    def null_requirements(cls, value: Any) -> Any:
        return {} if value is None else value


class Curriculum(DocumentModel):
    """Root aggregate: units plus the boss scenarios their boss nodes use."""

    units: list[Unit] = Field(default_factory=list)
    boss_scenarios: list[Scenario] = Field(default_factory=list)

    @field_validator("boss_scenarios", mode="before")
    @classmethod
    def null_scenarios(cls, value: Any) -> Any:
        return [] if value is None else value

    def all_nodes(self) -> Iterator[tuple[Unit, CurriculumNode]]:
        """Yield ``(unit, node)`` pairs in document order."""
        for unit in self.units:
            for node in unit.nodes:
                yield unit, node

    def node_ids(self) -> set[str]:
        return {node.id for _, node in self.all_nodes()}

    def scenario_by_id(self) -> dict[str, Scenario]:
        """Map scenario id to scenario. A later duplicate id wins."""
        return {scenario.id: scenario for scenario in self.boss_scenarios}

    def unit_by_id(self, unit_id: str) -> Unit | None:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None
