"""Assemble a curriculum from record-store rows.

The backend keeps units and nodes as flat rows keyed by id with snake_case
columns (``unit_id``, ``order_index``, ``boss_scenario_id``, ...). This
module turns those rows into the nested document the lint works on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from curriculint.models.curriculum import Curriculum, CurriculumNode, Unit
from curriculint.models.scenario import Scenario

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

# Row columns carried onto nodes as display extras (column -> document key)
NODE_EXTRA_COLUMNS = {
    "content_blocks": "contentBlocks",
    "educational_content": "educationalContent",
    "target_dimension": "targetDimension",
    "recovery_stage": "recoveryStage",
    "risk_level": "riskLevel",
}


def _order_key(row: Mapping[str, Any]) -> int:
    order = row.get("order_index")
    return order if isinstance(order, int) else 0


def node_from_record(row: Mapping[str, Any]) -> CurriculumNode:
    """Build a node from a ``curriculum_nodes`` row.

    A missing ``prerequisites`` column stays absent rather than becoming an
    empty list, so lint can tell "never set" apart from "explicitly none".
    """
    data: dict[str, Any] = {
        "id": row["id"],
        "type": row["type"],
        "title": row.get("title") or "",
        "description": row.get("description"),
        "xpReward": row.get("xp_reward") or 0,
        "bossScenarioId": row.get("boss_scenario_id"),
        "prerequisites": row.get("prerequisites"),
    }
    for column, key in NODE_EXTRA_COLUMNS.items():
        if row.get(column) is not None:
            data[key] = row[column]
    return CurriculumNode.model_validate(data)


def unit_from_record(row: Mapping[str, Any], nodes: list[CurriculumNode]) -> Unit:
    return Unit.model_validate(
        {
            "id": row["id"],
            "title": row.get("title") or "",
            "description": row.get("description") or "",
            "color": row.get("color") or "indigo",
            "requirements": row.get("requirements") or {"minXP": 0},
            "nodes": nodes,
        }
    )


def curriculum_from_records(
    units: Iterable[Mapping[str, Any]],
    nodes: Iterable[Mapping[str, Any]],
    scenarios: Iterable[Mapping[str, Any] | Scenario] = (),
) -> Curriculum:
    """Build a curriculum document from flat rows.

    Units and nodes are ordered by ``order_index``. Nodes whose ``unit_id``
    matches no unit are dropped, as the store's own unit filter would.

    Args:
        units: ``curriculum_units`` rows.
        nodes: ``curriculum_nodes`` rows.
        scenarios: Boss scenarios, as documents or models.

    Returns:
        The assembled curriculum.

    Raises:
        pydantic.ValidationError: If a row can't be turned into a model.
    """
    by_unit: dict[str, list[Mapping[str, Any]]] = {}
    for row in nodes:
        by_unit.setdefault(str(row.get("unit_id")), []).append(row)

    built_units = []
    for unit_row in sorted(units, key=_order_key):
        rows = sorted(by_unit.get(str(unit_row["id"]), []), key=_order_key)
        unit_nodes = [node_from_record(r) for r in rows]
        built_units.append(unit_from_record(unit_row, unit_nodes))

    built_scenarios = [
        s if isinstance(s, Scenario) else Scenario.model_validate(s) for s in scenarios
    ]
    return Curriculum(units=built_units, boss_scenarios=built_scenarios)
