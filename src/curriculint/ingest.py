"""Merging machine-generated fragments into a curriculum.

A content generator may propose new boss scenarios and nodes from free
text. Before a fragment joins the authoritative document it goes through
the same lint as hand-authored content: a merge that introduces new errors
is refused.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from pydantic import Field, field_validator

from curriculint.lint.curriculum import validate_curriculum
from curriculint.lint.validation_types import LintIssue, LintResult, Reachability
from curriculint.models.curriculum import Curriculum, CurriculumNode, Unit
from curriculint.models.scenario import DocumentModel, Scenario, coerce_id
from curriculint.observability.logging import get_logger

log = get_logger(__name__)


class Fragment(DocumentModel):
    """Generated content destined for one unit."""

    unit_id: str = Field(min_length=1)
    unit_title: str | None = None
    nodes: list[CurriculumNode] = Field(default_factory=list)
    boss_scenarios: list[Scenario] = Field(default_factory=list)

    @field_validator("unit_id", mode="before")
    @classmethod
    def unit_id_as_str(cls, value: Any) -> Any:
        return coerce_id(value)


@dataclass
class FragmentConflictError(Exception):
    """Raised when a fragment reuses ids already in the curriculum.

    Attributes:
        node_ids: Node ids present in both.
        scenario_ids: Boss scenario ids present in both.
    """

    node_ids: list[str] = field(default_factory=list)
    scenario_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        parts = []
        if self.node_ids:
            parts.append(f"nodes {', '.join(self.node_ids)}")
        if self.scenario_ids:
            parts.append(f"boss scenarios {', '.join(self.scenario_ids)}")
        super().__init__(f"Fragment reuses existing ids: {'; '.join(parts)}")


@dataclass
class FragmentRejectedError(Exception):
    """Raised when merging a fragment would add lint errors.

    Attributes:
        result: Lint result of the merged document.
        new_errors: Errors present after the merge but not before.
    """

    result: LintResult
    new_errors: list[LintIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        lines = [f"Fragment rejected: {len(self.new_errors)} new error(s)"]
        for issue in self.new_errors[:5]:
            lines.append(f"  - {issue.message}")
        if len(self.new_errors) > 5:
            lines.append(f"  - ... and {len(self.new_errors) - 5} more")
        super().__init__("\n".join(lines))


def _find_conflicts(curriculum: Curriculum, fragment: Fragment) -> FragmentConflictError | None:
    existing_nodes = curriculum.node_ids()
    existing_scenarios = set(curriculum.scenario_by_id())
    node_ids = sorted({n.id for n in fragment.nodes} & existing_nodes)
    scenario_ids = sorted({s.id for s in fragment.boss_scenarios} & existing_scenarios)
    if node_ids or scenario_ids:
        return FragmentConflictError(node_ids=node_ids, scenario_ids=scenario_ids)
    return None


def apply_fragment(curriculum: Curriculum, fragment: Fragment) -> Curriculum:
    """Return a copy of ``curriculum`` with the fragment appended.

    Nodes go to the end of ``fragment.unit_id``; that unit is created at the
    end of the course when missing. No lint is run.
    """
    units = list(curriculum.units)
    target = curriculum.unit_by_id(fragment.unit_id)
    if target is None:
        units.append(
            Unit(
                id=fragment.unit_id,
                title=fragment.unit_title or fragment.unit_id,
                nodes=list(fragment.nodes),
            )
        )
    else:
        merged_unit = target.model_copy(update={"nodes": [*target.nodes, *fragment.nodes]})
        units = [merged_unit if u.id == target.id else u for u in units]

    return curriculum.model_copy(
        update={
            "units": units,
            "boss_scenarios": [*curriculum.boss_scenarios, *fragment.boss_scenarios],
        }
    )


def merge_fragment(
    curriculum: Curriculum,
    fragment: Fragment,
    *,
    reachability: Reachability = "incoming",
) -> tuple[Curriculum, LintResult]:
    """Lint-gated merge of a generated fragment.

    Pre-existing errors in ``curriculum`` do not block the merge; only
    errors the fragment adds do.

    Args:
        curriculum: The authoritative document.
        fragment: Generated content.
        reachability: Scene reachability rule for the lint.

    Returns:
        Tuple of (merged curriculum, its lint result).

    Raises:
        FragmentConflictError: If the fragment reuses existing node or scenario ids.
        FragmentRejectedError: If the merged document has errors the base document lacked.
    """
    conflict = _find_conflicts(curriculum, fragment)
    if conflict is not None:
        raise conflict

    before = Counter(validate_curriculum(curriculum, reachability=reachability).errors)
    merged = apply_fragment(curriculum, fragment)
    result = validate_curriculum(merged, reachability=reachability)

    remaining = before.copy()
    new_errors: list[LintIssue] = []
    for issue in result.errors:
        if remaining[issue] > 0:
            remaining[issue] -= 1
        else:
            new_errors.append(issue)

    if new_errors:
        log.warning(
            "fragment_rejected",
            unit_id=fragment.unit_id,
            new_errors=len(new_errors),
        )
        raise FragmentRejectedError(result=result, new_errors=new_errors)

    log.info(
        "fragment_merged",
        unit_id=fragment.unit_id,
        nodes=len(fragment.nodes),
        scenarios=len(fragment.boss_scenarios),
        warnings=result.warning_count,
    )
    return merged, result
