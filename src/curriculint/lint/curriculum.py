"""Course-level lint over a whole curriculum document.

Runs, in order:
1. Per-scenario checks for every boss scenario
2. Prerequisite references against the node ids of all units
3. Boss node linkage to boss scenarios
4. Boss scenarios no node points at

The result is a fresh ``LintResult``; the document is only read.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from curriculint.lint.scenario import iter_scenario_issues
from curriculint.lint.validation_types import (
    BOSS_MISSING_SCENARIO_ID,
    BOSS_UNGATED,
    BOSS_UNKNOWN_SCENARIO,
    MISSING_PREREQUISITE,
    ORPHAN_SCENARIO,
    LintIssue,
    LintResult,
    Reachability,
)
from curriculint.observability.logging import get_logger

if TYPE_CHECKING:
    from curriculint.models.curriculum import Curriculum

log = get_logger(__name__)


def check_prerequisites(curriculum: Curriculum) -> list[LintIssue]:
    """Flag prerequisites that name no node in any unit.

    One error per missing prerequisite entry.
    """
    all_node_ids = curriculum.node_ids()
    issues: list[LintIssue] = []
    for unit, node in curriculum.all_nodes():
        for pre_id in node.prerequisites or []:
            if pre_id not in all_node_ids:
                issues.append(
                    LintIssue(
                        level="error",
                        scope="node",
                        code=MISSING_PREREQUISITE,
                        unit_id=unit.id,
                        node_id=node.id,
                        ref_id=pre_id,
                        message=(
                            f'Node "{node.id}" in unit "{unit.id}" has prerequisite '
                            f'"{pre_id}" that does not exist in any unit.'
                        ),
                    )
                )
    return issues


def check_boss_nodes(curriculum: Curriculum) -> tuple[list[LintIssue], Counter[str]]:
    """Check every boss node's scenario link and gating.

    Returns:
        Tuple of (issues, reference count per existing scenario id).
    """
    scenarios = curriculum.scenario_by_id()
    references: Counter[str] = Counter()
    issues: list[LintIssue] = []

    for unit, node in curriculum.all_nodes():
        if not node.is_boss:
            continue

        if node.boss_scenario_id is None:
            issues.append(
                LintIssue(
                    level="error",
                    scope="node",
                    code=BOSS_MISSING_SCENARIO_ID,
                    unit_id=unit.id,
                    node_id=node.id,
                    message=f'Boss node "{node.id}" in unit "{unit.id}" has no bossScenarioId.',
                )
            )
        elif node.boss_scenario_id not in scenarios:
            issues.append(
                LintIssue(
                    level="error",
                    scope="node",
                    code=BOSS_UNKNOWN_SCENARIO,
                    unit_id=unit.id,
                    node_id=node.id,
                    ref_id=node.boss_scenario_id,
                    message=(
                        f'Boss node "{node.id}" in unit "{unit.id}" references '
                        f'bossScenarioId "{node.boss_scenario_id}" that does not exist.'
                    ),
                )
            )
        else:
            references[node.boss_scenario_id] += 1

        if not node.prerequisites:
            issues.append(
                LintIssue(
                    level="warning",
                    scope="node",
                    code=BOSS_UNGATED,
                    unit_id=unit.id,
                    node_id=node.id,
                    message=(
                        f'Boss node "{node.id}" in unit "{unit.id}" has no prerequisites '
                        "and will be unlocked immediately."
                    ),
                )
            )

    return issues, references


def check_orphan_scenarios(curriculum: Curriculum, references: Counter[str]) -> list[LintIssue]:
    """Flag boss scenarios that no boss node references."""
    return [
        LintIssue(
            level="warning",
            scope="bossScenario",
            code=ORPHAN_SCENARIO,
            boss_id=scenario.id,
            message=(
                f'Boss scenario "{scenario.title}" ({scenario.id}) is not referenced '
                "by any node (orphan boss)."
            ),
        )
        for scenario in curriculum.boss_scenarios
        if references[scenario.id] == 0
    ]


def validate_curriculum(
    curriculum: Curriculum,
    *,
    reachability: Reachability = "incoming",
) -> LintResult:
    """Lint a whole curriculum document.

    Args:
        curriculum: The document to check.
        reachability: Scene reachability rule passed to the scenario checks.

    Returns:
        LintResult holding every issue found; never raises for a
        well-typed document.
    """
    issues: list[LintIssue] = []

    for scenario in curriculum.boss_scenarios:
        issues.extend(iter_scenario_issues(scenario, reachability=reachability))

    issues.extend(check_prerequisites(curriculum))

    boss_issues, references = check_boss_nodes(curriculum)
    issues.extend(boss_issues)

    issues.extend(check_orphan_scenarios(curriculum, references))

    result = LintResult(issues=issues)
    log.info(
        "curriculum_validated",
        units=len(curriculum.units),
        scenarios=len(curriculum.boss_scenarios),
        errors=result.error_count,
        warnings=result.warning_count,
    )
    return result
