"""Structural checks for a single boss scenario.

These are pure, deterministic functions over the dialogue graph. They never
raise on a well-typed scenario: defects come back as ``LintIssue`` values.

Checks:
- The initial scene exists
- Every ``next_scene_id`` names a scene in the same scenario
- Every scene other than the initial one has at least one incoming option

The incoming-reference rule is local: a cluster of scenes that point at each
other but hang off nothing is not flagged. Passing ``reachability="entry"``
adds a breadth-first walk from the initial scene that reports those too.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from curriculint.lint.validation_types import (
    DANGLING_NEXT_SCENE,
    MISSING_INITIAL_SCENE,
    UNREACHABLE_FROM_ENTRY,
    UNREACHED_SCENE,
    LintIssue,
    Reachability,
)
from curriculint.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from curriculint.models.scenario import Scenario

log = get_logger(__name__)


def count_incoming(scenario: Scenario) -> dict[str, int]:
    """Count options pointing at each scene.

    Only references to existing scenes are counted. A self-loop counts as an
    incoming reference to its own scene.

    Args:
        scenario: The boss scenario.

    Returns:
        Dict mapping every scene ID to its number of incoming options.
    """
    incoming = {scene.id: 0 for scene in scenario.scenes}
    for scene in scenario.scenes:
        for opt in scene.options:
            if opt.next_scene_id and opt.next_scene_id in incoming:
                incoming[opt.next_scene_id] += 1
    return incoming


def reachable_from_entry(scenario: Scenario) -> set[str]:
    """Return scene IDs reachable from the initial scene (inclusive).

    Returns an empty set when the initial scene does not exist.
    """
    scenes = {scene.id: scene for scene in scenario.scenes}
    if scenario.initial_scene_id not in scenes:
        return set()

    seen = {scenario.initial_scene_id}
    queue: deque[str] = deque([scenario.initial_scene_id])
    while queue:
        current = scenes[queue.popleft()]
        for opt in current.options:
            target = opt.next_scene_id
            if target and target in scenes and target not in seen:
                seen.add(target)
                queue.append(target)
    return seen


def iter_scenario_issues(
    scenario: Scenario,
    *,
    reachability: Reachability = "incoming",
) -> Iterator[LintIssue]:
    """Yield structural issues for one scenario, tagged with its boss id."""
    boss = scenario.id
    scene_ids = scenario.scene_ids()

    if scenario.initial_scene_id not in scene_ids:
        yield LintIssue(
            level="error",
            scope="bossScenario",
            code=MISSING_INITIAL_SCENE,
            boss_id=boss,
            ref_id=scenario.initial_scene_id,
            message=(
                f'Boss "{scenario.title}" ({boss}) has initialSceneId '
                f'"{scenario.initial_scene_id}" that does not exist.'
            ),
        )

    for scene in scenario.scenes:
        for opt in scene.options:
            if opt.next_scene_id and opt.next_scene_id not in scene_ids:
                yield LintIssue(
                    level="error",
                    scope="option",
                    code=DANGLING_NEXT_SCENE,
                    boss_id=boss,
                    scene_id=scene.id,
                    option_id=opt.id,
                    ref_id=opt.next_scene_id,
                    message=(
                        f'Boss "{boss}" option "{opt.id}" in scene "{scene.id}" '
                        f'points to missing scene "{opt.next_scene_id}".'
                    ),
                )

    incoming = count_incoming(scenario)
    for scene in scenario.scenes:
        if scene.id != scenario.initial_scene_id and incoming.get(scene.id, 0) == 0:
            yield LintIssue(
                level="warning",
                scope="scene",
                code=UNREACHED_SCENE,
                boss_id=boss,
                scene_id=scene.id,
                message=(
                    f'Boss "{boss}" scene "{scene.id}" is never reached '
                    "(no options reference it, and it is not the initial scene)."
                ),
            )

    # A missing entry point is already an error; walking from it would flag every scene.
    if reachability == "entry" and scenario.initial_scene_id in scene_ids:
        reached = reachable_from_entry(scenario)
        for scene in scenario.scenes:
            if scene.id not in reached and incoming.get(scene.id, 0) > 0:
                yield LintIssue(
                    level="warning",
                    scope="scene",
                    code=UNREACHABLE_FROM_ENTRY,
                    boss_id=boss,
                    scene_id=scene.id,
                    message=(
                        f'Boss "{boss}" scene "{scene.id}" is referenced only from scenes '
                        f'that cannot be reached from "{scenario.initial_scene_id}".'
                    ),
                )


def validate_scenario(
    scenario: Scenario,
    *,
    reachability: Reachability = "incoming",
) -> list[LintIssue]:
    """Validate one boss scenario's dialogue graph.

    Args:
        scenario: The scenario to check.
        reachability: "incoming" flags scenes nothing points at; "entry"
            additionally flags scenes unreachable from the initial scene.

    Returns:
        List of issues, empty when the scenario is clean.
    """
    issues = list(iter_scenario_issues(scenario, reachability=reachability))
    log.debug(
        "scenario_validated",
        boss_id=scenario.id,
        scenes=len(scenario.scenes),
        issues=len(issues),
    )
    return issues
