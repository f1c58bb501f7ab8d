"""Authoring operations on boss scenarios.

Every function returns a new ``Scenario`` and leaves its input untouched, so
an editor can keep the previous version for undo and re-lint on demand.

Referencing a scene or option that does not exist is a caller bug and
raises; structural defects an edit leaves behind (a dangling
``next_scene_id`` after a delete, say) are the lint's job to report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from difflib import get_close_matches
from typing import TYPE_CHECKING

from curriculint.models.scenario import Option, Scenario, Scene, next_free_id

if TYPE_CHECKING:
    from collections.abc import Callable

NEW_SCENE_PREFIX = "scene_"
NEW_SCENE_TEXT = "New scene..."
NEW_OPTION_PREFIX = "opt_"
NEW_OPTION_TEXT = "New choice"
NEW_OPTION_FEEDBACK = "Feedback..."


class EditError(Exception):
    """Base class for invalid authoring operations."""


@dataclass
class SceneNotFoundError(EditError):
    """Raised when an edit targets a scene the scenario does not have.

    Attributes:
        scene_id: The scene that was asked for.
        boss_id: Scenario being edited.
        available: Scene ids that do exist.
    """

    scene_id: str
    boss_id: str
    available: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        msg = f"Scene '{self.scene_id}' not found in boss scenario '{self.boss_id}'"
        suggestions = get_close_matches(self.scene_id, self.available, n=3, cutoff=0.6)
        if suggestions:
            msg += f" (did you mean: {', '.join(suggestions)}?)"
        super().__init__(msg)


@dataclass
class OptionNotFoundError(EditError):
    """Raised when an edit targets an option the scene does not have."""

    option_id: str
    scene_id: str

    def __post_init__(self) -> None:
        super().__init__(f"Option '{self.option_id}' not found in scene '{self.scene_id}'")


@dataclass
class LastSceneError(EditError):
    """Raised when deleting the only scene of a scenario."""

    boss_id: str

    def __post_init__(self) -> None:
        super().__init__(f"Boss scenario '{self.boss_id}' must keep at least one scene")


def _require_scene(scenario: Scenario, scene_id: str) -> Scene:
    scene = scenario.scene_by_id(scene_id)
    if scene is None:
        raise SceneNotFoundError(
            scene_id=scene_id,
            boss_id=scenario.id,
            available=[s.id for s in scenario.scenes],
        )
    return scene


def update_scene(
    scenario: Scenario,
    scene_id: str,
    updater: Callable[[Scene], Scene],
) -> Scenario:
    """Replace one scene with ``updater(scene)``.

    Raises:
        SceneNotFoundError: If the scene does not exist.
    """
    _require_scene(scenario, scene_id)
    scenes = [updater(s) if s.id == scene_id else s for s in scenario.scenes]
    return scenario.model_copy(update={"scenes": scenes})


def add_scene(scenario: Scenario, text: str = NEW_SCENE_TEXT) -> tuple[Scenario, str]:
    """Append an empty scene with the next free ``scene_<n>`` id.

    Returns:
        Tuple of (updated scenario, new scene id).
    """
    new_id = next_free_id(NEW_SCENE_PREFIX, scenario.scene_ids())
    scene = Scene(id=new_id, text=text, options=[])
    return scenario.model_copy(update={"scenes": [*scenario.scenes, scene]}), new_id


def delete_scene(scenario: Scenario, scene_id: str) -> Scenario:
    """Remove a scene.

    Deleting the initial scene promotes the first remaining scene. Options
    elsewhere that pointed at the deleted scene are left as they are.

    Raises:
        SceneNotFoundError: If the scene does not exist.
        LastSceneError: If it is the only scene.
    """
    _require_scene(scenario, scene_id)
    if len(scenario.scenes) <= 1:
        raise LastSceneError(boss_id=scenario.id)

    remaining = [s for s in scenario.scenes if s.id != scene_id]
    initial = scenario.initial_scene_id
    if scene_id == initial:
        initial = remaining[0].id
    return scenario.model_copy(update={"scenes": remaining, "initial_scene_id": initial})


def add_option(
    scenario: Scenario,
    scene_id: str,
    *,
    text: str = NEW_OPTION_TEXT,
    next_scene_id: str | None = None,
) -> tuple[Scenario, str]:
    """Append a neutral option to a scene.

    Returns:
        Tuple of (updated scenario, new option id).

    Raises:
        SceneNotFoundError: If the scene does not exist.
    """
    scene = _require_scene(scenario, scene_id)
    option_id = next_free_id(NEW_OPTION_PREFIX, {o.id for o in scene.options})
    option = Option(
        id=option_id,
        text=text,
        outcome="neutral",
        feedback=NEW_OPTION_FEEDBACK,
        next_scene_id=next_scene_id,
    )
    updated = update_scene(
        scenario,
        scene_id,
        lambda s: s.model_copy(update={"options": [*s.options, option]}),
    )
    return updated, option_id


def update_option(
    scenario: Scenario,
    scene_id: str,
    option_id: str,
    updater: Callable[[Option], Option],
) -> Scenario:
    """Replace one option with ``updater(option)``.

    Raises:
        SceneNotFoundError: If the scene does not exist.
        OptionNotFoundError: If the option does not exist in that scene.
    """
    scene = _require_scene(scenario, scene_id)
    if scene.option_by_id(option_id) is None:
        raise OptionNotFoundError(option_id=option_id, scene_id=scene_id)
    return update_scene(
        scenario,
        scene_id,
        lambda s: s.model_copy(
            update={"options": [updater(o) if o.id == option_id else o for o in s.options]}
        ),
    )


def delete_option(scenario: Scenario, scene_id: str, option_id: str) -> Scenario:
    """Remove an option from a scene.

    Raises:
        SceneNotFoundError: If the scene does not exist.
        OptionNotFoundError: If the option does not exist in that scene.
    """
    scene = _require_scene(scenario, scene_id)
    if scene.option_by_id(option_id) is None:
        raise OptionNotFoundError(option_id=option_id, scene_id=scene_id)
    return update_scene(
        scenario,
        scene_id,
        lambda s: s.model_copy(update={"options": [o for o in s.options if o.id != option_id]}),
    )
