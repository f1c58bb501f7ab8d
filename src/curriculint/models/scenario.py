"""Boss scenario models.

A boss scenario is a branching dialogue graph: scenes are the nodes and
options are the edges. An option either names the scene it leads to
(``next_scene_id``) or ends the encounter.

Documents use camelCase keys (``nextSceneId``, ``initialSceneId``); the
models expose snake_case attributes and accept both spellings.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Outcome = Literal["safe", "risk", "neutral"]


def coerce_id(value: Any) -> Any:
    """Coerce numeric identifiers to strings.

    Scenario, scene, option and node ids arrive as ``str | int`` from older
    documents, YAML and the record store. Everything past the model boundary
    sees ``str``.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _missing_id(value: Any) -> bool:
    return value is None or value == ""


def next_free_id(prefix: str, taken: set[str]) -> str:
    """Return ``<prefix><n>`` for the smallest n >= 1 not in ``taken``."""
    idx = 1
    while f"{prefix}{idx}" in taken:
        idx += 1
    return f"{prefix}{idx}"


class DocumentModel(BaseModel):
    """Base for curriculum document models (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Option(DocumentModel):
    """A player choice inside a scene.

    ``damage``, ``xp`` and ``tags`` are optional: ``None`` means the author
    never set them, which is distinct from an explicit ``0`` or ``[]``.
    """

    id: str = Field(min_length=1)
    text: str = ""
    outcome: Outcome = "neutral"
    feedback: str = ""
    next_scene_id: str | None = Field(
        default=None,
        description="Scene this option leads to; absent means the option ends the scenario",
    )
    damage: float | None = None
    xp: float | None = None
    tags: list[str] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("next_scene_id", mode="before")
    @classmethod
    def blank_next_scene_is_ending(cls, value: Any) -> Any:
        """Treat an empty ``nextSceneId`` as an ending option."""
        if value == "":
            return None
        return coerce_id(value)

    @property
    def is_ending(self) -> bool:
        return self.next_scene_id is None


class Scene(DocumentModel):
    """One node of a dialogue graph. A scene with no options is an ending."""

    id: str = Field(min_length=1)
    text: str = ""
    options: list[Option] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value: Any) -> Any:
        return coerce_id(value)

    @model_validator(mode="before")
    @classmethod
    def assign_missing_option_ids(cls, data: Any) -> Any:
        """Give id-less options an ``opt_<n>`` id unused within the scene.

        The positional id is kept when free; otherwise the lowest free
        ``opt_<n>`` is taken.
        """
        if not isinstance(data, dict):
            return data
        options = data.get("options")
        if not isinstance(options, list):
            return data
        taken = {
            str(coerce_id(opt["id"]))
            for opt in options
            if isinstance(opt, dict) and not _missing_id(opt.get("id"))
        }
        patched: list[Any] = []
        for idx, opt in enumerate(options, start=1):
            if isinstance(opt, dict) and _missing_id(opt.get("id")):
                new_id = f"opt_{idx}"
                if new_id in taken:
                    new_id = next_free_id("opt_", taken)
                taken.add(new_id)
                opt = {**opt, "id": new_id}
            patched.append(opt)
        return {**data, "options": patched}

    def option_by_id(self, option_id: str) -> Option | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


class Scenario(DocumentModel):
    """A boss scenario: a dialogue graph entered at ``initial_scene_id``.

    ``scenes`` may be given either as a list or as the runtime mapping of
    scene id to scene; the mapping form is converted to a list in key order.
    """

    id: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    initial_scene_id: str
    scenes: list[Scene] = Field(default_factory=list)

    @field_validator("id", "initial_scene_id", mode="before")
    @classmethod
    def ids_as_str(cls, value: Any) -> Any:
        return coerce_id(value)

    @model_validator(mode="before")
    @classmethod
    def scenes_from_mapping(cls, data: Any) -> Any:
        """Accept ``scenes`` keyed by scene id."""
        if not isinstance(data, dict):
            return data
        scenes = data.get("scenes")
        if not isinstance(scenes, dict):
            return data
        converted: list[Any] = []
        for key, scene in scenes.items():
            if isinstance(scene, dict) and _missing_id(scene.get("id")):
                scene = {**scene, "id": key}
            converted.append(scene)
        return {**data, "scenes": converted}

    def scene_ids(self) -> set[str]:
        return {scene.id for scene in self.scenes}

    def scene_by_id(self, scene_id: str) -> Scene | None:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        return None
