"""Tests for boss scenario authoring operations."""

from __future__ import annotations

import pytest

from curriculint.editing import (
    NEW_OPTION_FEEDBACK,
    NEW_SCENE_TEXT,
    LastSceneError,
    OptionNotFoundError,
    SceneNotFoundError,
    add_option,
    add_scene,
    delete_option,
    delete_scene,
    update_option,
    update_scene,
)
from curriculint.lint import validate_scenario
from curriculint.lint.validation_types import DANGLING_NEXT_SCENE, UNREACHED_SCENE
from curriculint.models import Scenario
from tests.fixtures.curriculum_fixtures import make_scenario


class TestScenes:
    def test_add_scene(self, clean_scenario: Scenario) -> None:
        updated, new_id = add_scene(clean_scenario)

        assert new_id == "scene_1"
        assert updated.scene_ids() == {"A", "B", "scene_1"}
        new_scene = updated.scene_by_id(new_id)
        assert new_scene is not None
        assert new_scene.text == NEW_SCENE_TEXT
        assert new_scene.options == []
        assert clean_scenario.scene_ids() == {"A", "B"}

    def test_new_scene_is_unreached_until_linked(self, clean_scenario: Scenario) -> None:
        updated, new_id = add_scene(clean_scenario)
        codes = [(i.code, i.scene_id) for i in validate_scenario(updated)]
        assert codes == [(UNREACHED_SCENE, new_id)]

    def test_update_scene(self, clean_scenario: Scenario) -> None:
        updated = update_scene(
            clean_scenario, "B", lambda s: s.model_copy(update={"text": "Home."})
        )
        scene = updated.scene_by_id("B")
        assert scene is not None
        assert scene.text == "Home."

    def test_update_unknown_scene_suggests(self) -> None:
        scenario = make_scenario({"intro": ["outro"], "outro": []}, initial="intro")
        with pytest.raises(SceneNotFoundError, match="did you mean: intro"):
            update_scene(scenario, "intr", lambda s: s)

    def test_delete_scene_leaves_dangling_reference(self, clean_scenario: Scenario) -> None:
        updated = delete_scene(clean_scenario, "B")
        assert updated.scene_ids() == {"A"}
        assert [i.code for i in validate_scenario(updated)] == [DANGLING_NEXT_SCENE]

    def test_delete_initial_scene_promotes_first_remaining(self) -> None:
        scenario = make_scenario({"A": ["B"], "B": ["C"], "C": []})
        updated = delete_scene(scenario, "A")
        assert updated.initial_scene_id == "B"

    def test_delete_last_scene_refused(self) -> None:
        scenario = make_scenario({"A": []})
        with pytest.raises(LastSceneError):
            delete_scene(scenario, "A")

    def test_delete_unknown_scene(self, clean_scenario: Scenario) -> None:
        with pytest.raises(SceneNotFoundError) as exc_info:
            delete_scene(clean_scenario, "Q")
        assert exc_info.value.boss_id == "7"
        assert exc_info.value.available == ["A", "B"]


class TestOptions:
    def test_add_option(self, clean_scenario: Scenario) -> None:
        updated, option_id = add_option(clean_scenario, "B", next_scene_id="A")

        assert option_id == "opt_1"
        scene = updated.scene_by_id("B")
        assert scene is not None
        option = scene.option_by_id(option_id)
        assert option is not None
        assert option.outcome == "neutral"
        assert option.feedback == NEW_OPTION_FEEDBACK
        assert option.next_scene_id == "A"

    def test_add_option_defaults_to_ending(self, clean_scenario: Scenario) -> None:
        updated, option_id = add_option(clean_scenario, "A")
        scene = updated.scene_by_id("A")
        assert scene is not None
        option = scene.option_by_id(option_id)
        assert option is not None
        assert option.is_ending
        assert len(scene.options) == 2

    def test_update_option(self, clean_scenario: Scenario) -> None:
        updated = update_option(
            clean_scenario,
            "A",
            "A_o1",
            lambda o: o.model_copy(update={"next_scene_id": "Z"}),
        )
        issues = validate_scenario(updated)
        assert [(i.code, i.ref_id) for i in issues if i.level == "error"] == [
            (DANGLING_NEXT_SCENE, "Z")
        ]

    def test_update_unknown_option(self, clean_scenario: Scenario) -> None:
        with pytest.raises(OptionNotFoundError, match="'nope' not found in scene 'A'"):
            update_option(clean_scenario, "A", "nope", lambda o: o)

    def test_delete_option(self, clean_scenario: Scenario) -> None:
        updated = delete_option(clean_scenario, "A", "A_o1")
        scene = updated.scene_by_id("A")
        assert scene is not None
        assert scene.options == []
        assert [i.code for i in validate_scenario(updated)] == [UNREACHED_SCENE]

    def test_delete_option_unknown_scene(self, clean_scenario: Scenario) -> None:
        with pytest.raises(SceneNotFoundError):
            delete_option(clean_scenario, "Q", "A_o1")

    def test_input_untouched(self, clean_scenario: Scenario) -> None:
        before = clean_scenario.model_dump()
        delete_option(clean_scenario, "A", "A_o1")
        add_option(clean_scenario, "A")
        assert clean_scenario.model_dump() == before
