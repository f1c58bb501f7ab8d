"""Tests for single boss scenario lint (lint/scenario.py)."""

from __future__ import annotations

from curriculint.lint import count_incoming, reachable_from_entry, validate_scenario
from curriculint.lint.validation_types import (
    DANGLING_NEXT_SCENE,
    MISSING_INITIAL_SCENE,
    UNREACHABLE_FROM_ENTRY,
    UNREACHED_SCENE,
)
from curriculint.models import Scenario
from tests.fixtures.curriculum_fixtures import make_scenario


class TestValidateScenario:
    def test_linear_scenario_is_clean(self, clean_scenario: Scenario) -> None:
        assert validate_scenario(clean_scenario) == []

    def test_dangling_reference_and_unreached_scene(self) -> None:
        scenario = make_scenario({"A": ["C"], "B": []})
        issues = validate_scenario(scenario)

        errors = [i for i in issues if i.level == "error"]
        warnings = [i for i in issues if i.level == "warning"]
        assert len(errors) == 1
        assert len(warnings) == 1

        assert errors[0].code == DANGLING_NEXT_SCENE
        assert errors[0].scope == "option"
        assert errors[0].scene_id == "A"
        assert errors[0].option_id == "A_o1"
        assert errors[0].ref_id == "C"
        assert '"C"' in errors[0].message

        assert warnings[0].code == UNREACHED_SCENE
        assert warnings[0].scene_id == "B"

    def test_missing_initial_scene(self) -> None:
        scenario = make_scenario({"A": ["B"], "B": []}, initial="Z")
        issues = validate_scenario(scenario)

        missing = [i for i in issues if i.code == MISSING_INITIAL_SCENE]
        assert len(missing) == 1
        assert missing[0].level == "error"
        assert missing[0].scope == "bossScenario"
        assert missing[0].boss_id == "7"
        assert '"Z"' in missing[0].message

    def test_missing_initial_scene_on_empty_scenario(self) -> None:
        scenario = Scenario(id="1", initial_scene_id="start", scenes=[])
        issues = validate_scenario(scenario)
        assert [i.code for i in issues] == [MISSING_INITIAL_SCENE]

    def test_ending_options_produce_no_issue(self) -> None:
        scenario = make_scenario({"A": [None, None, "B"], "B": [None]})
        assert validate_scenario(scenario) == []

    def test_self_loop_counts_as_incoming(self) -> None:
        scenario = make_scenario({"A": [None], "B": ["B"]})
        assert validate_scenario(scenario) == []

    def test_disconnected_cycle_not_flagged_by_default(self) -> None:
        scenario = make_scenario({"A": [None], "B": ["C"], "C": ["B"]})
        assert validate_scenario(scenario) == []

    def test_every_dangling_option_reported_once(self) -> None:
        scenario = make_scenario({"A": ["X", "Y", "B"], "B": ["X"]})
        dangling = [i for i in validate_scenario(scenario) if i.code == DANGLING_NEXT_SCENE]
        assert sorted((i.scene_id, i.option_id, i.ref_id) for i in dangling) == [
            ("A", "A_o1", "X"),
            ("A", "A_o2", "Y"),
            ("B", "B_o1", "X"),
        ]

    def test_initial_scene_never_flagged_as_unreached(self) -> None:
        scenario = make_scenario({"A": [None]})
        assert validate_scenario(scenario) == []

    def test_warning_iff_zero_incoming(self) -> None:
        scenario = make_scenario(
            {"A": ["B", "C"], "B": ["D"], "C": [None], "D": [], "E": ["D"], "F": []}
        )
        incoming = count_incoming(scenario)
        flagged = {i.scene_id for i in validate_scenario(scenario) if i.code == UNREACHED_SCENE}
        expected = {sid for sid, n in incoming.items() if n == 0 and sid != "A"}
        assert flagged == expected == {"E", "F"}

    def test_is_deterministic(self) -> None:
        scenario = make_scenario({"A": ["C"], "B": []}, initial="Z")
        assert validate_scenario(scenario) == validate_scenario(scenario)

    def test_does_not_mutate_input(self) -> None:
        scenario = make_scenario({"A": ["C"], "B": []})
        before = scenario.model_dump()
        validate_scenario(scenario, reachability="entry")
        assert scenario.model_dump() == before


class TestStrictReachability:
    def test_flags_disconnected_cycle(self) -> None:
        scenario = make_scenario({"A": [None], "B": ["C"], "C": ["B"]})
        issues = validate_scenario(scenario, reachability="entry")
        assert {i.scene_id for i in issues} == {"B", "C"}
        assert all(i.code == UNREACHABLE_FROM_ENTRY for i in issues)
        assert all(i.level == "warning" for i in issues)

    def test_zero_incoming_scene_reported_only_once(self) -> None:
        scenario = make_scenario({"A": [None], "B": []})
        issues = validate_scenario(scenario, reachability="entry")
        assert [i.code for i in issues] == [UNREACHED_SCENE]

    def test_skipped_when_initial_scene_missing(self) -> None:
        scenario = make_scenario({"A": ["B"], "B": ["A"]}, initial="Z")
        codes = [i.code for i in validate_scenario(scenario, reachability="entry")]
        assert codes == [MISSING_INITIAL_SCENE]

    def test_connected_graph_clean(self) -> None:
        scenario = make_scenario({"A": ["B", "C"], "B": ["C"], "C": ["A", None]})
        assert validate_scenario(scenario, reachability="entry") == []


class TestGraphHelpers:
    def test_count_incoming_ignores_missing_targets(self) -> None:
        scenario = make_scenario({"A": ["B", "B", "Q"], "B": []})
        assert count_incoming(scenario) == {"A": 0, "B": 2}

    def test_reachable_from_entry(self) -> None:
        scenario = make_scenario({"A": ["B"], "B": [None], "C": ["B"]})
        assert reachable_from_entry(scenario) == {"A", "B"}

    def test_reachable_from_missing_entry_is_empty(self) -> None:
        scenario = make_scenario({"A": ["B"], "B": []}, initial="nope")
        assert reachable_from_entry(scenario) == set()
