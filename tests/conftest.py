"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from curriculint.models import Curriculum, Scenario
from tests.fixtures.curriculum_fixtures import make_scenario


@pytest.fixture(autouse=True)
def isolate_lint_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment from leaking into lint settings."""
    monkeypatch.delenv("CURRICULINT_REACHABILITY", raising=False)
    monkeypatch.delenv("CURRICULINT_FAIL_ON_WARNINGS", raising=False)
    monkeypatch.delenv("CURRICULINT_CONFIG", raising=False)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def clean_scenario() -> Scenario:
    """Scenario A -> B where B is an ending."""
    return make_scenario({"A": ["B"], "B": []})


@pytest.fixture
def clean_document() -> dict[str, Any]:
    """A small curriculum document with no structural issues."""
    return {
        "units": [
            {
                "id": "u1",
                "title": "Foundations",
                "description": "Start here",
                "color": "emerald",
                "requirements": {"minXP": 0},
                "nodes": [
                    {"id": "n1", "type": "lesson", "title": "Intro", "xpReward": 50},
                    {
                        "id": "n2",
                        "type": "boss",
                        "title": "The Party",
                        "xpReward": 200,
                        "bossScenarioId": 7,
                        "prerequisites": ["n1"],
                    },
                ],
            }
        ],
        "bossScenarios": [
            {
                "id": 7,
                "title": "The Party",
                "initialSceneId": "A",
                "scenes": [
                    {
                        "id": "A",
                        "text": "Someone offers you a drink.",
                        "options": [
                            {
                                "id": "leave",
                                "text": "Leave",
                                "outcome": "safe",
                                "feedback": "Good call.",
                                "xp": 20,
                                "nextSceneId": "B",
                            },
                            {
                                "id": "stay",
                                "text": "Stay",
                                "outcome": "risk",
                                "feedback": "Risky.",
                                "damage": 10,
                            },
                        ],
                    },
                    {"id": "B", "text": "You made it home.", "options": []},
                ],
            }
        ],
    }


@pytest.fixture
def clean_curriculum(clean_document: dict[str, Any]) -> Curriculum:
    return Curriculum.model_validate(clean_document)
