"""Shared lint types used by the scenario and curriculum validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

IssueLevel = Literal["error", "warning"]
IssueScope = Literal["bossScenario", "option", "scene", "node"]
Reachability = Literal["incoming", "entry"]

# Rule codes, one per check
MISSING_INITIAL_SCENE = "missing-initial-scene"
DANGLING_NEXT_SCENE = "dangling-next-scene"
UNREACHED_SCENE = "unreached-scene"
UNREACHABLE_FROM_ENTRY = "unreachable-from-entry"
MISSING_PREREQUISITE = "missing-prerequisite"
BOSS_MISSING_SCENARIO_ID = "boss-missing-scenario-id"
BOSS_UNKNOWN_SCENARIO = "boss-unknown-scenario"
BOSS_UNGATED = "boss-ungated"
ORPHAN_SCENARIO = "orphan-scenario"


@dataclass(frozen=True)
class LintIssue:
    """A single lint finding.

    Attributes:
        level: "error" (breaks play at runtime) or "warning" (authoring quality).
        scope: Which kind of entity the finding is about.
        message: Human-readable description naming the offending ids.
        code: Stable identifier of the rule that produced the finding.
        unit_id: Unit owning the offending node, if any.
        node_id: Offending curriculum node, if any.
        boss_id: Boss scenario the finding belongs to, if any.
        scene_id: Offending scene, if any.
        option_id: Offending option, if any.
        ref_id: The id that was referenced but does not exist, if any.
    """

    level: IssueLevel
    scope: IssueScope
    message: str
    code: str = ""
    unit_id: str | None = None
    node_id: str | None = None
    boss_id: str | None = None
    scene_id: str | None = None
    option_id: str | None = None
    ref_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset locators."""
        data: dict[str, Any] = {
            "level": self.level,
            "scope": self.scope,
            "code": self.code,
            "message": self.message,
        }
        locators = {
            "unitId": self.unit_id,
            "nodeId": self.node_id,
            "bossId": self.boss_id,
            "sceneId": self.scene_id,
            "optionId": self.option_id,
            "refId": self.ref_id,
        }
        data.update({k: v for k, v in locators.items() if v is not None})
        return data


@dataclass
class LintResult:
    """Aggregated lint findings.

    The counts are derived from ``issues`` so they can never drift from it.

    Attributes:
        issues: Findings in the order the validators produced them.
    """

    issues: list[LintIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.level == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.level == "warning")

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def has_errors(self) -> bool:
        """True if any issue has level 'error'."""
        return self.error_count > 0

    @property
    def has_warnings(self) -> bool:
        """True if any issue has level 'warning'."""
        return self.warning_count > 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the counts."""
        if not self.issues:
            return "no issues"
        parts: list[str] = []
        if self.error_count:
            parts.append(f"{self.error_count} error{'s' if self.error_count != 1 else ''}")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning{'s' if self.warning_count != 1 else ''}")
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
        }
