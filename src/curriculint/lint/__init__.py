"""Lint package - structural validation of curriculum documents.

Pure, deterministic checks over boss scenario dialogue graphs and the
course graph. Findings are returned as data; nothing here raises for a
well-typed document.
"""

from curriculint.lint.curriculum import (
    check_boss_nodes,
    check_orphan_scenarios,
    check_prerequisites,
    validate_curriculum,
)
from curriculint.lint.gates import (
    BlockOnErrorsGate,
    BlockOnWarningsGate,
    PublishGate,
    check_publishable,
    gate_for,
)
from curriculint.lint.report import (
    flagged_nodes,
    flagged_scenes,
    group_by_scope,
    issues_for_boss,
    issues_for_node,
    issues_for_option,
    issues_for_scene,
    render_report,
)
from curriculint.lint.scenario import (
    count_incoming,
    iter_scenario_issues,
    reachable_from_entry,
    validate_scenario,
)
from curriculint.lint.validation_types import (
    IssueLevel,
    IssueScope,
    LintIssue,
    LintResult,
    Reachability,
)

__all__ = [
    "BlockOnErrorsGate",
    "BlockOnWarningsGate",
    "IssueLevel",
    "IssueScope",
    "LintIssue",
    "LintResult",
    "PublishGate",
    "Reachability",
    "check_boss_nodes",
    "check_orphan_scenarios",
    "check_prerequisites",
    "check_publishable",
    "count_incoming",
    "flagged_nodes",
    "flagged_scenes",
    "gate_for",
    "group_by_scope",
    "issues_for_boss",
    "issues_for_node",
    "issues_for_option",
    "issues_for_scene",
    "iter_scenario_issues",
    "reachable_from_entry",
    "render_report",
    "validate_curriculum",
    "validate_scenario",
]
