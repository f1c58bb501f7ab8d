"""Grouping and display of lint results.

Everything here only filters or groups an existing issue list; nothing
re-runs a check.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console

    from curriculint.lint.validation_types import IssueLevel, LintIssue, LintResult

# Display order for grouped output
SCOPE_ORDER = ("bossScenario", "scene", "option", "node")


def group_by_scope(issues: Iterable[LintIssue]) -> dict[str, list[LintIssue]]:
    """Group issues by scope, in ``SCOPE_ORDER``. Empty scopes are omitted."""
    grouped: dict[str, list[LintIssue]] = defaultdict(list)
    for issue in issues:
        grouped[issue.scope].append(issue)
    return {scope: grouped[scope] for scope in SCOPE_ORDER if grouped.get(scope)}


def issues_for_boss(issues: Iterable[LintIssue], boss_id: str) -> list[LintIssue]:
    return [i for i in issues if i.boss_id == boss_id]


def issues_for_scene(
    issues: Iterable[LintIssue],
    scene_id: str,
    boss_id: str | None = None,
) -> list[LintIssue]:
    """Issues located at a scene, including those on its options.

    Scene ids are only unique within a scenario, so pass ``boss_id`` when
    filtering a whole-curriculum result.
    """
    return [
        i
        for i in issues
        if i.scene_id == scene_id and (boss_id is None or i.boss_id == boss_id)
    ]


def issues_for_option(
    issues: Iterable[LintIssue],
    scene_id: str,
    option_id: str,
    boss_id: str | None = None,
) -> list[LintIssue]:
    return [i for i in issues_for_scene(issues, scene_id, boss_id) if i.option_id == option_id]


def issues_for_node(issues: Iterable[LintIssue], node_id: str) -> list[LintIssue]:
    return [i for i in issues if i.node_id == node_id]


def flagged_scenes(issues: Iterable[LintIssue]) -> dict[tuple[str | None, str], IssueLevel]:
    """Worst level per ``(boss_id, scene_id)``, for navigation badges."""
    flags: dict[tuple[str | None, str], IssueLevel] = {}
    for issue in issues:
        if issue.scene_id is None:
            continue
        key = (issue.boss_id, issue.scene_id)
        if issue.level == "error" or key not in flags:
            flags[key] = issue.level
    return flags


def flagged_nodes(issues: Iterable[LintIssue]) -> dict[str, IssueLevel]:
    """Worst level per node id."""
    flags: dict[str, IssueLevel] = {}
    for issue in issues:
        if issue.node_id is None:
            continue
        if issue.level == "error" or issue.node_id not in flags:
            flags[issue.node_id] = issue.level
    return flags


def _location(issue: LintIssue) -> str:
    parts = [
        f"{label}:{value}"
        for label, value in (
            ("unit", issue.unit_id),
            ("node", issue.node_id),
            ("boss", issue.boss_id),
            ("scene", issue.scene_id),
            ("option", issue.option_id),
        )
        if value is not None
    ]
    return " ".join(parts) or "-"


def render_report(result: LintResult, console: Console, *, title: str = "Lint Report") -> None:
    """Print counts and a table of issues grouped by scope."""
    err_style = "red" if result.error_count else "dim"
    warn_style = "yellow" if result.warning_count else "dim"
    console.print(
        f"[{err_style}]{result.error_count} ERR[/{err_style}]  "
        f"[{warn_style}]{result.warning_count} WRN[/{warn_style}]"
    )

    if not result.issues:
        console.print("[green]✓[/green] No structural issues found.")
        return

    table = Table(title=title)
    table.add_column("Level", style="bold")
    table.add_column("Scope", style="cyan")
    table.add_column("Location", style="dim")
    table.add_column("Message")

    level_icons = {
        "error": "[red]✗[/red] error",
        "warning": "[yellow]![/yellow] warning",
    }

    for scope, scoped in group_by_scope(result.issues).items():
        for issue in scoped:
            table.add_row(level_icons[issue.level], scope, _location(issue), issue.message)

    console.print()
    console.print(table)
    console.print()
