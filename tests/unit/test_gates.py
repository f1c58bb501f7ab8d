"""Tests for publish gates."""

from __future__ import annotations

from curriculint.lint import (
    BlockOnErrorsGate,
    BlockOnWarningsGate,
    LintIssue,
    LintResult,
    check_publishable,
    gate_for,
)

WARNING = LintIssue(level="warning", scope="scene", message="unreached", scene_id="B")
ERROR = LintIssue(level="error", scope="node", message="missing", node_id="n")


class TestBlockOnErrorsGate:
    def test_approves_clean(self) -> None:
        assert BlockOnErrorsGate().on_lint_complete(LintResult()) == "approve"

    def test_approves_warnings_only(self) -> None:
        assert BlockOnErrorsGate().on_lint_complete(LintResult(issues=[WARNING])) == "approve"

    def test_rejects_errors(self) -> None:
        assert BlockOnErrorsGate().on_lint_complete(LintResult(issues=[ERROR])) == "reject"


class TestBlockOnWarningsGate:
    def test_approves_clean(self) -> None:
        assert BlockOnWarningsGate().on_lint_complete(LintResult()) == "approve"

    def test_rejects_warnings(self) -> None:
        assert BlockOnWarningsGate().on_lint_complete(LintResult(issues=[WARNING])) == "reject"


class TestCheckPublishable:
    def test_default_gate_blocks_on_errors_only(self) -> None:
        assert check_publishable(LintResult(issues=[WARNING])) == "approve"
        assert check_publishable(LintResult(issues=[WARNING, ERROR])) == "reject"

    def test_gate_for_policy(self) -> None:
        assert isinstance(gate_for(fail_on_warnings=False), BlockOnErrorsGate)
        assert isinstance(gate_for(fail_on_warnings=True), BlockOnWarningsGate)

    def test_custom_gate(self) -> None:
        class AlwaysReject:
            def on_lint_complete(self, result: LintResult) -> str:  # noqa: ARG002
                return "reject"

        assert check_publishable(LintResult(), AlwaysReject()) == "reject"  # type: ignore[arg-type]
