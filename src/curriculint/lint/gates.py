"""Publish gates that turn a lint result into a go/no-go decision.

The validators only report. Whether a document may be published is the
caller's policy, expressed as a gate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from curriculint.lint.validation_types import LintResult

Decision = Literal["approve", "reject"]


class PublishGate(Protocol):
    """Protocol for gates that approve/reject publishing a document."""

    def on_lint_complete(self, result: LintResult) -> Decision:
        """Called with the lint result of the document about to be published.

        Args:
            result: Lint result of the document.

        Returns:
            "approve" to publish or "reject" to hold it back.
        """
        ...


class BlockOnErrorsGate:
    """Gate that rejects documents with any error-level issue.

    Warnings are surfaced but never block. This is the default policy.
    """

    def on_lint_complete(self, result: LintResult) -> Decision:
        if result.has_errors:
            return "reject"
        return "approve"


class BlockOnWarningsGate:
    """Gate that rejects documents with any issue at all."""

    def on_lint_complete(self, result: LintResult) -> Decision:
        if result.issues:
            return "reject"
        return "approve"


def gate_for(*, fail_on_warnings: bool) -> PublishGate:
    """Pick the gate matching the configured policy."""
    return BlockOnWarningsGate() if fail_on_warnings else BlockOnErrorsGate()


def check_publishable(result: LintResult, gate: PublishGate | None = None) -> Decision:
    """Run a gate over a lint result.

    Args:
        result: Lint result of the document.
        gate: Gate to apply. Defaults to ``BlockOnErrorsGate``.

    Returns:
        The gate's decision.
    """
    return (gate or BlockOnErrorsGate()).on_lint_complete(result)
