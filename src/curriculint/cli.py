"""Curriculint CLI - typer application entry point."""

from __future__ import annotations

import atexit
import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from curriculint.observability import close_file_logging, configure_logging, get_logger

if TYPE_CHECKING:
    from curriculint.config import LintConfig
    from curriculint.lint.validation_types import LintResult, Reachability
    from curriculint.models.curriculum import Curriculum

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="curriculint",
    help="Curriculint: structural lint for curriculum and boss scenario graphs.",
    no_args_is_help=True,
)
console = Console()
log = get_logger(__name__)

# Exit codes
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2

# Global state for config file (set by callback, used by commands)
_config_path: Path | None = None


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log",
            help="Append all log events to this file as JSON lines.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Lint config file (default: ./curriculint.yaml if present).",
            envvar="CURRICULINT_CONFIG",
        ),
    ] = None,
) -> None:
    """Curriculint: structural lint for curriculum and boss scenario graphs."""
    global _config_path
    _config_path = config

    configure_logging(verbosity=verbose, log_file=log_file)
    if log_file is not None:
        atexit.register(close_file_logging)


def _load_config() -> LintConfig:
    from curriculint.config import LintConfigError, load_lint_config

    try:
        return load_lint_config(_config_path)
    except LintConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_BAD_INPUT) from None


def _load_document(document: Path | None, config: LintConfig) -> Curriculum:
    """Read the curriculum document, exiting with a message on failure."""
    from curriculint.documents import (
        DocumentNotFoundError,
        DocumentParseError,
        DocumentValidationError,
        read_curriculum,
    )

    path = document or config.document
    if path is None:
        console.print("[red]Error:[/red] No document given and none set in config.")
        raise typer.Exit(EXIT_BAD_INPUT)

    try:
        return read_curriculum(path)
    except (DocumentNotFoundError, DocumentParseError, DocumentValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_BAD_INPUT) from None


def _resolve_reachability(strict: bool, config: LintConfig) -> Reachability:
    from curriculint.config import LintConfigError

    if strict:
        return "entry"
    try:
        return config.get_reachability()
    except LintConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_BAD_INPUT) from None


def _resolve_fail_on_warnings(flag: bool, config: LintConfig) -> bool:
    from curriculint.config import LintConfigError

    if flag:
        return True
    try:
        return config.get_fail_on_warnings()
    except LintConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_BAD_INPUT) from None


def _finish(result: LintResult, *, as_json: bool, fail_on_warnings: bool, title: str) -> None:
    """Print the result and exit non-zero when the publish gate rejects."""
    from curriculint.lint import check_publishable, gate_for, render_report

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_report(result, console, title=title)

    decision = check_publishable(result, gate_for(fail_on_warnings=fail_on_warnings))
    log.info("publish_gate", decision=decision, summary=result.summary)
    if decision == "reject":
        if not as_json:
            console.print(f"[red]✗[/red] Not publishable: {result.summary}")
        raise typer.Exit(EXIT_REJECTED)
    if not as_json:
        console.print(f"[green]✓[/green] Publishable ({result.summary})")


StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict-reachability",
        help="Also warn about scenes unreachable from the initial scene.",
    ),
]
FailOnWarningsOption = Annotated[
    bool,
    typer.Option(
        "--fail-on-warnings",
        help="Exit non-zero on warnings as well as errors.",
    ),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the report as JSON.")]


@app.command()
def lint(
    document: Annotated[
        Path | None,
        typer.Argument(help="Curriculum document (YAML or JSON). Defaults to the config's."),
    ] = None,
    strict_reachability: StrictOption = False,
    fail_on_warnings: FailOnWarningsOption = False,
    as_json: JsonOption = False,
) -> None:
    """Lint a whole curriculum document."""
    from curriculint.lint import validate_curriculum

    config = _load_config()
    curriculum = _load_document(document, config)
    reachability = _resolve_reachability(strict_reachability, config)
    fail = _resolve_fail_on_warnings(fail_on_warnings, config)

    result = validate_curriculum(curriculum, reachability=reachability)
    _finish(result, as_json=as_json, fail_on_warnings=fail, title="Curriculum Lint")


@app.command()
def scenario(
    document: Annotated[Path, typer.Argument(help="Curriculum document (YAML or JSON).")],
    boss_id: Annotated[str, typer.Argument(help="Boss scenario id to check.")],
    strict_reachability: StrictOption = False,
    fail_on_warnings: FailOnWarningsOption = False,
    as_json: JsonOption = False,
) -> None:
    """Lint a single boss scenario from a curriculum document."""
    from curriculint.lint import LintResult, validate_scenario

    config = _load_config()
    curriculum = _load_document(document, config)
    reachability = _resolve_reachability(strict_reachability, config)

    target = curriculum.scenario_by_id().get(boss_id)
    if target is None:
        known = ", ".join(s.id for s in curriculum.boss_scenarios) or "none"
        console.print(f"[red]Error:[/red] Boss scenario '{boss_id}' not found (known: {known})")
        raise typer.Exit(EXIT_BAD_INPUT)

    result = LintResult(issues=validate_scenario(target, reachability=reachability))
    _finish(
        result,
        as_json=as_json,
        fail_on_warnings=_resolve_fail_on_warnings(fail_on_warnings, config),
        title=f"Boss Scenario {target.id}: {target.title}",
    )


@app.command()
def version() -> None:
    """Show version information."""
    from curriculint import __version__

    console.print(f"Curriculint v{__version__}")


if __name__ == "__main__":
    app()
