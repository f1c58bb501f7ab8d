"""Lint configuration loading.

Settings come from ``curriculint.yaml`` in the working directory (or a path
given on the command line). Environment variables override the file:

- ``CURRICULINT_REACHABILITY``: "incoming" or "entry"
- ``CURRICULINT_FAIL_ON_WARNINGS``: "1"/"true"/"yes" or "0"/"false"/"no"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, get_args

from ruamel.yaml import YAML

from curriculint.lint.validation_types import Reachability

DEFAULT_CONFIG_FILE = Path("curriculint.yaml")
DEFAULT_REACHABILITY: Reachability = "incoming"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class LintConfigError(Exception):
    """Raised when lint configuration cannot be loaded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load lint config at {path}: {reason}")


def _parse_reachability(value: Any, source: Path | str) -> Reachability:
    if isinstance(value, str):
        value = value.strip().lower()
    if value not in get_args(Reachability):
        allowed = ", ".join(get_args(Reachability))
        raise LintConfigError(source, f"reachability must be one of {allowed}, got {value!r}")
    return value  # type: ignore[no-any-return]


def _parse_bool(value: Any, source: Path | str, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise LintConfigError(source, f"{name} must be a boolean, got {value!r}")


@dataclass
class LintConfig:
    """Configuration for a lint run.

    Resolution order for each setting:
    1. Environment variable
    2. Config file
    3. Default

    CLI flags are applied on top by the command itself.

    Attributes:
        reachability: Scene reachability rule ("incoming" or "entry").
        fail_on_warnings: Reject publishing on warnings as well as errors.
        document: Default curriculum document path.
    """

    reachability: Reachability = DEFAULT_REACHABILITY
    fail_on_warnings: bool = False
    document: Path | None = None

    def get_reachability(self) -> Reachability:
        """Effective reachability, honouring CURRICULINT_REACHABILITY."""
        env = os.getenv("CURRICULINT_REACHABILITY")
        if env:
            return _parse_reachability(env, "CURRICULINT_REACHABILITY")
        return self.reachability

    def get_fail_on_warnings(self) -> bool:
        """Effective warning policy, honouring CURRICULINT_FAIL_ON_WARNINGS."""
        env = os.getenv("CURRICULINT_FAIL_ON_WARNINGS")
        if env is not None:
            return _parse_bool(env, "CURRICULINT_FAIL_ON_WARNINGS", "fail_on_warnings")
        return self.fail_on_warnings

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | str = "<dict>") -> LintConfig:
        """Create config from dictionary.

        Args:
            data: Dictionary with optional reachability, fail_on_warnings
                and document keys.
            source: Where the data came from, for error messages.

        Returns:
            LintConfig instance.

        Raises:
            LintConfigError: If a value has the wrong type or is out of range.
        """
        document = data.get("document")
        return cls(
            reachability=_parse_reachability(
                data.get("reachability", DEFAULT_REACHABILITY), source
            ),
            fail_on_warnings=_parse_bool(
                data.get("fail_on_warnings", False), source, "fail_on_warnings"
            ),
            document=Path(document) if document else None,
        )


def load_lint_config(config_path: Path | None = None) -> LintConfig:
    """Load lint configuration.

    Args:
        config_path: Explicit config file. When None, ``curriculint.yaml``
            in the working directory is used if it exists, else defaults.

    Returns:
        LintConfig instance.

    Raises:
        LintConfigError: If an explicit file is missing, or any file is
            unreadable or invalid.
    """
    explicit = config_path is not None
    path = config_path if config_path is not None else DEFAULT_CONFIG_FILE

    if not path.exists():
        if explicit:
            raise LintConfigError(path, "File not found")
        return LintConfig()

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except Exception as e:
        raise LintConfigError(path, str(e)) from e

    if data is None:
        return LintConfig()
    if not isinstance(data, dict):
        raise LintConfigError(path, "Expected a mapping at top level")

    config = LintConfig.from_dict(dict(data), source=path)
    # A relative document path is relative to the config file
    if config.document is not None and not config.document.is_absolute():
        config.document = path.parent / config.document
    return config
