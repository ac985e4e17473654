"""Path exclusion rules for dropping infrastructure routes from metrics.

Rules are evaluated in order and the first matching rule wins. Each rule
matches a literal request path by exact equality, by prefix, or by regular
expression search.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from pathmetrics.core.errors import ConfigError
from pathmetrics.utils.config import find_config_path

logger = logging.getLogger(__name__)


class ExclusionRule(BaseModel):
    """A single exclusion rule."""

    exact: str | None = None
    prefix: str | None = None
    pattern: str | None = None


DEFAULT_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(prefix="/rails/active_storage"),
)


class PathExcluder:
    """Decide whether a request path is excluded from aggregation."""

    def __init__(
        self,
        rules: list[ExclusionRule] | tuple[ExclusionRule, ...] = DEFAULT_RULES,
    ) -> None:
        """Compile rules.

        Args:
            rules: Ordered exclusion rules

        Raises:
            ConfigError: If a rule has no criteria or an invalid pattern
        """
        self.rules = list(rules)
        self._compiled: list[re.Pattern[str] | None] = []

        for index, rule in enumerate(self.rules):
            if not (rule.exact or rule.prefix or rule.pattern):
                raise ConfigError(
                    f"exclusion rule at index {index} must specify exact, prefix, or pattern"
                )

            if not rule.pattern:
                self._compiled.append(None)
                continue

            if ".*.*" in rule.pattern:
                logger.warning(
                    "Pattern %r contains multiple .* which may be slow", rule.pattern
                )
            if rule.pattern.startswith(".*"):
                logger.warning(
                    "Pattern %r starts with .* without ^ anchor; consider a prefix rule",
                    rule.pattern,
                )

            try:
                self._compiled.append(re.compile(rule.pattern))
            except re.error as exc:
                raise ConfigError(
                    f"failed to compile pattern {rule.pattern!r}: {exc}"
                ) from exc

    def should_exclude(self, path: str) -> bool:
        """Check a literal path (query string included) against the rules."""
        for rule, compiled in zip(self.rules, self._compiled, strict=True):
            if rule.exact and rule.exact == path:
                return True
            if rule.prefix and path.startswith(rule.prefix):
                return True
            if compiled is not None and compiled.search(path):
                return True
        return False

    __call__ = should_exclude


def parse_exclusion_dict(data: Any) -> list[ExclusionRule]:
    """Parse exclusion rules from a loaded YAML document.

    Args:
        data: Document with an ``excluded_paths`` list

    Returns:
        Ordered rules

    Raises:
        ConfigError: If the document shape is invalid
    """
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigError("exclusion config must be a mapping")

    entries = data.get("excluded_paths") or []
    if not isinstance(entries, list):
        raise ConfigError("'excluded_paths' must be a list")

    rules: list[ExclusionRule] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"exclusion rule at index {index} must be a mapping")
        rules.append(
            ExclusionRule(
                exact=_optional_str(entry, "exact", index),
                prefix=_optional_str(entry, "prefix", index),
                pattern=_optional_str(entry, "pattern", index),
            )
        )
    return rules


def _optional_str(entry: dict[str, Any], key: str, index: int) -> str | None:
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"exclusion rule at index {index}: '{key}' must be a string")
    return value


def load_exclusion_file(path: str | Path) -> PathExcluder:
    """Load a PathExcluder from a YAML file.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to parse config file {path}: {exc}") from exc

    return PathExcluder(parse_exclusion_dict(data))


def load_excluder(config_path: str | Path | None = None) -> PathExcluder:
    """Load an explicit config, else the first one found, else the defaults."""
    if config_path is not None:
        return load_exclusion_file(config_path)

    found = find_config_path()
    if found is not None:
        return load_exclusion_file(found)

    return PathExcluder()
