"""Path exclusion rules."""

from pathmetrics.core.exclude.path_excluder import (
    DEFAULT_RULES,
    ExclusionRule,
    PathExcluder,
    load_excluder,
    load_exclusion_file,
)

__all__ = [
    "DEFAULT_RULES",
    "ExclusionRule",
    "PathExcluder",
    "load_excluder",
    "load_exclusion_file",
]
