"""
Settings validation for the grouping configuration.

This module checks a loaded settings dict and reports problems as
human-readable warnings instead of failing the run.
"""

import logging
import re
from typing import Any, Dict, List

__all__ = ["validate_settings"]

PATTERN_SECTIONS = ("exclusions", "low_priority", "high_priority")


def _pattern_warnings(label: str, patterns: Any) -> List[str]:
    if patterns is None:
        return []
    if not isinstance(patterns, list):
        return [f"{label} must be a list of regex strings, got {type(patterns).__name__}"]

    warnings = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            warnings.append(f"{label} entry {pattern!r} is not a string")
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            warnings.append(f"{label} entry {pattern!r} is not a valid regex: {e}")
    return warnings


def validate_settings(settings: Dict[str, Any]) -> List[str]:
    """Returns list of validation warnings.

    Args:
        settings: Settings dict to validate (as returned by load_settings)

    Returns:
        List of validation warning messages.
    """
    warnings: List[str] = []
    grouping = settings.get("grouping") or {}

    for section in PATTERN_SECTIONS:
        warnings.extend(_pattern_warnings(f"grouping.{section}", grouping.get(section, [])))

    attribute_names = grouping.get("attribute_names") or []
    if not isinstance(attribute_names, list) or not all(isinstance(n, str) and n for n in attribute_names):
        warnings.append(f"grouping.attribute_names must be a list of non-empty strings, got {attribute_names!r}")

    min_size = grouping.get("default_min_size", 2)
    if not isinstance(min_size, int) or isinstance(min_size, bool) or min_size < 1:
        warnings.append(f"grouping.default_min_size must be int >= 1, got {min_size!r}")

    include_parents = grouping.get("include_parent_references", True)
    if not isinstance(include_parents, bool):
        warnings.append(f"grouping.include_parent_references must be true or false, got {include_parents!r}")

    merge = settings.get("merge") or {}
    merge_min_size = merge.get("min_size", 2)
    if not isinstance(merge_min_size, int) or isinstance(merge_min_size, bool) or merge_min_size < 1:
        warnings.append(f"merge.min_size must be int >= 1, got {merge_min_size!r}")
    warnings.extend(_pattern_warnings("merge.never_merge", merge.get("never_merge", [])))

    level = (settings.get("logging") or {}).get("level", "INFO")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        warnings.append(f"logging.level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {level!r}")

    return warnings
