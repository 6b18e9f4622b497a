"""IO utilities for settings and graph snapshot files."""

import copy
import functools
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from note_junction.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULTS: dict[str, Any] = {
    "grouping": {
        "exclusions": [
            r"^ptr$",
            r"^otter\.ai/transcript$",
            r"^TODO$",
            r"^DONE$",
            r"^factor$",
            r"^interval$",
            r"^\[\[factor\]\]:.+",
            r"^\[\[interval\]\]:.+",
            r"^isa$",
            r"^group with$",
            r"^(January|February|March|April|May|June|July|August|September"
            r"|October|November|December) \d{1,2}(st|nd|rd|th), \d{4}$",
        ],
        "low_priority": [r"^reflection$", r"^task$", r"^person$"],
        "high_priority": [r"^i$"],
        "attribute_names": ["isa", "group with"],
        "include_parent_references": True,
        "default_min_size": 2,
    },
    "merge": {
        "enabled": False,
        "min_size": 2,
        "never_merge": [],
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Merge ``update`` into ``base`` in place, recursing into nested dicts.

    A section that is a dict in ``base`` keeps its values when ``update``
    gives it a non-dict value (an empty ``grouping:`` section parses to None).
    """
    for key, value in update.items():
        if key in base and isinstance(base[key], dict):
            if isinstance(value, dict):
                deep_merge(base[key], value)
            elif value is not None:
                logger.warning(f"Ignoring settings section {key!r}: expected a mapping, got {type(value).__name__}")
        else:
            base[key] = value
    return base


@functools.lru_cache(maxsize=1)
def load_settings(path: str) -> dict[str, Any]:
    """Load settings from YAML file with defaults.

    This function is cached to prevent repeated file I/O and parsing.
    Use reload_settings() to force a fresh load.

    Args:
        path: Path to settings YAML file

    Returns:
        Dictionary with settings (user config merged over defaults)

    """
    logger.debug(f"Loading settings from {path}")

    defaults = copy.deepcopy(DEFAULTS)
    try:
        with open(path) as f:
            user_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logging.warning(f"Settings file not found: {path}. Using defaults.")
        return defaults
    except yaml.YAMLError as e:
        logging.exception(f"Error loading settings: {e}. Using defaults.")
        return defaults

    if not isinstance(user_config, dict):
        logging.warning(f"Settings file {path} is not a mapping. Using defaults.")
        return defaults

    return deep_merge(defaults, user_config)


def reload_settings(path: str) -> dict[str, Any]:
    """Force reload settings from file (clears cache).

    Args:
        path: Path to settings YAML file

    Returns:
        Freshly loaded settings

    """
    load_settings.cache_clear()
    return load_settings(path)


def detect_file_format(path: str) -> str:
    """Detect a structured file's format from its suffix.

    Args:
        path: Path to the file

    Returns:
        ``"json"`` or ``"yaml"``

    Raises:
        ValueError: If the suffix is not supported

    """
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    raise ValueError(f"Unsupported file format: {suffix or path}")


def read_structured_file(path: str) -> Any:
    """Read a JSON or YAML document.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        The parsed document

    """
    file_format = detect_file_format(path)
    with open(path, encoding="utf-8") as f:
        if file_format == "json":
            return json.load(f)
        return yaml.safe_load(f)
