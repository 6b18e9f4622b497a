"""Tests for settings loading and structured file reading."""

import json

import pytest

from note_junction.utils.io_utils import (
    DEFAULTS,
    deep_merge,
    load_settings,
    read_structured_file,
    reload_settings,
)


class TestLoadSettings:
    """Test YAML settings with defaults."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test that a missing settings file yields a copy of the defaults."""
        settings = load_settings(str(tmp_path / "missing.yaml"))
        assert settings == DEFAULTS
        assert settings is not DEFAULTS

    def test_user_values_deep_merged(self, tmp_path):
        """Test that user values override defaults key by key without mutating them."""
        path = tmp_path / "settings.yaml"
        path.write_text("grouping:\n  default_min_size: 3\nlogging:\n  level: DEBUG\n")
        settings = load_settings(str(path))
        assert settings["grouping"]["default_min_size"] == 3
        assert settings["grouping"]["exclusions"] == DEFAULTS["grouping"]["exclusions"]
        assert settings["logging"]["level"] == "DEBUG"
        assert DEFAULTS["grouping"]["default_min_size"] == 2

    def test_cached_until_reload(self, tmp_path):
        """Test that settings are cached until reload_settings is called."""
        path = tmp_path / "settings.yaml"
        path.write_text("grouping:\n  default_min_size: 3\n")
        first = load_settings(str(path))
        assert load_settings(str(path)) is first

        path.write_text("grouping:\n  default_min_size: 4\n")
        assert load_settings(str(path))["grouping"]["default_min_size"] == 3
        assert reload_settings(str(path))["grouping"]["default_min_size"] == 4

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        """Test that unparseable YAML falls back to defaults."""
        path = tmp_path / "settings.yaml"
        path.write_text("grouping: [unclosed\n")
        assert load_settings(str(path)) == DEFAULTS

    def test_non_mapping_uses_defaults(self, tmp_path):
        """Test that a top-level list falls back to defaults."""
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n")
        assert load_settings(str(path)) == DEFAULTS

    def test_comment_only_sections_keep_defaults(self, tmp_path):
        """Test that sections holding only comments keep their default values."""
        path = tmp_path / "settings.yaml"
        path.write_text("grouping:\n  # nothing here yet\nlogging:\n  level: INFO\nmerge:\n")
        settings = load_settings(str(path))
        assert settings["grouping"] == DEFAULTS["grouping"]
        assert settings["merge"] == DEFAULTS["merge"]
        assert settings["logging"]["level"] == "INFO"

    def test_scalar_section_keeps_defaults(self, tmp_path):
        """Test that a scalar where a section belongs is ignored."""
        path = tmp_path / "settings.yaml"
        path.write_text("grouping: 3\n")
        assert load_settings(str(path))["grouping"] == DEFAULTS["grouping"]

    def test_shipped_settings_match_defaults(self):
        """Test that config/settings.yaml carries the default grouping section."""
        from note_junction.utils.path_utils import get_project_root

        settings = load_settings(str(get_project_root() / "config" / "settings.yaml"))
        assert settings["grouping"] == DEFAULTS["grouping"]


class TestDeepMerge:
    """Test recursive merging of settings dicts."""

    def test_nested_override(self):
        """Test that nested keys are merged rather than replaced."""
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        assert deep_merge(base, {"a": {"y": 3}}) == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_none_does_not_replace_section(self):
        """Test that a None value leaves a dict section untouched."""
        assert deep_merge({"a": {"x": 1}}, {"a": None}) == {"a": {"x": 1}}

    def test_none_replaces_scalar(self):
        """Test that None still overrides a non-dict value."""
        assert deep_merge({"file": "run.log"}, {"file": None}) == {"file": None}

    def test_new_keys_added(self):
        """Test that keys missing from the base are added."""
        assert deep_merge({}, {"extra": [1]}) == {"extra": [1]}


class TestReadStructuredFile:
    """Test JSON/YAML reading by suffix."""

    def test_json(self, tmp_path):
        """Test reading a JSON document."""
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"a": [1, 2]}))
        assert read_structured_file(str(path)) == {"a": [1, 2]}

    def test_yaml(self, tmp_path):
        """Test reading a YAML document with the .yml suffix."""
        path = tmp_path / "doc.yml"
        path.write_text("a:\n  - 1\n  - 2\n")
        assert read_structured_file(str(path)) == {"a": [1, 2]}

    def test_unsupported(self, tmp_path):
        """Test that unknown suffixes raise ValueError."""
        path = tmp_path / "doc.csv"
        path.write_text("a,b\n")
        with pytest.raises(ValueError, match="Unsupported file format: .csv"):
            read_structured_file(str(path))
