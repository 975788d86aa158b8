"""
Unit tests for configuration loading.
"""

import pytest

from fsfacade.config import AppConfig, ConfigError, load_config


def write_config(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_none_yields_defaults(self):
        config = load_config(None)
        assert config == AppConfig()
        assert config.watch.poll_interval == 0.5
        assert config.logging.level == "INFO"

    def test_missing_file_is_error(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "absent.yaml")

    def test_empty_file_yields_defaults(self, tmp_path):
        assert load_config(write_config(tmp_path, "")) == AppConfig()

    def test_full_file(self, tmp_path):
        path = write_config(
            tmp_path,
            """
watch:
  poll_interval: 1
  recursive: false
  include_patterns: "*.txt"
  exclude_patterns: ["*.tmp", "*.swp"]
logging:
  level: debug
""",
        )
        config = load_config(path)
        assert config.watch.poll_interval == 1.0
        assert config.watch.recursive is False
        assert config.watch.include_patterns == ["*.txt"]
        assert config.watch.exclude_patterns == ["*.tmp", "*.swp"]
        assert config.logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "text, message",
        [
            ("- a\n- b\n", "root must be a mapping"),
            ("watch: 3\n", "'watch' section"),
            ("watch:\n  poll_interval: soon\n", "must be numeric"),
            ("watch:\n  poll_interval: 0\n", "must be positive"),
            ("watch:\n  recursive: maybe\n", "must be a boolean"),
            ("watch:\n  exclude_patterns: [1]\n", "only strings"),
            ("logging:\n  level: LOUD\n", "logging.level"),
            ("watch: [unclosed\n", "Failed to parse"),
        ],
    )
    def test_invalid_files(self, tmp_path, text, message):
        with pytest.raises(ConfigError, match=message):
            load_config(write_config(tmp_path, text))
