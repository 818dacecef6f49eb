"""Tests for configuration loading."""

from pathlib import Path

import pytest

from eventpages.core.config import (
    DisplayConfig,
    EventPagesConfig,
    get_display_config,
    get_config,
    reset_config,
    set_config,
)
from eventpages.core.errors import ConfigError


class TestEventPagesConfig:
    """Tests for EventPagesConfig."""

    def test_defaults(self):
        config = EventPagesConfig()

        assert config.scenario_mode is False
        assert config.transport.timeout_seconds == 30.0
        assert config.transport.user_agent.startswith("eventpages/")
        assert config.display.responses_visible_count == 10
        assert config.logging.level == "INFO"

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = EventPagesConfig.from_file(tmp_path / "missing.yaml")
        assert config == EventPagesConfig()

    def test_from_file_with_top_level_key(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "eventpages:\n"
            "  scenario_mode: true\n"
            "  transport:\n"
            "    timeout_seconds: 5\n"
            "  display:\n"
            "    nearby_places_new_layout: true\n"
            "    responses_visible_count: 25\n"
            "  logging:\n"
            "    level: debug\n"
        )

        config = EventPagesConfig.from_file(path)

        assert config.scenario_mode is True
        assert config.transport.timeout_seconds == 5.0
        assert config.display.nearby_places_new_layout is True
        assert config.display.responses_visible_count == 25
        assert config.logging.level == "DEBUG"

    def test_from_file_without_top_level_key(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("scenario_mode: true\n")

        assert EventPagesConfig.from_file(path).scenario_mode is True

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("eventpages: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            EventPagesConfig.from_file(path)
        assert "Invalid configuration file" in exc_info.value.message

    def test_non_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            EventPagesConfig.from_file(path)

    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / ".eventpages" / "config.yaml"
        config = EventPagesConfig(scenario_mode=True)
        config.display.distance_decimals = 2

        config.save(path)
        loaded = EventPagesConfig.from_file(path)

        assert loaded.scenario_mode is True
        assert loaded.display.distance_decimals == 2


class TestDisplayConfig:
    """Tests for get_display_config."""

    def test_from_config(self):
        config = EventPagesConfig(display=DisplayConfig(responses_visible_count=3))
        assert get_display_config(config) is config.display

    def test_from_mapping(self):
        display = get_display_config({"display": {"distance_decimals": 2}})

        assert display.distance_decimals == 2
        assert display.responses_visible_count == 10

    def test_from_nested_mapping(self):
        display = get_display_config({"eventpages": {"display": {"nearby_places_new_layout": True}}})
        assert display.nearby_places_new_layout is True

    def test_defaults(self):
        assert get_display_config(None) == DisplayConfig()
        assert get_display_config(object()) == DisplayConfig()


class TestGlobalConfig:
    """Tests for the process-wide configuration."""

    def test_get_config_reads_project_file(self, tmp_path: Path):
        (tmp_path / ".eventpages").mkdir()
        (tmp_path / ".eventpages" / "config.yaml").write_text("scenario_mode: true\n")

        assert get_config(tmp_path).scenario_mode is True
        # cached until reset
        assert get_config(tmp_path / "elsewhere") is get_config()

    def test_set_and_reset(self, tmp_path: Path):
        custom = EventPagesConfig(scenario_mode=True)
        set_config(custom)
        assert get_config() is custom

        reset_config()
        assert get_config(tmp_path) is not custom
