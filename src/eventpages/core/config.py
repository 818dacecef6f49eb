"""
Event pages configuration management.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from eventpages import __version__
from eventpages.core.errors import ConfigError


@dataclass
class TransportConfig:
    """HTTP transport configuration for auxiliary content loads."""

    timeout_seconds: float = 30.0
    follow_redirects: bool = True
    user_agent: str = f"eventpages/{__version__}"


@dataclass
class DisplayConfig:
    """Display policy shared by all modules."""

    nearby_places_new_layout: bool = False
    responses_visible_count: int = 10  # DYFI rows shown before "See All"
    distance_decimals: int = 1


@dataclass
class LoggingConfig:
    """Logging configuration used by the CLI."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class EventPagesConfig:
    """
    Complete event pages configuration.

    Loaded from .eventpages/config.yaml. Read-only for the duration of a
    render pass.
    """

    version: str = __version__

    # Request "-scenario" product variants instead of real products
    scenario_mode: bool = False

    transport: TransportConfig = field(default_factory=TransportConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path) -> "EventPagesConfig":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration file {path}: expected a mapping")

        return cls.from_dict(data.get("eventpages", data))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventPagesConfig":
        """Create config from dictionary."""
        config = cls()

        if "version" in data:
            config.version = str(data["version"])

        if "scenario_mode" in data:
            config.scenario_mode = bool(data["scenario_mode"])

        if "transport" in data:
            t = data["transport"]
            config.transport = TransportConfig(
                timeout_seconds=float(t.get("timeout_seconds", 30.0)),
                follow_redirects=t.get("follow_redirects", True),
                user_agent=t.get("user_agent", f"eventpages/{__version__}"),
            )

        if "display" in data:
            d = data["display"]
            config.display = DisplayConfig(
                nearby_places_new_layout=d.get("nearby_places_new_layout", False),
                responses_visible_count=int(d.get("responses_visible_count", 10)),
                distance_decimals=int(d.get("distance_decimals", 1)),
            )

        if "logging" in data:
            log = data["logging"]
            config.logging = LoggingConfig(
                level=str(log.get("level", "INFO")).upper(),
                format=log.get("format", LoggingConfig.format),
            )

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "eventpages": {
                "version": self.version,
                "scenario_mode": self.scenario_mode,
                "transport": {
                    "timeout_seconds": self.transport.timeout_seconds,
                    "follow_redirects": self.transport.follow_redirects,
                    "user_agent": self.transport.user_agent,
                },
                "display": {
                    "nearby_places_new_layout": self.display.nearby_places_new_layout,
                    "responses_visible_count": self.display.responses_visible_count,
                    "distance_decimals": self.display.distance_decimals,
                },
                "logging": {
                    "level": self.logging.level,
                    "format": self.logging.format,
                },
            }
        }

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


def get_display_config(config: Any) -> DisplayConfig:
    """
    Display policy of `config`.

    Accepts an EventPagesConfig, a plain mapping in the config file layout
    (with or without the top-level "eventpages" key), or None for defaults.
    """
    if isinstance(config, EventPagesConfig):
        return config.display
    if isinstance(config, Mapping):
        return EventPagesConfig.from_dict(config.get("eventpages", config)).display
    display = getattr(config, "display", None)
    return display if isinstance(display, DisplayConfig) else DisplayConfig()


# Global config instance
_config: EventPagesConfig | None = None


def get_config(project_path: Path | None = None) -> EventPagesConfig:
    """
    Get event pages configuration.

    Loads from .eventpages/config.yaml in the project directory.
    Falls back to defaults if not found.
    """
    global _config

    if _config is not None:
        return _config

    if project_path is None:
        project_path = Path.cwd()

    config_path = project_path / ".eventpages" / "config.yaml"
    _config = EventPagesConfig.from_file(config_path)

    return _config


def set_config(config: EventPagesConfig) -> None:
    """Install `config` as the process-wide configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
