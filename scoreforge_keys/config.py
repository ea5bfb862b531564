"""
Configuration module for ScoreForge Keys.

Handles timeline, document and logging settings.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class TimelineConfig:
    """Configuration for tick conversion."""
    division: int = 480  # internal ticks per quarter note
    file_division: int = 480  # ticks per quarter note in files


@dataclass
class IOConfig:
    """Configuration for key list documents."""
    key_list_tag: str = "KeyList"
    indent: bool = True


@dataclass
class LoggingConfig:
    """Configuration for diagnostics."""
    level: str = "WARNING"  # "DEBUG" shows key signature clamp corrections


@dataclass
class Config:
    """
    Main configuration class for ScoreForge Keys.

    Handles loading/saving settings.
    """

    # Sub-configurations
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    io: IOConfig = field(default_factory=IOConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application directories
    _config_dir: Path = field(default_factory=lambda: Path.home() / ".scoreforge_keys")
    _config_file: Path = field(default=None)

    def __post_init__(self):
        """Initialize configuration paths."""
        self._config_dir = Path(self._config_dir)
        self._config_file = self._config_dir / "config.json"

    @property
    def config_file(self) -> Path:
        return self._config_file

    def to_dict(self) -> dict:
        return {
            "timeline": asdict(self.timeline),
            "io": asdict(self.io),
            "logging": asdict(self.logging),
        }

    def save(self) -> None:
        """Save configuration to disk."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> "Config":
        """Load configuration from disk or create default."""
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))

        if config._config_file.exists():
            try:
                with open(config._config_file, "r") as f:
                    data = json.load(f)

                if "timeline" in data:
                    config.timeline = TimelineConfig(**data["timeline"])
                if "io" in data:
                    config.io = IOConfig(**data["io"])
                if "logging" in data:
                    config.logging = LoggingConfig(**data["logging"])

            except (json.JSONDecodeError, TypeError, KeyError) as e:
                logger.warning(f"Could not load config file: {e}")

        return config


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = Config()
    _config.save()
