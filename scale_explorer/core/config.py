"""Configuration management for Scale Explorer components."""

from typing import Dict, Any, Optional, Tuple
import copy
import json
import os
from pathlib import Path

from ..logger import get_logger

logger = get_logger(__name__)

BPM_RANGE: Tuple[int, int] = (40, 208)
VOLUME_DB_RANGE: Tuple[float, float] = (-60.0, 0.0)

TEMPO_MARKS: Tuple[Tuple[int, str], ...] = (
    (40, "Largo"),
    (76, "Andante"),
    (108, "Moderato"),
    (120, "Allegro"),
    (168, "Presto"),
    (208, "Prestissimo"),
)

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "playback": {
        "interval_seconds": 0.5,
        "bpm": 120,
        "loop": False,
        "direction": "ascending",
        "octave": 4,
        "root": "C",
    },
    "audio": {
        "backend": "auto",
        "sample_dir": None,
        "sample_rate": 44100,
        "volume_db": -12.0,
        "blocksize": 512,
    },
}


def interval_from_bpm(bpm: float) -> float:
    """Seconds between ticks for one note per beat at the given tempo."""
    if bpm <= 0:
        raise ValueError(f"BPM must be positive, got {bpm}")
    return 60.0 / bpm


def tempo_mark(bpm: float) -> str:
    """Name of the highest tempo marking not above the given BPM."""
    name = TEMPO_MARKS[0][1]
    for mark_bpm, mark_name in TEMPO_MARKS:
        if bpm >= mark_bpm:
            name = mark_name
    return name


def validate_config(name: str, config: Dict[str, Any]) -> None:
    """Check the values of one configuration section.

    Raises:
        ValueError: If a value is outside its allowed range
    """
    if name == "playback":
        low, high = BPM_RANGE
        if not low <= config["bpm"] <= high:
            raise ValueError(f"bpm must be between {low} and {high}, got {config['bpm']}")
        if config["interval_seconds"] <= 0:
            raise ValueError(
                f"interval_seconds must be positive, got {config['interval_seconds']}"
            )
        if config["direction"] not in ("ascending", "descending"):
            raise ValueError(f"Unknown direction: {config['direction']}")
    elif name == "audio":
        low, high = VOLUME_DB_RANGE
        if not low <= config["volume_db"] <= high:
            raise ValueError(
                f"volume_db must be between {low} and {high}, got {config['volume_db']}"
            )
        if config["sample_rate"] <= 0:
            raise ValueError(f"sample_rate must be positive, got {config['sample_rate']}")


class ConfigManager:
    """Configuration manager for Scale Explorer components.

    Settings come from the defaults above, overridden key by key by an
    optional ``<section>.json`` file in the config directory. Files are only
    read; changes made through ``update_config`` last for the session.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory holding configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/scale_explorer by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "scale_explorer")

        self.config_dir = Path(config_dir)
        self.default_configs = copy.deepcopy(DEFAULT_CONFIGS)

        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file, falling back to the defaults.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"
        config = default_config.copy()

        if not config_file.exists():
            return config

        try:
            with open(config_file, "r") as f:
                overrides = json.load(f)
            if not isinstance(overrides, dict):
                raise ValueError("top-level JSON value must be an object")
            unknown = set(overrides) - set(default_config)
            if unknown:
                logger.warning(
                    f"Ignoring unknown keys in {config_file}: {sorted(unknown)}"
                )
            config.update({k: v for k, v in overrides.items() if k in default_config})
            validate_config(name, config)
            logger.info(f"Loaded configuration from {config_file}")
            return config
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error loading configuration from {config_file}: {e}")
            return default_config.copy()

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get configuration by name.

        Args:
            name: Configuration name

        Returns:
            Configuration dictionary (a copy)
        """
        return self.configs.get(name, {}).copy()

    def update_config(self, name: str, updates: Dict[str, Any]) -> None:
        """Update configuration for this session.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Raises:
            KeyError: If the configuration name or a key is unknown
            ValueError: If an updated value is out of range
        """
        if name not in self.configs:
            raise KeyError(f"Unknown configuration: {name}")
        unknown = set(updates) - set(self.default_configs[name])
        if unknown:
            raise KeyError(f"Unknown {name} settings: {sorted(unknown)}")

        candidate = dict(self.configs[name], **updates)
        validate_config(name, candidate)
        self.configs[name] = candidate
        logger.debug(f"Updated {name} configuration: {updates}")

    def reset_config(self, name: str) -> None:
        """Reset configuration to default.

        Raises:
            KeyError: If the configuration name is unknown
        """
        if name not in self.default_configs:
            raise KeyError(f"Unknown configuration: {name}")
        self.configs[name] = self.default_configs[name].copy()
