"""Engine configuration: animation pacing and layout geometry."""

import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from bstanim.errors import ConfigError


@dataclasses.dataclass
class PacingConfig:
    """Timer intervals and rates, in seconds and pixels per second."""

    narration_interval: float = 0.5
    search_hop: float = 0.6
    traversal_hop: float = 0.8
    delete_locate_hold: float = 0.5
    flash_interval: float = 0.12
    flash_toggles: int = 7
    drop_speed: float = 300.0
    drop_threshold: float = 900.0
    fade_speed: float = 3.0


@dataclasses.dataclass
class LayoutConfig:
    """Screen geometry used by the layout engine."""

    origin_x: float = 350.0
    origin_y: float = 80.0
    half_spread: float = 200.0
    row_height: float = 80.0
    ease_rate: float = 5.0
    spawn_x: float = 350.0
    spawn_y: float = -100.0


@dataclasses.dataclass
class EngineConfig:
    pacing: PacingConfig = dataclasses.field(default_factory=PacingConfig)
    layout: LayoutConfig = dataclasses.field(default_factory=LayoutConfig)
    initial_key: int = 10

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        """
        Build a config from a plain mapping, e.g. parsed YAML.

        Raises:
            ConfigError: On unknown sections/keys or non-numeric values
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        unknown = set(data) - {"pacing", "layout", "initial_key"}
        if unknown:
            raise ConfigError(f"Unknown configuration sections: {sorted(unknown)}")

        config = cls(
            pacing=_section(PacingConfig, data.get("pacing"), "pacing"),
            layout=_section(LayoutConfig, data.get("layout"), "layout"),
        )
        if "initial_key" in data:
            initial_key = data["initial_key"]
            if isinstance(initial_key, bool) or not isinstance(initial_key, int):
                raise ConfigError(
                    f"initial_key must be an integer, got {initial_key!r}"
                )
            config.initial_key = initial_key
        return config

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


def _section(section_cls, values: Optional[Dict[str, Any]], name: str):
    if values is None:
        return section_cls()
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")

    fields = {f.name: f for f in dataclasses.fields(section_cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in fields:
            raise ConfigError(
                f"Unknown key '{key}' in section '{name}'. "
                f"Valid keys: {', '.join(sorted(fields))}"
            )
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name}.{key} must be a number, got {value!r}")
        if value < 0 and not (name == "layout" and key.startswith(("origin", "spawn"))):
            raise ConfigError(f"{name}.{key} must be non-negative, got {value}")
        if fields[key].type in (int, "int"):
            if value != int(value):
                raise ConfigError(f"{name}.{key} must be a whole number, got {value}")
            kwargs[key] = int(value)
        else:
            kwargs[key] = float(value)
    return section_cls(**kwargs)


def load_config(path: Optional[Union[str, Path]]) -> EngineConfig:
    """
    Load an engine configuration from a YAML file.

    Args:
        path: Path to a YAML file, or None for defaults

    Returns:
        EngineConfig with defaults filled in for missing keys

    Raises:
        ConfigError: If the file cannot be read or contains invalid values
    """
    if path is None:
        return EngineConfig()
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {path}: {e}")
    return EngineConfig.from_dict(data)
