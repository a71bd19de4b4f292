"""
Configuration Management for the Art-Net bridge.

Uses Pydantic Settings for type-safe configuration with environment
variable support and YAML file loading.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from artnet_bridge.core.exceptions import ConfigError
from artnet_bridge.dmx.universe import UNIVERSE_MAX, UNIVERSE_MIN

DEFAULT_LISTEN_PORT = 6455
DEFAULT_SERIAL_PORT = "/dev/tty.usbserial"
USBPRO_BAUDRATE = 57600

# ASCII digits only; leading zeros aside, no more digits than 32767 has
UNIVERSE_TEXT = re.compile(r"0*([0-9]{1,5})")


def parse_target_universe(value: Any) -> int:
    """
    Resolve a target universe from user input.

    Accepts ints or ASCII decimal text. Surrounding whitespace is
    stripped, so " 5" reads as 5. Anything else, including signs,
    non-ASCII digits and values outside 0-32767, resolves to 0 rather
    than raising.
    """
    if isinstance(value, bool):
        return UNIVERSE_MIN
    if isinstance(value, int):
        universe = value
    else:
        text = str(value).strip() if value is not None else ""
        match = UNIVERSE_TEXT.fullmatch(text)
        if match is None:
            return UNIVERSE_MIN
        universe = int(match.group(1))

    if not UNIVERSE_MIN <= universe <= UNIVERSE_MAX:
        return UNIVERSE_MIN
    return universe


class ListenerConfig(BaseModel):
    """Art-Net UDP input configuration."""
    host: str = "0.0.0.0"  # all interfaces
    port: int = DEFAULT_LISTEN_PORT
    buffer_size: int = 1024
    poll_interval_s: float = Field(default=0.1, gt=0.0)


class SerialConfig(BaseModel):
    """DMX USB Pro output configuration."""
    port: str = DEFAULT_SERIAL_PORT
    baudrate: int = USBPRO_BAUDRATE
    strategy: Literal["per_frame"] = "per_frame"


class Settings(BaseSettings):
    """
    Main application settings.

    Can be configured via:
    - Environment variables (prefixed with ARTNET_BRIDGE_)
    - YAML config file
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="ARTNET_BRIDGE_",
        env_nested_delimiter="__",
    )

    listener: ListenerConfig = Field(default_factory=ListenerConfig)
    serial: SerialConfig = Field(default_factory=SerialConfig)
    target_universe: int = 0

    # Debug
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("target_universe", mode="before")
    @classmethod
    def _coerce_target_universe(cls, value: Any) -> int:
        return parse_target_universe(value)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(str(path), str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(str(path), "top-level YAML value must be a mapping")
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save settings to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)
