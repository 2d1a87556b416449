"""
Configuration management for HDLC Host.

Loads/saves TOML configuration for framing characters, serial parameters and
logging.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from hdlc.framing import FEND, FESC, TFEND, TFESC, SpecialChars


class SpecialCharsConfig(BaseModel):
    """Framing character configuration."""

    fend: int = Field(default=FEND, ge=0, le=0xFF, description="Frame end / sync byte")
    fesc: int = Field(default=FESC, ge=0, le=0xFF, description="Frame escape byte")
    tfend: int = Field(default=TFEND, ge=0, le=0xFF, description="Substitute for FEND after FESC")
    tfesc: int = Field(default=TFESC, ge=0, le=0xFF, description="Substitute for FESC after FESC")

    def to_special_chars(self) -> SpecialChars:
        """Build the SpecialChars used by the codec (not checked for duplicates here)."""
        return SpecialChars(fend=self.fend, fesc=self.fesc, tfend=self.tfend, tfesc=self.tfesc)


class SerialConfig(BaseModel):
    """Serial port configuration."""

    port: str = Field(default="/dev/ttyUSB0", description="Serial port device or pyserial URL")
    baud: int = Field(default=115200, description="Baud rate")
    timeout_ms: int = Field(default=10, description="Receive timeout in milliseconds")
    max_frame_len: int = Field(
        default=4096, gt=0, description="Largest frame body accepted from the stream"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    frame_dump: bool = Field(default=True, description="Enable frame-level logging")
    log_file: Optional[str] = Field(default=None, description="Log file (stderr if unset)")


class Config(BaseModel):
    """Complete HDLC Host configuration."""

    special_chars: SpecialCharsConfig = Field(default_factory=SpecialCharsConfig)
    serial: SerialConfig = Field(default_factory=SerialConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get default configuration file path."""
    config_home = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "hdlc" / "config.toml"


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        path: Configuration file path. If None, uses default location.

    Returns:
        Loaded configuration object.
    """
    if path is None:
        path = get_config_path()

    if not path.exists():
        # Return default config if file doesn't exist
        return Config()

    import tomli

    with open(path, "rb") as f:
        data = tomli.load(f)

    return Config(**data)


def save_config(config: Config, path: Optional[Path] = None) -> None:
    """
    Save configuration to TOML file.

    Args:
        config: Configuration object to save.
        path: Configuration file path. If None, uses default location.
    """
    if path is None:
        path = get_config_path()

    # Create directory if it doesn't exist
    path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null, so unset optionals are left out
    import tomli_w

    with open(path, "wb") as f:
        tomli_w.dump(config.model_dump(exclude_none=True), f)


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure root logging from config.

    Args:
        config: Logging section of the configuration.
    """
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(os.path.expanduser(config.log_file))
    else:
        handler = logging.StreamHandler()

    logging.basicConfig(
        level=config.level.upper(),
        format="%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
        force=True,
    )
