"""
ascii-video Configuration
=========================

This module handles configuration loading for the ASCV codec.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. ascv.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    ASCV_LOG_LEVEL       -> logging.level
    ASCV_LOG_FORMAT      -> logging.format
    ASCV_IO_BUFFER_SIZE  -> io.buffer_size

Note:
    Format limits (magic, version, maximum dimensions, maximum frame
    count) are NOT configurable. They are part of the file format and
    live in ascii_video.container.video.

Example:
    from ascii_video.config import settings

    print(settings.logging.level)
    print(settings.io.buffer_size)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class IOConfig(BaseModel):
    """Buffered file I/O configuration."""

    buffer_size: int = Field(
        default=64 * 1024,
        ge=512,
        description="Buffer size in bytes for file readers and writers",
    )


class Settings(BaseModel):
    """
    Main settings class for ascii-video.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    io: IOConfig = Field(default_factory=IOConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to ascv.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("ascv.yaml"),
            Path("ascv.yml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Logging settings
    if env_log := os.environ.get("ASCV_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_fmt := os.environ.get("ASCV_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_fmt

    # I/O settings
    if env_buf := os.environ.get("ASCV_IO_BUFFER_SIZE"):
        config_data.setdefault("io", {})["buffer_size"] = int(env_buf)


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
