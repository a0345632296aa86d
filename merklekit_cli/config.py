"""
Module 03 - CLI Configuration

Configuration management for the merklekit CLI.
Supports a .env file, environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


# Environment variable prefix
ENV_PREFIX = "MERKLEKIT_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # Encoding used to turn command-line items into bytes
    item_encoding: str = "utf-8"

    # Item proven by the demo command
    demo_index: int = 4

    def __post_init__(self) -> None:
        if self.default_output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"default_output_format must be one of {OUTPUT_FORMATS}, "
                f"got {self.default_output_format!r}"
            )
        if self.demo_index < 0:
            raise ValueError(f"demo_index must be non-negative, got {self.demo_index}")


def apply_env_overrides(config: CLIConfig) -> CLIConfig:
    """Override config fields with MERKLEKIT_* environment variables."""
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human").lower()
    if os.getenv(f"{ENV_PREFIX}ITEM_ENCODING"):
        config.item_encoding = os.getenv(f"{ENV_PREFIX}ITEM_ENCODING", "utf-8")
    if os.getenv(f"{ENV_PREFIX}DEMO_INDEX"):
        config.demo_index = int(os.getenv(f"{ENV_PREFIX}DEMO_INDEX", "4"))

    # Re-run field validation after overrides
    config.__post_init__()
    return config


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables only."""
    return apply_env_overrides(CLIConfig())


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    defaults = CLIConfig()
    return CLIConfig(
        log_level=data.get("log_level", defaults.log_level),
        log_file=data.get("log_file", defaults.log_file),
        default_output_format=data.get("default_output_format", defaults.default_output_format),
        item_encoding=data.get("item_encoding", defaults.item_encoding),
        demo_index=data.get("demo_index", defaults.demo_index),
    )


def default_config_paths() -> list[Path]:
    """Locations searched when no config path is given."""
    return [
        Path.cwd() / "merklekit.json",
        Path.cwd() / ".merklekit.json",
        Path.home() / ".config" / "merklekit" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables (and a .env file) override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    load_dotenv()

    config = CLIConfig()

    if config_path is not None:
        if config_path.exists():
            config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return apply_env_overrides(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human",
  "item_encoding": "utf-8",
  "demo_index": 4
}
"""
