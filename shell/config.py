"""Shell configuration with YAML support."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from shell.schemas import ShellConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_config(yaml_path: str | Path) -> ShellConfig:
    """Load shell configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        ShellConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or has unknown values
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    try:
        return ShellConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: ShellConfig, yaml_path: str | Path) -> None:
    """Save shell configuration to YAML file."""
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)


def configure_logging(config: ShellConfig) -> None:
    """Route log records to stderr, or to ``config.log_file`` when set."""
    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=config.log_level, format=LOG_FORMAT, filename=config.log_file
        )
    else:
        logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
