"""
Configuration loader
"""
import logging
import os
from pathlib import Path

import yaml

from turfwars.models import GameConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/game.yaml"
CONFIG_ENV_VAR = "TURFWARS_CONFIG"


def resolve_config_path() -> str:
    """Config path from $TURFWARS_CONFIG, else config/game.yaml"""
    return os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> GameConfig:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file

    Returns:
        GameConfig object

    Raises:
        FileNotFoundError: If config file not found
        pydantic.ValidationError: If a value is out of range
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def load_config_or_default(config_path: str = None) -> GameConfig:
    """Load the config file, falling back to built-in defaults when it is missing"""
    config_path = config_path or resolve_config_path()
    try:
        config = load_config(config_path)
        logger.info(f"✅ Loaded config from {config_path}")
        return config
    except FileNotFoundError:
        logger.warning(f"⚠️ Config file {config_path} not found, using defaults")
        return GameConfig()
