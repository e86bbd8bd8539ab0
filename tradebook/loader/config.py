"""Settings loading for entry points."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from config.settings import Settings, load_settings
from tradebook.loader.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_config(config_path: Path = Path("config/config.yaml")) -> Settings:
    """
    Load settings from the config file and environment.

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    config_path = Path(config_path)
    try:
        settings = load_settings(config_path)
    except ValidationError as e:
        raise ConfigurationError(f"invalid settings in {config_path}: {e}") from e
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"could not read config {config_path}: {e}") from e

    logger.debug(f"Settings loaded from {config_path}")
    return settings
