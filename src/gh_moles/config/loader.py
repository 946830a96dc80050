"""Configuration file loading and merging."""

import logging
from pathlib import Path

import yaml

from gh_moles.config.schema import DEFAULT_CONFIG, MolesConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".gh-moles"
CONFIG_FILENAME = "config.yaml"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.gh-moles/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.gh-moles/config.yaml."""
    return Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or invalid."""
    if not path.exists():
        return None
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_config() -> MolesConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.gh-moles/config.yaml)
    3. Local config (./.gh-moles/config.yaml)
    """
    config = DEFAULT_CONFIG
    for path in (get_home_config_path(), get_local_config_path()):
        data = load_yaml_config(path)
        if data:
            logger.debug("Loaded config from %s", path)
            config = config.merge(MolesConfig.from_dict(data))
    return config
