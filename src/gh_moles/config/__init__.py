"""Configuration and preflight checks."""

from gh_moles.config.loader import load_config
from gh_moles.config.schema import DEFAULT_CONFIG, MolesConfig

__all__ = [
    "DEFAULT_CONFIG",
    "MolesConfig",
    "load_config",
]
