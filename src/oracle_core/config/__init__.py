"""Configuration system."""

from oracle_core.config.loader import load_config
from oracle_core.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
