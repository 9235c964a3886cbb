"""Configuration loading utilities."""

from roai.config.loader import get_config, load_config_from_files, reload_config
from roai.config.schemas import EngineConfig, ScoringWeights


def load_config():
    """Convenience function to load config with default paths."""
    return get_config()


__all__ = [
    "EngineConfig",
    "ScoringWeights",
    "get_config",
    "load_config",
    "load_config_from_files",
    "reload_config",
]
