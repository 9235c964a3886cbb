"""Shared utilities."""

from .logging_config import configure_logging_from_config, log_stage, setup_logging


__all__ = ["configure_logging_from_config", "log_stage", "setup_logging"]
