"""Observability — process-wide logging setup."""

from mcdr_setup.core.observability.logging_config import setup_logging, setup_logging_from_env

__all__ = ["setup_logging", "setup_logging_from_env"]
