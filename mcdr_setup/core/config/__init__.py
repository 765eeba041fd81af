"""Wizard configuration."""

from mcdr_setup.core.config.loader import WizardConfig, load_config

__all__ = ["WizardConfig", "load_config"]
