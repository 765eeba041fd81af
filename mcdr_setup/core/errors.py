"""
Error taxonomy for the setup wizard.

Domain and service layers raise these; adapters never do (they return
a :class:`~mcdr_setup.core.models.action.Receipt` instead).
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for every error the wizard knows how to report."""


class ParseError(SetupError, ValueError):
    """Malformed version or constraint text."""


class EmptyCatalogError(SetupError):
    """No interpreter release in the catalog satisfies the constraint."""


class ProbeToolMissingError(SetupError):
    """The package-manager probe tool (pip) is not available at all."""


class InvalidRequestError(SetupError):
    """An action request was dispatched without passing validation."""


class FetchError(SetupError):
    """Remote metadata or catalog could not be fetched or decoded."""


class ConfigError(SetupError):
    """Raised when the wizard configuration file is invalid."""
