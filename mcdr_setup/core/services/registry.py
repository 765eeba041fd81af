"""
Remote registry client — package metadata and interpreter catalog.

Two read-only GETs: the package's PyPI JSON document (for
``requires_python`` and the current version) and the mirror's listing
of CPython release folders.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from pydantic import TypeAdapter, ValidationError

from mcdr_setup import __version__
from mcdr_setup.core.config.loader import WizardConfig
from mcdr_setup.core.errors import FetchError
from mcdr_setup.core.models.registry import PackageMetadata, PyPIDocument, RemoteVersionEntry

logger = logging.getLogger(__name__)

_USER_AGENT = f"mcdr-setup/{__version__}"
_CATALOG_ADAPTER = TypeAdapter(list[RemoteVersionEntry])


def _get_json(url: str) -> Any:
    """GET ``url`` and decode the JSON body."""
    logger.debug("GET %s", url)
    req = urllib.request.Request(
        url,
        headers={"Accept": "application/json", "User-Agent": _USER_AGENT},
    )
    try:
        with urllib.request.urlopen(req) as resp:
            body = resp.read()
    except (urllib.error.URLError, OSError) as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    try:
        return json.loads(body)
    except ValueError as e:
        raise FetchError(f"Failed to parse response from {url}: {e}") from e


def fetch_package_metadata(config: WizardConfig) -> PackageMetadata:
    """Fetch ``requires_python`` and the current version of the package.

    Raises:
        FetchError: If the endpoint is unreachable or the body is malformed.
    """
    data = _get_json(config.metadata_url)
    try:
        document = PyPIDocument.model_validate(data)
    except ValidationError as e:
        raise FetchError(f"Unexpected metadata format: {e}") from e

    logger.info(
        "%s %s requires Python '%s'",
        config.package_name,
        document.info.version,
        document.info.requires_python or "",
    )
    return document.info


def fetch_catalog(config: WizardConfig) -> list[RemoteVersionEntry]:
    """Fetch the interpreter release listing.

    Raises:
        FetchError: If the endpoint is unreachable or the body is malformed.
    """
    data = _get_json(config.catalog_url)
    try:
        entries = _CATALOG_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise FetchError(f"Unexpected catalog format: {e}") from e

    logger.debug("Catalog lists %d entries", len(entries))
    return entries
