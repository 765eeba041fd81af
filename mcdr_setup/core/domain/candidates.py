"""
L1 Domain — Interpreter candidate selection (pure).

Turns a remote release listing into the ordered list of interpreter
versions offered to the operator.  The first entry is the default.
"""

from __future__ import annotations

import functools
import logging
from typing import Iterable

from mcdr_setup.core.domain.version import (
    Version,
    VersionConstraint,
    compare,
    parse_version,
    satisfies,
)
from mcdr_setup.core.errors import EmptyCatalogError, ParseError
from mcdr_setup.core.models.registry import RemoteVersionEntry

logger = logging.getLogger(__name__)


def catalog_names(entries: Iterable[RemoteVersionEntry], major: str = "3") -> list[str]:
    """Extract candidate version names from registry entries.

    Release directories are listed as ``3.11.5/``; the one-character
    suffix is stripped.  Entries outside the major line are skipped.
    """
    names: list[str] = []
    for entry in entries:
        name = entry.name
        if len(name) < 2 or not name.startswith(major):
            continue
        names.append(name[:-1])
    return names


def select_candidates(
    names: Iterable[str],
    constraint: VersionConstraint,
    *,
    major: str = "3",
    promote_previous_minor: bool = True,
) -> list[Version]:
    """Filter, sort and reorder candidate interpreter versions.

    Args:
        names: Version strings from the catalog, in any order.
        constraint: The package's ``requires_python``.
        major: Required major line.
        promote_previous_minor: Move the newest release of the previous
            minor line to the front so it becomes the default.

    Returns:
        Versions newest first, possibly with one entry promoted.

    Raises:
        EmptyCatalogError: If no name qualifies.
    """
    versions: list[Version] = []
    for name in names:
        try:
            version = parse_version(name)
        except ParseError:
            logger.debug("Skipping malformed catalog entry: %r", name)
            continue
        if str(version.major) != major:
            continue
        if satisfies(version, constraint):
            versions.append(version)

    if not versions:
        raise EmptyCatalogError(
            f"No Python {major}.x release satisfies '{constraint}'"
        )

    versions.sort(key=functools.cmp_to_key(compare), reverse=True)

    if promote_previous_minor:
        latest_minor = versions[0].minor
        for index, version in enumerate(versions):
            if version.minor != latest_minor:
                versions.insert(0, versions.pop(index))
                break

    logger.debug("Interpreter candidates: %s", ", ".join(map(str, versions)))
    return versions
