"""
Remote registry models — package metadata and the interpreter catalog.

Both are read-only snapshots of what the remote side returned.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RemoteVersionEntry(BaseModel):
    """One entry of the interpreter binary listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str
    kind: str = Field(default="", alias="type")   # "dir" for release folders
    url: str = ""


class PackageMetadata(BaseModel):
    """The ``info`` block of the package's PyPI JSON document."""

    model_config = ConfigDict(frozen=True)

    version: str
    requires_python: str | None = None


class PyPIDocument(BaseModel):
    """Top-level PyPI JSON response; only ``info`` is used."""

    info: PackageMetadata
