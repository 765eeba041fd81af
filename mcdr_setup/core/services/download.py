"""
File download — chunked transfer behind a blocking call.

The transfer runs on an asyncio loop (network reads happen in worker
threads, one chunk at a time) but callers only see the synchronous
:func:`download_file`.  Data is written to a ``.part`` sibling that is
renamed on success, so a failed download never leaves a file that
looks complete.  There is no resume: a retry starts from zero.
"""

from __future__ import annotations

import asyncio
import http.client
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable

from mcdr_setup import __version__
from mcdr_setup.core.models.action import Receipt

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# (bytes_downloaded, total_bytes or None)
ProgressCallback = Callable[[int, int | None], None]


class _TransportError(Exception):
    """Network-side failure while fetching the body."""


def _part_path(destination: Path) -> Path:
    return destination.with_name(destination.name + ".part")


async def _transfer(
    url: str,
    destination: Path,
    on_progress: ProgressCallback | None,
) -> int:
    req = urllib.request.Request(url, headers={"User-Agent": f"mcdr-setup/{__version__}"})
    try:
        resp = await asyncio.to_thread(urllib.request.urlopen, req)
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        raise _TransportError(str(e)) from e

    part = _part_path(destination)
    downloaded = 0
    with resp:
        total = resp.length
        with part.open("wb") as fh:
            while True:
                try:
                    chunk = await asyncio.to_thread(resp.read, CHUNK_SIZE)
                except (http.client.HTTPException, OSError) as e:
                    raise _TransportError(str(e)) from e
                if not chunk:
                    break
                fh.write(chunk)
                downloaded += len(chunk)
                if on_progress is not None:
                    on_progress(downloaded, total)

    if total is not None and downloaded < total:
        raise _TransportError(f"connection closed after {downloaded} of {total} bytes")

    part.replace(destination)
    return downloaded


def download_file(
    url: str,
    destination: Path,
    *,
    on_progress: ProgressCallback | None = None,
) -> Receipt:
    """Download ``url`` to ``destination``, blocking until done.

    Args:
        url: Source URL.
        destination: Final file path.
        on_progress: Called after every chunk; progress is informational
            and does not affect the result.

    Returns:
        Success receipt, or a failure with ``transport_failure`` /
        ``io_failure``.
    """
    operation = f"download {url}"
    logger.info("Downloading %s -> %s", url, destination)

    try:
        size = asyncio.run(_transfer(url, destination, on_progress))
    except _TransportError as e:
        _discard(_part_path(destination))
        return Receipt.failure(
            operation=operation,
            error=f"Failed to download: {e}",
            error_kind="transport_failure",
        )
    except OSError as e:
        _discard(_part_path(destination))
        return Receipt.failure(
            operation=operation,
            error=f"Failed to download: {e}",
            error_kind="io_failure",
        )

    logger.info("Downloaded %d bytes to %s", size, destination)
    return Receipt.success(operation=operation)


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove partial download %s: %s", path, e)
