"""Manifest locator — find the build manifest of a project directory.

``locate()`` validates a directory and scans its direct children for a
file ending in the manifest suffix (``.cabal`` by default).  Candidates
are sorted by name before the first is picked, so the result does not
depend on filesystem enumeration order.  More than one match is not an
error; the extra candidates are only reported in the log.

``check_manifest()`` is the tool-boundary wrapper: it never raises a
``ProbeError`` and always returns a ``CheckManifestResponse``.
"""

from __future__ import annotations

import asyncio
import logging
import os

from ghcid_mcp.config import settings
from ghcid_mcp.contracts import CheckManifestResponse, ManifestCheckResult
from ghcid_mcp.errors import (
    NoManifest,
    NotADirectory,
    PathNotFound,
    PermissionDenied,
    ProbeError,
    ProbeIOError,
)

logger = logging.getLogger(__name__)


def _scan(path: str, suffix: str) -> list[str]:
    """Return the names of direct children of *path* ending in *suffix*."""
    try:
        with os.scandir(path) as entries:
            return [entry.name for entry in entries if entry.name.endswith(suffix)]
    except PermissionError as exc:
        raise PermissionDenied(path) from exc
    except OSError as exc:
        raise ProbeIOError(exc) from exc


async def locate(path: str, *, suffix: str | None = None) -> ManifestCheckResult:
    """Locate the build manifest in *path* (non-recursive).

    Raises
    ------
    PathNotFound
        *path* does not exist.
    NotADirectory
        *path* exists but is not a directory.
    PermissionDenied
        The directory listing was refused.
    ProbeIOError
        Any other failure while listing the directory.
    NoManifest
        The directory holds no entry ending in *suffix*.
    """
    suffix = suffix or settings.MANIFEST_SUFFIX

    if not os.path.exists(path):
        logger.info("[locate] path not found: %s", path)
        raise PathNotFound(path)
    if not os.path.isdir(path):
        logger.info("[locate] not a directory: %s", path)
        raise NotADirectory(path)

    loop = asyncio.get_running_loop()
    names = await loop.run_in_executor(None, _scan, path, suffix)

    if not names:
        logger.info("[locate] no %s file in %s", suffix, path)
        raise NoManifest(path, suffix)

    names.sort()
    chosen = names[0]
    if len(names) > 1:
        logger.warning(
            "[locate] %d %s files in %s, using %s (candidates: %s)",
            len(names), suffix, path, chosen, ", ".join(names),
        )

    manifest_path = os.path.join(path, chosen)
    logger.debug("[locate] found %s", manifest_path)
    return ManifestCheckResult(
        found=True,
        message=f"Found {suffix} file: {chosen}",
        manifest_path=manifest_path,
    )


async def check_manifest(path: str) -> CheckManifestResponse:
    """Run ``locate()`` and fold any ``ProbeError`` into a negative response."""
    try:
        result = await locate(path)
    except ProbeError as exc:
        return CheckManifestResponse(found=False, message=exc.message)
    return CheckManifestResponse.from_result(result)
