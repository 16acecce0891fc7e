"""Compilation probe — run the compiler-feedback process against a project.

``check()`` is a one-shot, point-in-time check:

1. The path must exist (checked before any directory scan).
2. The manifest locator must find a build manifest.  Locator failures
   are reported as ``NoManifest`` unless ``PROPAGATE_LOCATOR_ERRORS``
   is set.
3. ``ghcid -c "cabal repl"`` is launched in the project directory and
   raced against the caller's deadline.
4. The exit status decides success; the compiler's text is passed
   through untouched.

``check_compilation()`` is the tool-boundary wrapper and never raises a
``ProbeError``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from ghcid_mcp import manifest, runner
from ghcid_mcp.config import ghcid_command, settings
from ghcid_mcp.contracts import CheckCompilationResponse, CompileCheckResult
from ghcid_mcp.errors import NoManifest, PathNotFound, ProbeError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Compilation successful - no errors found"
FAILURE_MESSAGE = "Compilation failed - errors detected"


async def check(
    path: str,
    timeout_seconds: int | None = None,
    *,
    command: Sequence[str] | None = None,
) -> CompileCheckResult:
    """Type-check the project at *path* and return a ``CompileCheckResult``.

    *timeout_seconds* defaults to ``settings.DEFAULT_TIMEOUT_SECONDS``.
    *command* overrides the configured ghcid invocation.

    Raises ``PathNotFound``, ``NoManifest`` (or, with
    ``PROPAGATE_LOCATOR_ERRORS``, the locator's own error), ``ProbeTimeout``
    or ``ProbeIOError``.
    """
    if timeout_seconds is None:
        timeout_seconds = settings.DEFAULT_TIMEOUT_SECONDS

    if not os.path.exists(path):
        logger.info("[probe] path not found: %s", path)
        raise PathNotFound(path)

    try:
        found = await manifest.locate(path)
    except NoManifest:
        raise
    except ProbeError as exc:
        if settings.PROPAGATE_LOCATOR_ERRORS:
            raise
        logger.info("[probe] locator failed for %s (%s), reporting no manifest", path, exc)
        raise NoManifest(path, settings.MANIFEST_SUFFIX) from exc

    argv = list(command) if command is not None else ghcid_command()
    logger.info(
        "[probe:launch] %s manifest=%s timeout=%ss",
        path, found.manifest_path, timeout_seconds,
    )

    try:
        result = await runner.run(argv, timeout_s=timeout_seconds, cwd=path)
    except ProbeError as exc:
        logger.warning("[probe:%s] %s: %s", type(exc).__name__, path, exc)
        raise

    success = result.exit_code == 0
    return CompileCheckResult(
        success=success,
        message=SUCCESS_MESSAGE if success else FAILURE_MESSAGE,
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.exit_code,
    )


async def check_compilation(
    path: str,
    timeout_seconds: int | None = None,
    *,
    command: Sequence[str] | None = None,
) -> CheckCompilationResponse:
    """Run ``check()`` and fold any ``ProbeError`` into a failed response."""
    try:
        result = await check(path, timeout_seconds, command=command)
    except ProbeError as exc:
        return CheckCompilationResponse(success=False, message=exc.message)
    return CheckCompilationResponse.from_result(result)
