"""MCP tool definitions and dispatch logic."""

from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import ValidationError

from ghcid_mcp.contracts import (
    CheckCompilationRequest,
    CheckCompilationResponse,
    CheckManifestRequest,
    CheckManifestResponse,
    EchoRequest,
)
from ghcid_mcp.manifest import check_manifest
from ghcid_mcp.probe import check_compilation

logger = logging.getLogger(__name__)

ECHO_PREFIX = "response from mcp server "

# ── Tool catalogue ────────────────────────────────────────────────────────

TOOL_DEFINITIONS = [
    {
        "name": "check-manifest",
        "description": (
            "Check whether a directory contains a .cabal build manifest "
            "(direct children only). Returns the manifest path when found."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Directory to search for a .cabal file",
                },
            },
            "required": ["path"],
        },
    },
    {
        "name": "check-compilation",
        "description": (
            "Type-check a Haskell project by running ghcid -c \"cabal repl\" "
            "in its directory. Returns success, compiler stdout/stderr and "
            "the exit code."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Project directory containing a .cabal file",
                },
                "timeoutSeconds": {
                    "type": ["integer", "null"],
                    "minimum": 1,
                    "description": "Wall-clock budget in seconds (default: 300)",
                },
            },
            "required": ["path"],
        },
    },
    {
        "name": "echo",
        "description": "Echo back the provided text",
        "inputSchema": {
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "Text to echo back",
                },
            },
            "required": ["text"],
        },
    },
]

TOOL_NAMES = frozenset(defn["name"] for defn in TOOL_DEFINITIONS)


# ── Dispatch ──────────────────────────────────────────────────────────────


async def dispatch(name: str, arguments: dict[str, Any] | None) -> dict[str, Any] | str:
    """Route a tool call to its handler.

    Returns the response as a JSON-ready dict (wire field names), or a
    plain string for ``echo``.  Probe failures and invalid arguments come
    back as negative responses, never as exceptions.
    """
    start = time.perf_counter()
    # Clients may send explicit nulls for omitted optional fields
    args = {k: v for k, v in (arguments or {}).items() if v is not None}
    logger.info("[mcp:call]   %s  args=%s", name, _summarise(args))

    match name:
        case "check-manifest":
            try:
                req = CheckManifestRequest.model_validate(args)
            except ValidationError as exc:
                resp = CheckManifestResponse(found=False, message=_invalid(name, exc))
            else:
                resp = await check_manifest(req.path)
            result: dict[str, Any] | str = resp.model_dump(by_alias=True)

        case "check-compilation":
            try:
                req = CheckCompilationRequest.model_validate(args)
            except ValidationError as exc:
                resp = CheckCompilationResponse(success=False, message=_invalid(name, exc))
            else:
                resp = await check_compilation(req.path, req.timeout_seconds)
            result = resp.model_dump(by_alias=True)

        case "echo":
            try:
                req = EchoRequest.model_validate(args)
            except ValidationError as exc:
                result = {"error": _invalid(name, exc)}
            else:
                result = ECHO_PREFIX + req.text

        case _:
            result = {"error": f"Unknown tool: {name}"}

    _log_result(name, result, start)
    return result


def _invalid(name: str, exc: ValidationError) -> str:
    """One-line rendering of a request validation failure."""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )
    return f"Invalid arguments for {name}: {problems}"


def _summarise(args: dict[str, Any], max_len: int = 200) -> str:
    """One-line summary of MCP tool arguments."""
    raw = ", ".join(f"{k}={v!r}" for k, v in args.items())
    return raw[:max_len] + ("…" if len(raw) > max_len else "")


def _log_result(name: str, result: dict[str, Any] | str, start: float) -> None:
    elapsed = int((time.perf_counter() - start) * 1000)
    if isinstance(result, str):
        logger.info("[mcp:result] %s  OK (%dms)", name, elapsed)
    elif "error" in result or result.get("success") is False or result.get("found") is False:
        logger.warning(
            "[mcp:result] %s  FAILED (%dms): %s",
            name, elapsed, result.get("error") or result.get("message"),
        )
    else:
        logger.info("[mcp:result] %s  OK (%dms)", name, elapsed)
