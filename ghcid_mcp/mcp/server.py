"""MCP Server wiring — list_tools, call_tool, and stdio entry point."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ghcid_mcp import logger as log_setup
from ghcid_mcp.config import VERSION

from .tools import TOOL_DEFINITIONS, dispatch

logger = logging.getLogger(__name__)

SERVER_NAME = "ghcid-mcp"
INSTRUCTIONS = (
    "Compiler feedback for Haskell projects. Use check-manifest to confirm "
    "a directory holds a .cabal file, then check-compilation to run "
    "ghcid -c \"cabal repl\" there and get the compiler output."
)

# ── Server instance ───────────────────────────────────────────────────────

server = Server(SERVER_NAME, version=VERSION, instructions=INSTRUCTIONS)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Declare all available tools."""
    return [Tool(**defn) for defn in TOOL_DEFINITIONS]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool invocations; every outcome becomes a text response."""
    try:
        result = await dispatch(name, arguments)
    except Exception as exc:
        logger.exception("[mcp:error] %s raised", name)
        result = {"error": str(exc)}
    return [TextContent(type="text", text=render(result))]


def render(result: dict[str, Any] | str) -> str:
    """Serialise a tool result to JSON text.

    Plain strings pass through unchanged.  If a dict cannot be encoded,
    its ``message`` (or ``error``) string is returned instead.
    """
    if isinstance(result, str):
        return result
    try:
        return json.dumps(result, indent=2)
    except (TypeError, ValueError) as exc:
        logger.error("[mcp:render] serialisation failed: %s", exc)
        return str(result.get("message") or result.get("error") or result)


# ── Entry point ───────────────────────────────────────────────────────────


async def main():
    """Run the MCP server over stdio."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def run() -> None:
    """Console-script entry point: set up logging and serve on stdio."""
    log_setup.init()
    logger.info("%s %s starting on stdio", SERVER_NAME, VERSION)
    asyncio.run(main())
