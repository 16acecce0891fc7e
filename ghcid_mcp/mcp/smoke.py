"""Smoke-test client — start the server over stdio and exercise its tools.

Usage::

    python -m ghcid_mcp.mcp.smoke
    python -m ghcid_mcp.mcp.smoke --path ~/src/my-haskell-project --timeout 60

Lists the tools, calls ``echo``, and, when ``--path`` is given, calls
``check-manifest`` and ``check-compilation`` on that directory.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


def _info(msg: str) -> None:
    print(f"[smoke] {msg}", flush=True)


def _err(msg: str) -> None:
    print(f"[smoke] ERROR: {msg}", file=sys.stderr, flush=True)


def _text_of(result: Any) -> str:
    """Join the text blocks of a ``CallToolResult``."""
    return "\n".join(
        block.text for block in result.content if getattr(block, "type", "") == "text"
    )


async def run_smoke(
    session: ClientSession,
    *,
    text: str = "Hello, World!",
    path: str | None = None,
    timeout: int | None = None,
) -> dict[str, str]:
    """Drive an initialised *session*; return tool name → response text."""
    listing = await session.list_tools()
    _info("Available tools: " + ", ".join(t.name for t in listing.tools))

    calls: list[tuple[str, dict[str, Any]]] = [("echo", {"text": text})]
    if path is not None:
        compile_args: dict[str, Any] = {"path": path}
        if timeout is not None:
            compile_args["timeoutSeconds"] = timeout
        calls.append(("check-manifest", {"path": path}))
        calls.append(("check-compilation", compile_args))

    responses: dict[str, str] = {}
    for name, arguments in calls:
        result = await session.call_tool(name, arguments)
        responses[name] = _text_of(result)
        _info(f"{name} result: {responses[name]}")
    return responses


async def _amain(args: argparse.Namespace) -> int:
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "ghcid_mcp.mcp"],
    )
    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            await run_smoke(session, text=args.text, path=args.path, timeout=args.timeout)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="ghcid-mcp smoke-test client")
    parser.add_argument("--text", default="Hello, World!", help="Text for the echo tool")
    parser.add_argument("--path", default=None, help="Haskell project directory to probe")
    parser.add_argument("--timeout", type=int, default=None, help="timeoutSeconds for check-compilation")
    args = parser.parse_args(argv)
    return asyncio.run(_amain(args))


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as exc:
        _err(f"SMOKE ERROR: {exc}")
        sys.exit(2)
