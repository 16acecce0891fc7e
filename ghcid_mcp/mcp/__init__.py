"""ghcid MCP Server package.

Exposes manifest discovery and ghcid-driven compilation checks for
Haskell projects as MCP tools that any MCP-compatible client can call
natively.

Usage::

    # As a module:
    python -m ghcid_mcp.mcp

    # Or import and run:
    from ghcid_mcp.mcp import main
    asyncio.run(main())
"""

from .server import main, run  # noqa: F401

__all__ = ["main", "run"]
