"""MCP package entry point — allows ``python -m ghcid_mcp.mcp``."""

from .server import run

if __name__ == "__main__":
    run()
