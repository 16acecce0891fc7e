"""Tests for ghcid_mcp.mcp.smoke — the stdio smoke-test client."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

from mcp.types import CallToolResult, ListToolsResult, TextContent, Tool

from ghcid_mcp.mcp.smoke import run_smoke
from ghcid_mcp.mcp.tools import TOOL_DEFINITIONS


def _session(responses: dict[str, str]) -> SimpleNamespace:
    async def call_tool(name, arguments):
        return CallToolResult(content=[TextContent(type="text", text=responses[name])])

    return SimpleNamespace(
        list_tools=AsyncMock(
            return_value=ListToolsResult(tools=[Tool(**d) for d in TOOL_DEFINITIONS]),
        ),
        call_tool=AsyncMock(side_effect=call_tool),
    )


class TestRunSmoke:
    def test_echo_only(self, capsys):
        session = _session({"echo": "response from mcp server hi"})
        result = asyncio.run(run_smoke(session, text="hi"))

        assert result == {"echo": "response from mcp server hi"}
        session.call_tool.assert_awaited_once_with("echo", {"text": "hi"})
        out = capsys.readouterr().out
        assert "check-compilation" in out
        assert "echo result" in out

    def test_with_path_and_timeout(self):
        session = _session({
            "echo": "e",
            "check-manifest": '{"found": true}',
            "check-compilation": '{"success": true}',
        })
        result = asyncio.run(run_smoke(session, path="/proj", timeout=20))

        assert list(result) == ["echo", "check-manifest", "check-compilation"]
        calls = [c.args for c in session.call_tool.await_args_list]
        assert calls[1] == ("check-manifest", {"path": "/proj"})
        assert calls[2] == ("check-compilation", {"path": "/proj", "timeoutSeconds": 20})

    def test_path_without_timeout(self):
        session = _session({"echo": "e", "check-manifest": "m", "check-compilation": "c"})
        asyncio.run(run_smoke(session, path="/proj"))
        last = session.call_tool.await_args_list[-1]
        assert last.args == ("check-compilation", {"path": "/proj"})
