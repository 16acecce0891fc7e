"""Shared test fixtures — reduces boilerplate across test modules.

Provides:
- ``set_test_config`` — autouse fixture that patches settings for tests
- ``cabal_project`` / ``empty_project`` — temporary project directories
- ``stub_command`` / ``write_then_exit`` / ``sleeper`` — argv factories for
  Python one-liners standing in for ghcid
- ``alive`` / ``read_pid`` / ``gone`` — PID helpers for kill checks
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Marker registration
# ---------------------------------------------------------------------------


def pytest_configure(config):
    """Register custom markers.

    Tests that spawn real stub subprocesses are decorated with
    ``@pytest.mark.subprocess``.  Run ``-m 'not subprocess'`` to skip them.
    """
    config.addinivalue_line(
        "markers",
        "subprocess: tests that launch real (stub) child processes",
    )


# ---------------------------------------------------------------------------
# Environment patching
# ---------------------------------------------------------------------------

_SETTINGS_PATCHES: dict[str, object] = {
    "ghcid_mcp.config.settings.GHCID_BIN": "ghcid",
    "ghcid_mcp.config.settings.REPL_COMMAND": "cabal repl",
    "ghcid_mcp.config.settings.DEFAULT_TIMEOUT_SECONDS": 300,
    "ghcid_mcp.config.settings.MANIFEST_SUFFIX": ".cabal",
    "ghcid_mcp.config.settings.PROPAGATE_LOCATOR_ERRORS": False,
    "ghcid_mcp.config.settings.LOG_TO_FILE": False,
}


@pytest.fixture(autouse=True)
def set_test_config(monkeypatch):
    """Patch settings so every test starts from the documented defaults.

    This is ``autouse=True`` so a developer's ``.env`` or ``GHCID_MCP_*``
    variables never leak into test behaviour.
    """
    for target, value in _SETTINGS_PATCHES.items():
        monkeypatch.setattr(target, value)


# ---------------------------------------------------------------------------
# Project directories
# ---------------------------------------------------------------------------


@pytest.fixture
def cabal_project(tmp_path: Path) -> Path:
    """A directory holding exactly one manifest plus some sources."""
    project = tmp_path / "hello"
    project.mkdir()
    (project / "hello.cabal").write_text("cabal-version: 2.4\nname: hello\n")
    (project / "Main.hs").write_text("main :: IO ()\nmain = pure ()\n")
    return project


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """A directory with sources but no manifest."""
    project = tmp_path / "bare"
    project.mkdir()
    (project / "Main.hs").write_text("main = pure ()\n")
    return project


# ---------------------------------------------------------------------------
# Stub compiler processes
# ---------------------------------------------------------------------------


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


@pytest.fixture
def stub_command():
    """Factory: argv running a Python snippet in a fresh interpreter."""
    return _python


@pytest.fixture
def write_then_exit():
    """Factory: stub that writes both streams verbatim and exits."""

    def _make(stdout: str, stderr: str, exit_code: int) -> list[str]:
        return _python(
            "import sys;"
            f"sys.stdout.write({stdout!r});"
            f"sys.stderr.write({stderr!r});"
            f"sys.exit({exit_code})"
        )

    return _make


@pytest.fixture
def sleeper():
    """Factory: stub that optionally records its PID, then sleeps."""

    def _make(pid_file: Path | None = None, seconds: float = 60) -> list[str]:
        record = (
            f"open({str(pid_file)!r}, 'w').write(str(os.getpid()));"
            if pid_file is not None
            else ""
        )
        return _python(f"import os, time;{record}time.sleep({seconds})")

    return _make


# ---------------------------------------------------------------------------
# Process liveness
# ---------------------------------------------------------------------------


def _pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    try:
        raw = Path(f"/proc/{pid}/stat").read_text()
    except OSError:
        # No procfs: trust kill(); on Linux it exited in between
        return sys.platform != "linux"
    # Field 3 is the state; the command name before it may contain spaces
    return raw.rsplit(")", 1)[-1].split()[0] != "Z"


@pytest.fixture
def alive():
    """Factory: True if a PID is running (unreaped zombies count as dead)."""
    return _pid_alive


@pytest.fixture
def read_pid():
    """Factory: wait for a stub to write its PID file, then return the PID.

    Interpreter start-up can outlast a short deadline, so the file is
    polled rather than read once.
    """

    def _read(pid_file: Path, timeout: float = 10) -> int:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                text = pid_file.read_text()
            except FileNotFoundError:
                text = ""
            if text:
                return int(text)
            time.sleep(0.05)
        raise AssertionError(f"stub never wrote {pid_file}")

    return _read


@pytest.fixture
def gone(alive):
    """Factory: poll until a PID is dead; returns False if it never dies."""

    def _gone(pid: int, timeout: float = 5) -> bool:
        deadline = time.monotonic() + timeout
        while alive(pid) and time.monotonic() < deadline:
            time.sleep(0.05)
        return not alive(pid)

    return _gone
