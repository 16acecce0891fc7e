"""Command runner — bounded subprocess execution for the compiler probe.

Provides ``run()`` for launching an external process with a wall-clock
deadline and returning a structured ``RunResult``.  Both output streams
are read concurrently through pipes owned by the call, so a chatty
process cannot deadlock on a full pipe buffer.

The process lifetime is scoped to the call: whether ``run()`` returns,
times out, or is cancelled, the child (and on POSIX its whole process
group) is killed and reaped before control leaves the function.  This
holds even when the direct child has already exited but a descendant
still holds the pipes.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import time
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from ghcid_mcp.errors import ProbeIOError, ProbeTimeout

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class RunResult(BaseModel):
    """Structured result of a subprocess that ran to completion."""

    model_config = ConfigDict(frozen=True)

    exit_code: int = Field(..., description="Process exit code")
    stdout: str = Field(default="", description="Captured stdout")
    stderr: str = Field(default="", description="Captured stderr")
    duration_ms: int = Field(default=0, ge=0, description="Wall-clock duration in ms")
    command: list[str] = Field(..., description="The argv that was executed")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_POSIX = sys.platform != "win32"

# Upper bound on reading the pipes to EOF once the group has been killed
_DRAIN_TIMEOUT_S = 5


def _decode(raw: bytes | None) -> str:
    return (raw or b"").decode("utf-8", errors="replace")


def _kill(proc: asyncio.subprocess.Process) -> None:
    """Send SIGKILL to the child's process group (POSIX) or the child.

    On POSIX the group is signalled even after the direct child has exited,
    since descendants (``cabal repl``, ``ghci``) outlive it and keep the
    pipes open.
    """
    try:
        if _POSIX:
            os.killpg(proc.pid, signal.SIGKILL)
        elif proc.returncode is None:
            proc.kill()
    except ProcessLookupError:
        pass  # already gone
    except PermissionError:
        # macOS reports EPERM for a group holding only zombies
        logger.debug("[runner] killpg(%d) refused", proc.pid)


async def _drain(proc: asyncio.subprocess.Process) -> None:
    """Read both pipes to EOF so their transports close."""
    streams = [s for s in (proc.stdout, proc.stderr) if s is not None]
    try:
        await asyncio.wait_for(
            asyncio.gather(*(s.read() for s in streams)),
            timeout=_DRAIN_TIMEOUT_S,
        )
    except asyncio.TimeoutError:
        logger.warning("[runner] pid=%d pipes still open after kill", proc.pid)


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill *proc* and its group, reap it, and drain its pipes."""
    _kill(proc)
    await proc.wait()
    await _drain(proc)
    logger.info("[runner] terminated pid=%d", proc.pid)


# ---------------------------------------------------------------------------
# Core runner
# ---------------------------------------------------------------------------


async def run(
    command: Sequence[str],
    *,
    timeout_s: int,
    cwd: str | None = None,
) -> RunResult:
    """Execute *command* and return a ``RunResult`` once it exits.

    Parameters
    ----------
    command:
        Program and arguments; no shell is involved.
    timeout_s:
        Maximum wall-clock seconds before the process is killed.
    cwd:
        Working directory for the subprocess.  ``None`` → inherit.

    Raises
    ------
    ProbeTimeout
        The process was still running after *timeout_s* seconds.  It has
        been killed; its output is discarded.
    ProbeIOError
        The process could not be launched or its pipes could not be read.
    """
    argv = list(command)
    start = time.perf_counter()

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=_POSIX,
        )
    except OSError as exc:
        logger.warning("[runner] launch failed for %s: %s", argv[0], exc)
        raise ProbeIOError(exc) from exc

    logger.info("[runner] launched pid=%d cwd=%s argv=%s", proc.pid, cwd, argv)

    completed = False
    try:
        raw_out, raw_err = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
        completed = True
    except asyncio.TimeoutError:
        logger.warning("[runner] pid=%d exceeded %ss deadline", proc.pid, timeout_s)
        raise ProbeTimeout(timeout_s) from None
    except OSError as exc:
        raise ProbeIOError(exc) from exc
    finally:
        if completed:
            # Pipes hit EOF and the child was reaped; sweep any stragglers
            _kill(proc)
        else:
            await _terminate(proc)

    elapsed = int((time.perf_counter() - start) * 1000)
    logger.info("[runner] pid=%d exited %d (%dms)", proc.pid, proc.returncode, elapsed)

    return RunResult(
        exit_code=proc.returncode,
        stdout=_decode(raw_out),
        stderr=_decode(raw_err),
        duration_ms=elapsed,
        command=argv,
    )
