"""Build-feedback probe for Haskell projects.

Public API
----------
Manifest locator::

    locate, check_manifest

Compilation probe::

    check, check_compilation

Runner::

    run_process, RunResult

Contracts (Pydantic models)::

    ManifestCheckResult, CompileCheckResult,
    CheckManifestRequest, CheckCompilationRequest, EchoRequest,
    CheckManifestResponse, CheckCompilationResponse,

Errors::

    ProbeError, PathNotFound, NotADirectory, PermissionDenied,
    ProbeIOError, NoManifest, ProbeTimeout,

The MCP server lives in ``ghcid_mcp.mcp``.
"""

from ghcid_mcp.config import VERSION as __version__
from ghcid_mcp.contracts import (
    CheckCompilationRequest,
    CheckCompilationResponse,
    CheckManifestRequest,
    CheckManifestResponse,
    CompileCheckResult,
    EchoRequest,
    ManifestCheckResult,
)
from ghcid_mcp.errors import (
    NoManifest,
    NotADirectory,
    PathNotFound,
    PermissionDenied,
    ProbeError,
    ProbeIOError,
    ProbeTimeout,
)
from ghcid_mcp.manifest import check_manifest, locate
from ghcid_mcp.probe import check, check_compilation
from ghcid_mcp.runner import RunResult
from ghcid_mcp.runner import run as run_process

__all__ = [
    "__version__",
    # Manifest locator
    "locate",
    "check_manifest",
    # Compilation probe
    "check",
    "check_compilation",
    # Runner
    "run_process",
    "RunResult",
    # Contracts
    "ManifestCheckResult",
    "CompileCheckResult",
    "CheckManifestRequest",
    "CheckCompilationRequest",
    "EchoRequest",
    "CheckManifestResponse",
    "CheckCompilationResponse",
    # Errors
    "ProbeError",
    "PathNotFound",
    "NotADirectory",
    "PermissionDenied",
    "ProbeIOError",
    "NoManifest",
    "ProbeTimeout",
]
