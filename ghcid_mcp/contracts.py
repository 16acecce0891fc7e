"""Probe contracts — Pydantic models for tool requests, results and responses.

Internal results (``ManifestCheckResult``, ``CompileCheckResult``) use
snake_case fields.  Wire models (requests and responses) expose the
camelCase names clients see, via aliases; populate by either name.
All models are frozen (immutable after creation).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ghcid_mcp.config import settings


# ---------------------------------------------------------------------------
# Probe results
# ---------------------------------------------------------------------------


class ManifestCheckResult(BaseModel):
    """Outcome of a single manifest lookup."""

    model_config = ConfigDict(frozen=True)

    found: bool
    message: str
    manifest_path: str | None = None


class CompileCheckResult(BaseModel):
    """Outcome of a single compiler-feedback run."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None


# ---------------------------------------------------------------------------
# Tool requests
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CheckManifestRequest(_WireModel):
    """Input for the ``check-manifest`` tool."""

    path: str = Field(..., description="Directory to search for a .cabal file")


class CheckCompilationRequest(_WireModel):
    """Input for the ``check-compilation`` tool."""

    path: str = Field(..., description="Project directory containing a .cabal file")
    timeout_seconds: int = Field(
        default_factory=lambda: settings.DEFAULT_TIMEOUT_SECONDS,
        ge=1,
        strict=True,
        alias="timeoutSeconds",
        description="Wall-clock budget for the compiler run",
    )


class EchoRequest(_WireModel):
    """Input for the ``echo`` tool."""

    text: str = Field(..., description="Text to echo back")


# ---------------------------------------------------------------------------
# Tool responses
# ---------------------------------------------------------------------------


class CheckManifestResponse(_WireModel):
    found: bool
    message: str
    manifest_file: str | None = Field(default=None, alias="manifestFile")

    @classmethod
    def from_result(cls, result: ManifestCheckResult) -> CheckManifestResponse:
        return cls(
            found=result.found,
            message=result.message,
            manifest_file=result.manifest_path,
        )


class CheckCompilationResponse(_WireModel):
    success: bool
    message: str
    output: str = ""
    errors: str = ""
    exit_code: int | None = Field(default=None, alias="exitCode")

    @classmethod
    def from_result(cls, result: CompileCheckResult) -> CheckCompilationResponse:
        return cls(
            success=result.success,
            message=result.message,
            output=result.stdout,
            errors=result.stderr,
            exit_code=result.exit_code,
        )
