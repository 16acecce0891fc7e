"""Probe error hierarchy.

Every error carries typed fields (not just a message string),
supports ``to_dict()`` for serialisation into a tool response,
and has a readable ``__str__`` for logging.

The set is closed: the manifest locator and the compilation probe only
ever raise the subclasses defined here.
"""

from __future__ import annotations


class ProbeError(Exception):
    """Base error for all probe failures."""

    def __init__(self, message: str, *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message, **self.detail}

    def __str__(self) -> str:
        return self.message


class PathNotFound(ProbeError):
    """The supplied path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path does not exist: {path}", detail={"path": path})


class NotADirectory(ProbeError):
    """The supplied path exists but is not a directory."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path is not a directory: {path}", detail={"path": path})


class PermissionDenied(ProbeError):
    """Directory enumeration was refused by the filesystem."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Permission denied: {path}", detail={"path": path})


class ProbeIOError(ProbeError):
    """Any other I/O failure: read failure, broken pipe, launch failure."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"I/O error: {cause}", detail={"cause": str(cause)})


class NoManifest(ProbeError):
    """No build manifest was found in the directory."""

    def __init__(self, path: str, suffix: str = ".cabal") -> None:
        self.path = path
        self.suffix = suffix
        super().__init__(
            f"No {suffix} file found in directory: {path}",
            detail={"path": path, "suffix": suffix},
        )


class ProbeTimeout(ProbeError):
    """The compiler-feedback process exceeded its wall-clock budget."""

    def __init__(self, timeout_seconds: int) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Compilation timed out after {timeout_seconds} seconds",
            detail={"timeout_seconds": timeout_seconds},
        )
