"""Error taxonomy for merge-stream processing and resolution cutting."""
from __future__ import annotations

from typing import Optional


class RclError(Exception):
    """Base class for all fatal errors raised by the rcl package."""


class ConfigError(RclError):
    """Invalid run configuration (resolutions, label modes, env settings)."""


class _LocatedError(RclError):
    """Error tied to a position in an input stream."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class InvalidStream(_LocatedError):
    """Malformed record or inconsistent size bookkeeping in an input stream."""


class DanglingReference(_LocatedError):
    """A non-singleton cluster id was referenced before any merge created it."""


class DuplicateRoot(_LocatedError):
    """A merge names a node that was already consumed by an earlier merge."""
