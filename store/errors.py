"""
Error types raised by the store module.

I/O failures are not wrapped: they surface as the builtin OSError family.
"""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base class for store errors."""


class MalformedFileError(StoreError, ValueError):
    """A backing file line does not split into exactly one key and one value."""

    def __init__(self, lineno: int, line: str, path: str | Path | None = None) -> None:
        self.lineno = lineno
        self.line = line
        self.path = Path(path) if path is not None else None
        location = f"{self.path}:{lineno}" if self.path is not None else f"line {lineno}"
        super().__init__(f"Malformed file error at {location}: {line!r}")

    def with_path(self, path: str | Path) -> "MalformedFileError":
        return MalformedFileError(self.lineno, self.line, path)
