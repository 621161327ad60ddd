"""Exception hierarchy for archive tree construction and navigation."""

from __future__ import annotations


class ArchiveTreeError(Exception):
    """Base class for every archive-tree failure."""


class InvalidStateError(ArchiveTreeError):
    """Ingestion call made after the tree was finalized."""


class NotReadyError(ArchiveTreeError):
    """Navigation call made before the tree was built."""


class AlreadyFinalizedError(ArchiveTreeError):
    """``build()`` called a second time."""


class MalformedPathError(ArchiveTreeError):
    """Entry path cannot be placed in a consistent directory tree."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path!r}: {reason}")
        self.path = path
        self.reason = reason


class ArchiveReadError(ArchiveTreeError):
    """Archive directory could not be read."""


__all__ = [
    "ArchiveTreeError",
    "InvalidStateError",
    "NotReadyError",
    "AlreadyFinalizedError",
    "MalformedPathError",
    "ArchiveReadError",
]
