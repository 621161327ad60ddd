"""Archive entry records before and after ingestion."""

from __future__ import annotations

import stat
from dataclasses import dataclass

from .dos_time import dos_time_to_ns
from .errors import InvalidStateError, MalformedPathError

SEPARATOR = "/"
REGULAR_FILE_FLAG = stat.S_IFREG


@dataclass(frozen=True)
class ArchiveRecord:
    """Raw directory record as supplied by an archive reader."""

    path: str
    flags: int
    packed_time: int
    size: int


def normalize_entry_path(raw_path: str) -> tuple[str, bool]:
    """Return ``(path, had_trailing_separator)`` with forward slashes only."""
    path = raw_path.replace("\\", SEPARATOR)
    trailing = path.endswith(SEPARATOR)
    if trailing:
        path = path[:-1]
    return path, trailing


def split_entry_path(path: str) -> tuple[str, ...]:
    """Split a normalized path into segments, rejecting unplaceable shapes."""
    if not path:
        raise MalformedPathError(path, "empty path")
    if path.startswith(SEPARATOR):
        raise MalformedPathError(path, "absolute path")
    segments = tuple(path.split(SEPARATOR))
    for segment in segments:
        if not segment:
            raise MalformedPathError(path, "empty path segment")
        if segment in {".", ".."}:
            raise MalformedPathError(path, f"relative segment {segment!r}")
    return segments


class ArchiveEntry:
    """One archive member: immutable path plus mutable metadata.

    Metadata setters are legal only until the owning tree is built; the tree
    seals every entry it finalizes.
    """

    __slots__ = ("_path", "_segments", "_is_dir", "_mtime_ns", "_size", "_sealed")

    def __init__(
        self,
        path: str,
        *,
        is_dir: bool = False,
        mtime_ns: int | None = None,
        size: int = 0,
    ) -> None:
        normalized, trailing = normalize_entry_path(path)
        self._path = normalized
        self._segments = split_entry_path(normalized)
        self._is_dir = is_dir or trailing
        self._mtime_ns = mtime_ns
        self._size = 0
        self._sealed = False
        self.set_length(size)

    @classmethod
    def from_record(cls, record: ArchiveRecord) -> "ArchiveEntry":
        """Build an entry from a reader record, decoding flags and time."""
        entry = cls(record.path)
        trailing = entry.is_dir
        entry.set_flags(record.flags)
        if trailing:
            entry._is_dir = True
        entry.set_modified_time(record.packed_time)
        entry.set_length(record.size)
        return entry

    @property
    def path(self) -> str:
        return self._path

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def name(self) -> str:
        return self._segments[-1]

    @property
    def is_dir(self) -> bool:
        return self._is_dir

    @property
    def mtime_ns(self) -> int | None:
        return self._mtime_ns

    @property
    def size(self) -> int:
        return 0 if self._is_dir else self._size

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _require_open(self) -> None:
        if self._sealed:
            raise InvalidStateError(f"entry {self._path!r} is finalized")

    def set_flags(self, flags: int) -> None:
        """Derive ``is_dir`` from the regular-file type bit of ``flags``."""
        self._require_open()
        self._is_dir = (flags & REGULAR_FILE_FLAG) == 0

    def set_modified_time(self, packed: int) -> None:
        """Store a packed DOS timestamp as epoch nanoseconds."""
        self._require_open()
        self._mtime_ns = dos_time_to_ns(packed)

    def set_length(self, length: int) -> None:
        self._require_open()
        if length < 0:
            raise ValueError(f"negative length for {self._path!r}: {length}")
        self._size = int(length)

    def seal(self) -> None:
        """Freeze metadata; called by the tree during ``build()``."""
        self._sealed = True

    def __repr__(self) -> str:
        kind = "dir" if self._is_dir else "file"
        return f"ArchiveEntry({self._path!r}, {kind}, size={self.size})"


__all__ = [
    "SEPARATOR",
    "REGULAR_FILE_FLAG",
    "ArchiveRecord",
    "ArchiveEntry",
    "normalize_entry_path",
    "split_entry_path",
]
