"""Archive entry ingestion and path-tree reconstruction.

This package contains non-UI archive primitives:
- raw records and entries with DOS timestamp/flag decoding
- the one-shot tree builder and its read-only node handles
- a ZIP central-directory reader that feeds the builder
"""

from __future__ import annotations

from .dos_time import dos_time_to_ns, pack_dos_time, unpack_dos_time
from .entry import ArchiveEntry, ArchiveRecord
from .errors import (
    AlreadyFinalizedError,
    ArchiveReadError,
    ArchiveTreeError,
    InvalidStateError,
    MalformedPathError,
    NotReadyError,
)
from .reader import is_archive_file, open_archive_tree, read_zip_records
from .tree import ArchiveNode, ArchiveTree

__all__ = [
    "ArchiveEntry",
    "ArchiveRecord",
    "ArchiveTree",
    "ArchiveNode",
    "ArchiveTreeError",
    "InvalidStateError",
    "NotReadyError",
    "AlreadyFinalizedError",
    "MalformedPathError",
    "ArchiveReadError",
    "dos_time_to_ns",
    "pack_dos_time",
    "unpack_dos_time",
    "is_archive_file",
    "open_archive_tree",
    "read_zip_records",
]
