"""ZIP central-directory reader feeding ``ArchiveTree``.

Only the directory records are read; member data is never decompressed.
"""

from __future__ import annotations

import logging
import stat
import zipfile
from pathlib import Path

from .dos_time import pack_dos_time
from .entry import ArchiveRecord
from .errors import ArchiveReadError, MalformedPathError
from .tree import ArchiveTree

logger = logging.getLogger(__name__)

UNIX_CREATE_SYSTEM = 3
MSDOS_DIRECTORY_ATTR = 0x10


def is_archive_file(path: Path) -> bool:
    """Return whether ``path`` is a regular file with a ZIP directory."""
    if not path.is_file():
        return False
    try:
        return zipfile.is_zipfile(path)
    except OSError:
        return False


def record_flags(info: zipfile.ZipInfo) -> int:
    """Return a POSIX mode word for ``info``.

    Unix-made archives carry the mode in the high half of ``external_attr``.
    Other hosts get a mode synthesized from the directory markers.
    """
    mode = info.external_attr >> 16
    if info.create_system == UNIX_CREATE_SYSTEM and stat.S_IFMT(mode):
        return mode
    if info.is_dir() or info.external_attr & MSDOS_DIRECTORY_ATTR:
        return stat.S_IFDIR | 0o755
    return stat.S_IFREG | 0o644


def read_zip_records(path: Path | str) -> list[ArchiveRecord]:
    """Read every directory record of the ZIP file at ``path``."""
    try:
        with zipfile.ZipFile(path, "r") as archive:
            infos = archive.infolist()
    except (zipfile.BadZipFile, OSError, UnicodeDecodeError) as exc:
        raise ArchiveReadError(f"cannot read archive {path}: {exc}") from exc

    return [
        ArchiveRecord(
            path=info.filename,
            flags=record_flags(info),
            packed_time=pack_dos_time(info.date_time),
            size=info.file_size,
        )
        for info in infos
    ]


def open_archive_tree(path: Path | str, *, skip_malformed: bool = False) -> ArchiveTree:
    """Read ``path`` and return its finalized ``ArchiveTree``.

    With ``skip_malformed`` records whose path cannot be placed (absolute,
    empty segments, ``..``) are dropped with a warning instead of failing the
    whole archive.
    """
    tree = ArchiveTree(path)
    for record in read_zip_records(path):
        try:
            tree.add_record(record)
        except MalformedPathError as exc:
            if not skip_malformed:
                raise
            logger.warning("skipping entry in %s: %s", path, exc)
    tree.build()
    return tree


__all__ = ["is_archive_file", "record_flags", "read_zip_records", "open_archive_tree"]
