"""Uniform navigation contract shared by archive and filesystem backends.

``Node`` is the protocol presentation code talks to. ``FileSystemNode`` is the
real-directory backend; ``zipnav.archive.tree.ArchiveNode`` is the archive
backend. ``ParentLink`` is the ``..`` pseudo-entry either backend may prepend
to a child listing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

PARENT_LINK_NAME = ".."


@runtime_checkable
class Node(Protocol):
    """Read-only navigation contract implemented by every backend."""

    @property
    def name(self) -> str: ...

    @property
    def is_dir(self) -> bool: ...

    @property
    def mtime_ns(self) -> int | None: ...

    @property
    def size(self) -> int: ...

    @property
    def sort_key(self) -> tuple[str, ...]: ...

    def canonical_path(self) -> str: ...

    def real_dir(self) -> str: ...

    def parent(self) -> "Node": ...

    def children(self, include_parent_link: bool | None = None) -> list["Node"]: ...

    def is_filesystem_root(self) -> bool: ...

    def compare(self, other: "Node") -> int: ...


def compare_sort_keys(left: tuple[str, ...], right: tuple[str, ...]) -> int:
    """Three-way compare two segment tuples.

    A prefix tuple sorts first, so a directory is always less than its own
    descendants.
    """
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


@dataclass(frozen=True)
class ParentLink:
    """``..`` row that resolves to ``target`` when entered."""

    target: Node

    @property
    def name(self) -> str:
        return PARENT_LINK_NAME

    @property
    def is_dir(self) -> bool:
        return True

    @property
    def mtime_ns(self) -> int | None:
        return self.target.mtime_ns

    @property
    def size(self) -> int:
        return 0

    @property
    def sort_key(self) -> tuple[str, ...]:
        return self.target.sort_key

    def resolve(self) -> Node:
        return self.target

    def canonical_path(self) -> str:
        return self.target.canonical_path()

    def real_dir(self) -> str:
        return self.target.real_dir()

    def parent(self) -> Node:
        return self.target.parent()

    def children(self, include_parent_link: bool | None = None) -> list[Node]:
        return self.target.children(include_parent_link)

    def is_filesystem_root(self) -> bool:
        return self.target.is_filesystem_root()

    def compare(self, other: Node) -> int:
        return self.target.compare(other)


def safe_file_size(path: Path, is_dir: bool) -> int:
    """Return file size for files, ``0`` for directories or on stat failure."""
    if is_dir:
        return 0
    try:
        return int(path.stat().st_size)
    except OSError:
        return 0


def safe_mtime_ns(path: Path) -> int | None:
    """Return ``st_mtime_ns`` for ``path`` or ``None`` on stat failure."""
    try:
        return int(path.stat().st_mtime_ns)
    except OSError:
        return None


@dataclass(frozen=True)
class FileSystemNode:
    """Real filesystem path plus metadata observed when it was listed."""

    path: Path
    is_dir: bool
    mtime_ns: int | None = None
    size: int = 0
    show_hidden: bool = True

    @classmethod
    def from_path(cls, path: Path | str, show_hidden: bool = True) -> "FileSystemNode":
        """Stat ``path`` and wrap it; missing paths become empty directories."""
        target = Path(path)
        try:
            target = target.resolve()
        except OSError:
            target = target.absolute()
        is_dir = target.is_dir()
        return cls(
            path=target,
            is_dir=is_dir,
            mtime_ns=safe_mtime_ns(target),
            size=safe_file_size(target, is_dir),
            show_hidden=show_hidden,
        )

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    @property
    def sort_key(self) -> tuple[str, ...]:
        return self.path.parts

    def canonical_path(self) -> str:
        return str(self.path)

    def real_dir(self) -> str:
        if self.is_dir:
            return str(self.path)
        return str(self.path.parent)

    def parent(self) -> "FileSystemNode":
        return FileSystemNode.from_path(self.path.parent, show_hidden=self.show_hidden)

    def is_filesystem_root(self) -> bool:
        return self.path.parent == self.path

    def listing(self) -> tuple[list["FileSystemNode"], OSError | None]:
        """List children as ``(children, scan_error)``.

        ``scan_error`` is set when the directory cannot be scanned; the child
        list is then empty.
        """
        return list_directory_children(self.path, self.show_hidden)

    def children(self, include_parent_link: bool | None = None) -> list[Node]:
        """Return sorted children, with ``..`` first unless at a filesystem root."""
        if include_parent_link is None:
            include_parent_link = not self.is_filesystem_root()
        children: list[Node] = []
        if self.is_dir:
            listed, scan_error = self.listing()
            if scan_error is not None:
                logger.warning("cannot list %s: %s", self.path, scan_error)
            children.extend(listed)
        if include_parent_link:
            children.insert(0, ParentLink(self.parent()))
        return children

    def compare(self, other: Node) -> int:
        return compare_sort_keys(self.sort_key, other.sort_key)


def list_directory_children(
    directory: Path,
    show_hidden: bool,
) -> tuple[list[FileSystemNode], OSError | None]:
    """List visible children of ``directory`` with stat metadata, name-sorted."""
    children: list[FileSystemNode] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False

                size = 0
                mtime_ns: int | None = None
                try:
                    stat = child.stat()
                    mtime_ns = int(stat.st_mtime_ns)
                    if not is_dir:
                        size = int(stat.st_size)
                except OSError:
                    pass

                children.append(
                    FileSystemNode(
                        path=Path(child.path),
                        is_dir=is_dir,
                        mtime_ns=mtime_ns,
                        size=size,
                        show_hidden=show_hidden,
                    )
                )
    except OSError as exc:
        return [], exc

    children.sort(key=lambda item: item.sort_key)
    return children, None


__all__ = [
    "PARENT_LINK_NAME",
    "Node",
    "ParentLink",
    "FileSystemNode",
    "compare_sort_keys",
    "safe_file_size",
    "safe_mtime_ns",
    "list_directory_children",
]
