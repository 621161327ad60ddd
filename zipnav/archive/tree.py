"""Directory-tree reconstruction over a flat archive entry list.

An archive lists its members as independent paths, with or without records
for the directories that hold them. ``ArchiveTree`` collects those entries,
then ``build()`` sorts them once by path segments and partitions the sorted
run into a tree in a single forward pass:

- a subtree is always a contiguous run, and a directory's own entry (when
  present) sorts immediately before its first descendant;
- each level (one frame on an explicit stack) consumes entries sharing its
  prefix, and the pass returns the cursor where it stopped;
- directories implied only by deeper paths are synthesized as nodes without
  a backing entry.

Nodes live in an arena indexed by position; parent links are indices, so the
finished tree holds no reference cycles. Once built the arena is read-only.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from ..nodes import FileSystemNode, Node, ParentLink, compare_sort_keys
from .entry import SEPARATOR, ArchiveEntry, ArchiveRecord
from .errors import AlreadyFinalizedError, InvalidStateError, MalformedPathError, NotReadyError

logger = logging.getLogger(__name__)

ROOT_INDEX = 0
NO_PARENT = -1


@dataclass
class _Slot:
    """Arena cell for one reconstructed node."""

    name: str
    segments: tuple[str, ...]
    entry: ArchiveEntry | None
    is_dir: bool
    parent: int
    children: list[int] | None = field(default=None)


class ArchiveTree:
    """Collects archive entries, then exposes them as a navigable tree."""

    def __init__(self, location: Path | str) -> None:
        self._location = Path(location)
        self._entries: list[ArchiveEntry] = []
        self._slots: list[_Slot] = []
        self._finalized = False
        self._lock = threading.Lock()

    @property
    def location(self) -> str:
        """Filesystem location of the archive file itself."""
        return str(self._location)

    @property
    def real_dir(self) -> str:
        """Real directory containing the archive file."""
        return str(self._location.parent)

    def add_entry(self, entry: ArchiveEntry) -> None:
        """Queue ``entry`` for the tree; only legal before ``build()``."""
        with self._lock:
            if self._finalized:
                raise InvalidStateError("cannot add entries after build()")
            if entry.sealed:
                raise InvalidStateError(f"entry {entry.path!r} belongs to a finalized tree")
            self._entries.append(entry)

    def add_record(self, record: ArchiveRecord) -> ArchiveEntry:
        """Decode a raw reader record and queue the resulting entry."""
        entry = ArchiveEntry.from_record(record)
        self.add_entry(entry)
        return entry

    def build(self) -> None:
        """Sort collected entries and partition them into the final tree."""
        with self._lock:
            if self._finalized:
                raise AlreadyFinalizedError("build() already ran for this tree")
            ordered = sorted(self._entries, key=lambda item: item.segments)
            self._slots = [
                _Slot(name="", segments=(), entry=None, is_dir=True, parent=NO_PARENT, children=[])
            ]
            try:
                cursor = self._partition(ordered, 0, ROOT_INDEX)
            except BaseException:
                self._slots = []
                raise
            # Every path matches the empty root prefix.
            assert cursor == len(ordered)
            for entry in self._entries:
                entry.seal()
            self._finalized = True
        logger.debug(
            "built tree for %s: %d entries, %d nodes (%d synthesized)",
            self._location,
            len(ordered),
            len(self._slots),
            sum(1 for slot in self._slots[1:] if slot.entry is None),
        )

    def _add_slot(
        self,
        entry: ArchiveEntry | None,
        segments: tuple[str, ...],
        is_dir: bool,
        parent: int,
    ) -> int:
        index = len(self._slots)
        self._slots.append(
            _Slot(
                name=segments[-1],
                segments=segments,
                entry=entry,
                is_dir=is_dir,
                parent=parent,
                children=[] if is_dir else None,
            )
        )
        parent_children = self._slots[parent].children
        assert parent_children is not None
        parent_children.append(index)
        return index

    def _partition(self, ordered: list[ArchiveEntry], cursor: int, parent: int) -> int:
        """Attach the run starting at ``cursor`` below ``parent``; return the next cursor.

        Each frame is ``[depth, prefix, parent, previous]`` where ``previous``
        is the last child emitted at that level. Frames are popped when the
        next entry leaves their prefix, so nesting depth is bounded only by
        memory, not by the interpreter's recursion limit.
        """
        base_depth = len(self._slots[parent].segments)
        frames: list[list] = [[base_depth, self._slots[parent].segments, parent, None]]
        while cursor < len(ordered) and frames:
            depth, prefix, frame_parent, previous = frames[-1]
            entry = ordered[cursor]
            segments = entry.segments
            if len(segments) <= depth or segments[:depth] != prefix:
                frames.pop()
                continue
            name = segments[depth]
            previous_slot = self._slots[previous] if previous is not None else None

            if len(segments) == depth + 1:
                if previous_slot is not None and previous_slot.name == name:
                    if previous_slot.is_dir and entry.is_dir:
                        logger.debug("merging repeated directory entry %r", entry.path)
                        cursor += 1
                        continue
                    raise MalformedPathError(entry.path, "duplicate entry")
                frames[-1][3] = self._add_slot(entry, segments, entry.is_dir, frame_parent)
                cursor += 1
                continue

            if previous_slot is None or previous_slot.name != name:
                previous = self._add_slot(None, segments[: depth + 1], True, frame_parent)
                frames[-1][3] = previous
            elif not previous_slot.is_dir:
                raise MalformedPathError(
                    entry.path,
                    f"{SEPARATOR.join(previous_slot.segments)!r} is a file, not a directory",
                )
            frames.append([depth + 1, segments[: depth + 1], previous, None])
        return cursor

    def _require_finalized(self) -> None:
        if not self._finalized:
            raise NotReadyError("tree is not built yet; call build() first")

    def _slot(self, index: int) -> _Slot:
        self._require_finalized()
        return self._slots[index]

    @property
    def root(self) -> "ArchiveNode":
        """Synthetic root node; the entry point for traversal."""
        self._require_finalized()
        return ArchiveNode(self, ROOT_INDEX)

    def find(self, path: str) -> "ArchiveNode | None":
        """Return the node at archive-relative ``path`` or ``None``."""
        node = self.root
        for segment in path.replace("\\", SEPARATOR).strip(SEPARATOR).split(SEPARATOR):
            if not segment:
                continue
            node = next((child for child in node.archive_children() if child.name == segment), None)
            if node is None:
                return None
        return node


@dataclass(frozen=True)
class ArchiveNode:
    """Handle to one node of a built ``ArchiveTree``."""

    tree: ArchiveTree
    index: int

    @property
    def _cell(self) -> _Slot:
        return self.tree._slot(self.index)

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX

    @property
    def entry(self) -> ArchiveEntry | None:
        return self._cell.entry

    @property
    def is_synthetic(self) -> bool:
        """True for the root and for directories implied by deeper paths."""
        return self._cell.entry is None

    @property
    def name(self) -> str:
        if self.is_root:
            return Path(self.tree.location).name
        return self._cell.name

    @property
    def is_dir(self) -> bool:
        return self._cell.is_dir

    @property
    def mtime_ns(self) -> int | None:
        entry = self._cell.entry
        return entry.mtime_ns if entry is not None else None

    @property
    def size(self) -> int:
        entry = self._cell.entry
        return entry.size if entry is not None else 0

    @property
    def sort_key(self) -> tuple[str, ...]:
        return self._cell.segments

    def canonical_path(self) -> str:
        if self.is_root:
            return self.tree.location
        return SEPARATOR.join(self._cell.segments)

    def real_dir(self) -> str:
        return self.tree.real_dir

    def parent(self) -> Node:
        """Enclosing node; the archive root's parent is its real directory."""
        cell = self._cell
        if cell.parent == NO_PARENT:
            return FileSystemNode.from_path(self.tree.real_dir)
        return ArchiveNode(self.tree, cell.parent)

    def archive_children(self) -> list["ArchiveNode"]:
        """Direct children as archive nodes, without any ``..`` row."""
        child_indexes = self._cell.children or ()
        return [ArchiveNode(self.tree, child) for child in child_indexes]

    def children(self, include_parent_link: bool | None = None) -> list[Node]:
        """Sorted direct children, preceded by ``..`` unless disabled."""
        if include_parent_link is None:
            include_parent_link = True
        children: list[Node] = list(self.archive_children())
        if include_parent_link:
            children.insert(0, ParentLink(self.parent()))
        return children

    def is_filesystem_root(self) -> bool:
        return False

    def compare(self, other: Node) -> int:
        return compare_sort_keys(self.sort_key, other.sort_key)


__all__ = ["ArchiveTree", "ArchiveNode", "ROOT_INDEX"]
