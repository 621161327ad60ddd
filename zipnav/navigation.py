"""Descend/ascend helpers that cross between filesystem and archive nodes."""

from __future__ import annotations

from pathlib import Path

from .archive import ArchiveNode, is_archive_file, open_archive_tree
from .nodes import FileSystemNode, Node, ParentLink

ARCHIVE_PATH_MARKER = "!/"


def enter(node: Node, *, skip_malformed: bool = False) -> Node | None:
    """Return the node whose children a user sees after opening ``node``.

    ``..`` rows resolve to their target, directories open in place, and ZIP
    files on disk open as the root of their archive tree. Plain files are not
    enterable and return ``None``.
    """
    if isinstance(node, ParentLink):
        return node.resolve()
    if node.is_dir:
        return node
    if isinstance(node, FileSystemNode) and is_archive_file(node.path):
        return open_archive_tree(node.path, skip_malformed=skip_malformed).root
    return None


def leave(node: Node) -> Node:
    """Return the node one level up, leaving an archive at its root."""
    return node.parent()


def location_label(node: Node) -> str:
    """Human-readable location, ``archive.zip!/dir/file`` inside archives."""
    if isinstance(node, ArchiveNode):
        if node.is_root:
            return node.tree.location + ARCHIVE_PATH_MARKER
        return node.tree.location + ARCHIVE_PATH_MARKER + node.canonical_path()
    return node.canonical_path()


def resolve_start(path: Path, inside: str | None = None, *, show_hidden: bool = True) -> Node:
    """Open ``path`` (directory or archive) and optionally descend ``inside`` it.

    Raises ``FileNotFoundError`` when ``inside`` names no node in the archive
    and ``ValueError`` when ``inside`` is used with a non-archive path.
    """
    start = FileSystemNode.from_path(path, show_hidden=show_hidden)
    if start.is_dir:
        if inside:
            raise ValueError(f"{path} is not an archive; cannot open {inside!r} inside it")
        return start
    opened = enter(start)
    if opened is None:
        raise ValueError(f"{path} is neither a directory nor a ZIP archive")
    if not inside:
        return opened
    assert isinstance(opened, ArchiveNode)
    found = opened.tree.find(inside)
    if found is None:
        raise FileNotFoundError(f"{inside!r} not found in {path}")
    return found


__all__ = ["ARCHIVE_PATH_MARKER", "enter", "leave", "location_label", "resolve_start"]
