"""Text rendering of node listings and tree outlines."""

from __future__ import annotations

from datetime import datetime

from .archive import ArchiveNode
from .navigation import location_label
from .nodes import Node, ParentLink
from .ui_theme import DEFAULT_THEME, UITheme

SIZE_LABEL_MIN_BYTES = 10 * 1024
ARCHIVE_SUFFIXES = (".zip", ".jar", ".war", ".apk", ".whl", ".epub")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
BLANK_TIMESTAMP = " " * 16


def format_timestamp(mtime_ns: int | None) -> str:
    """Format epoch nanoseconds as local ``YYYY-MM-DD HH:MM`` or blanks."""
    if mtime_ns is None:
        return BLANK_TIMESTAMP
    return datetime.fromtimestamp(mtime_ns / 1_000_000_000).strftime(TIMESTAMP_FORMAT)


def format_size(size: int) -> str:
    """Return ``[N KB]`` for sizes at or above the label threshold, else ``""``."""
    if size < SIZE_LABEL_MIN_BYTES:
        return ""
    return f"[{size // 1024} KB]"


def name_color_for(node: Node, theme: UITheme) -> str:
    if isinstance(node, ArchiveNode) and node.is_dir and node.is_synthetic:
        return theme.implied_directory
    if node.is_dir:
        return theme.directory
    if node.name.lower().endswith(ARCHIVE_SUFFIXES):
        return theme.archive
    return theme.file


def format_listing_row(
    node: Node,
    theme: UITheme | None = None,
    show_size_labels: bool = True,
) -> str:
    """Render one listing row: timestamp column, marker and name, size label."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    if isinstance(node, ParentLink):
        name = node.name
        stamp = BLANK_TIMESTAMP
    else:
        name = node.name + ("/" if node.is_dir else "")
        stamp = format_timestamp(node.mtime_ns)
    marker = "▸ " if node.is_dir else "  "
    row = (
        f"{active_theme.timestamp}{stamp}{reset}  "
        f"{active_theme.marker}{marker}{reset}"
        f"{name_color_for(node, active_theme)}{name}{reset}"
    )
    size_label = format_size(node.size) if show_size_labels and not node.is_dir else ""
    if size_label:
        row += f" {active_theme.size}{size_label}{reset}"
    return row


def render_listing(
    node: Node,
    theme: UITheme | None = None,
    show_size_labels: bool = True,
    include_parent_link: bool | None = None,
) -> str:
    """Render a header line plus one row per child of ``node``."""
    active_theme = theme or DEFAULT_THEME
    lines = [f"{active_theme.header}{location_label(node)}{active_theme.reset}"]
    for child in node.children(include_parent_link):
        lines.append(format_listing_row(child, active_theme, show_size_labels))
    return "\n".join(lines)


def render_outline(
    node: Node,
    theme: UITheme | None = None,
    max_depth: int | None = None,
) -> str:
    """Render a ``tree``-style outline of ``node`` and its descendants."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    lines = [f"{active_theme.header}{location_label(node)}{reset}"]

    def walk(current: Node, prefix: str, depth: int) -> None:
        if max_depth is not None and depth >= max_depth:
            return
        children = current.children(False)
        for idx, child in enumerate(children):
            is_last = idx == len(children) - 1
            connector = "└── " if is_last else "├── "
            name = child.name + ("/" if child.is_dir else "")
            lines.append(f"{prefix}{connector}{name_color_for(child, active_theme)}{name}{reset}")
            if child.is_dir:
                walk(child, prefix + ("    " if is_last else "│   "), depth + 1)

    walk(node, "", 0)
    return "\n".join(lines)


__all__ = [
    "SIZE_LABEL_MIN_BYTES",
    "format_timestamp",
    "format_size",
    "format_listing_row",
    "render_listing",
    "render_outline",
]
