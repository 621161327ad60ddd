"""Tests for listing rows and tree outlines."""

from __future__ import annotations

import unittest
from datetime import datetime

from zipnav.archive import ArchiveEntry, ArchiveTree
from zipnav.render import (
    format_listing_row,
    format_size,
    format_timestamp,
    render_listing,
    render_outline,
)
from zipnav.ui_theme import DEFAULT_THEME, PLAIN_THEME

LOCATION = "/srv/files/sample.zip"


def sample_tree() -> ArchiveTree:
    tree = ArchiveTree(LOCATION)
    tree.add_entry(ArchiveEntry("a", is_dir=True))
    tree.add_entry(ArchiveEntry("a/b.txt", size=12))
    tree.add_entry(ArchiveEntry("c/d.bin", size=20 * 1024))
    tree.build()
    return tree


class RenderTests(unittest.TestCase):
    def test_format_size_only_labels_large_files(self) -> None:
        self.assertEqual(format_size(10 * 1024 - 1), "")
        self.assertEqual(format_size(10 * 1024), "[10 KB]")

    def test_format_timestamp_blank_for_unknown(self) -> None:
        self.assertEqual(format_timestamp(None).strip(), "")
        moment = datetime(2023, 4, 5, 6, 7)
        self.assertEqual(format_timestamp(int(moment.timestamp()) * 1_000_000_000), "2023-04-05 06:07")

    def test_listing_row_plain_theme(self) -> None:
        tree = sample_tree()
        big = tree.find("c/d.bin")
        assert big is not None
        self.assertEqual(format_listing_row(big, PLAIN_THEME), " " * 16 + "    d.bin [20 KB]")
        self.assertEqual(format_listing_row(big, PLAIN_THEME, show_size_labels=False), " " * 16 + "    d.bin")

    def test_render_listing_includes_header_and_parent_link(self) -> None:
        tree = sample_tree()
        c_node = tree.find("c")
        assert c_node is not None

        lines = render_listing(c_node, PLAIN_THEME).splitlines()

        self.assertEqual(lines[0], f"{LOCATION}!/c")
        self.assertTrue(lines[1].endswith("▸ .."))
        self.assertTrue(lines[2].endswith("d.bin [20 KB]"))

    def test_render_outline_plain(self) -> None:
        expected = "\n".join(
            [
                f"{LOCATION}!/",
                "├── a/",
                "│   └── b.txt",
                "└── c/",
                "    └── d.bin",
            ]
        )
        self.assertEqual(render_outline(sample_tree().root, PLAIN_THEME), expected)

    def test_render_outline_respects_max_depth(self) -> None:
        outline = render_outline(sample_tree().root, PLAIN_THEME, max_depth=1)
        self.assertEqual(outline.splitlines()[1:], ["├── a/", "└── c/"])

    def test_implied_directories_use_distinct_color(self) -> None:
        outline = render_outline(sample_tree().root, DEFAULT_THEME)
        self.assertIn(f"{DEFAULT_THEME.implied_directory}c/", outline)
        self.assertIn(f"{DEFAULT_THEME.directory}a/", outline)


if __name__ == "__main__":
    unittest.main()
