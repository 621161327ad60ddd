"""Tests for the ZIP central-directory reader."""

from __future__ import annotations

import stat
import tempfile
import unittest
import zipfile
from pathlib import Path

from zipnav.archive import (
    ArchiveReadError,
    MalformedPathError,
    is_archive_file,
    open_archive_tree,
    pack_dos_time,
    read_zip_records,
)
from zipnav.archive.reader import record_flags


def write_sample_zip(path: Path) -> None:
    with zipfile.ZipFile(path, "w") as archive:
        info = zipfile.ZipInfo("src/pkg/mod.py", date_time=(2021, 6, 1, 12, 0, 0))
        info.create_system = 3
        info.external_attr = (stat.S_IFREG | 0o644) << 16
        archive.writestr(info, "print('hi')\n")
        archive.writestr(zipfile.ZipInfo("empty/", date_time=(2021, 6, 1, 12, 0, 0)), b"")
        archive.writestr("README.md", "# sample\n")


class ZipReaderTests(unittest.TestCase):
    def test_read_zip_records_decodes_flags_times_and_sizes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            zip_path = Path(tmp) / "sample.zip"
            write_sample_zip(zip_path)

            records = {record.path: record for record in read_zip_records(zip_path)}

        self.assertEqual(set(records), {"src/pkg/mod.py", "empty/", "README.md"})
        mod = records["src/pkg/mod.py"]
        self.assertEqual(mod.flags, stat.S_IFREG | 0o644)
        self.assertEqual(mod.packed_time, pack_dos_time((2021, 6, 1, 12, 0, 0)))
        self.assertEqual(mod.size, len("print('hi')\n"))
        self.assertEqual(stat.S_IFMT(records["empty/"].flags), stat.S_IFDIR)
        self.assertEqual(stat.S_IFMT(records["README.md"].flags), stat.S_IFREG)

    def test_record_flags_synthesizes_mode_for_non_unix_hosts(self) -> None:
        info = zipfile.ZipInfo("dir")
        info.create_system = 0
        info.external_attr = 0x10
        self.assertEqual(stat.S_IFMT(record_flags(info)), stat.S_IFDIR)
        plain = zipfile.ZipInfo("file.txt")
        plain.create_system = 0
        self.assertEqual(stat.S_IFMT(record_flags(plain)), stat.S_IFREG)

    def test_open_archive_tree_rebuilds_implied_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            zip_path = Path(tmp).resolve() / "sample.zip"
            write_sample_zip(zip_path)

            tree = open_archive_tree(zip_path)

            self.assertEqual([child.name for child in tree.root.children(False)], ["README.md", "empty", "src"])
            mod = tree.find("src/pkg/mod.py")
            pkg = tree.find("src/pkg")
            assert mod is not None and pkg is not None
            self.assertTrue(pkg.is_synthetic)
            self.assertFalse(mod.is_dir)
            self.assertEqual(tree.root.canonical_path(), str(zip_path))

    def test_malformed_entries_fail_or_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            zip_path = Path(tmp) / "evil.zip"
            with zipfile.ZipFile(zip_path, "w") as archive:
                archive.writestr("ok.txt", "fine\n")
                archive.writestr("../escape.txt", "nope\n")

            with self.assertRaises(MalformedPathError):
                open_archive_tree(zip_path)

            tree = open_archive_tree(zip_path, skip_malformed=True)
            self.assertEqual([child.name for child in tree.root.children(False)], ["ok.txt"])

    def test_unreadable_archive_raises_archive_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            bogus = Path(tmp) / "bogus.zip"
            bogus.write_bytes(b"not a zip at all")
            with self.assertRaises(ArchiveReadError):
                read_zip_records(bogus)

    def test_invalid_utf8_name_raises_archive_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            zip_path = Path(tmp) / "mangled.zip"
            with zipfile.ZipFile(zip_path, "w") as archive:
                archive.writestr("é_name.txt", "x\n")
            raw = zip_path.read_bytes()
            self.assertIn(b"\xc3\xa9_name", raw)
            zip_path.write_bytes(raw.replace(b"\xc3\xa9_name", b"\xff\xa9_name"))

            with self.assertRaises(ArchiveReadError):
                open_archive_tree(zip_path)

    def test_is_archive_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            zip_path = root / "sample.zip"
            write_sample_zip(zip_path)
            text_path = root / "notes.txt"
            text_path.write_text("hello\n", encoding="utf-8")

            self.assertTrue(is_archive_file(zip_path))
            self.assertFalse(is_archive_file(text_path))
            self.assertFalse(is_archive_file(root))
            self.assertFalse(is_archive_file(root / "missing.zip"))


if __name__ == "__main__":
    unittest.main()
