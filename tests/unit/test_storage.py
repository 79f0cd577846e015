"""Tests for low-level filesystem helpers."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from blogdown.errors import NotFoundError, StorageError
from blogdown.storage import clone_candidate, ensure_directory, next_clone_path, remove_file


class CloneNameTests(unittest.TestCase):
    def test_clone_candidate_inserts_counter_before_last_extension(self) -> None:
        self.assertEqual(clone_candidate(Path("/b/post.md"), 1), Path("/b/post(1).md"))
        self.assertEqual(clone_candidate(Path("/b/archive.tar.gz"), 2), Path("/b/archive.tar(2).gz"))
        self.assertEqual(clone_candidate(Path("/b/README"), 3), Path("/b/README(3)"))
        self.assertEqual(clone_candidate(Path("/b/.env"), 1), Path("/b/.env(1)"))

    def test_next_clone_path_takes_first_gap_free_suffix(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "post.md"
            source.write_text("x", encoding="utf-8")
            self.assertEqual(next_clone_path(source), root / "post(1).md")

            (root / "post(1).md").write_text("x", encoding="utf-8")
            (root / "post(2).md").write_text("x", encoding="utf-8")
            self.assertEqual(next_clone_path(source), root / "post(3).md")


class EnsureDirectoryTests(unittest.TestCase):
    def test_reports_created_then_already_present(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "posts"

            self.assertTrue(ensure_directory(target))
            self.assertFalse(ensure_directory(target))
            self.assertTrue(target.is_dir())

    def test_file_in_the_way_is_a_storage_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "posts"
            target.write_text("not a dir", encoding="utf-8")

            with self.assertRaises(StorageError):
                ensure_directory(target)

    def test_missing_parent_is_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(NotFoundError):
                ensure_directory(Path(tmp) / "missing" / "posts")


class RemoveFileTests(unittest.TestCase):
    def test_remove_reports_whether_file_existed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "old.md"
            target.write_text("x", encoding="utf-8")

            self.assertTrue(remove_file(target))
            self.assertFalse(remove_file(target))


if __name__ == "__main__":
    unittest.main()
