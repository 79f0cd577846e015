"""Tests for project-scoped file operations."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from fakes import FakeObserverFactory, make_project

from blogdown import events
from blogdown.errors import NotFoundError
from blogdown.gateway import FileGateway
from blogdown.session import ProjectSession
from blogdown.settings import SettingsStore


class GatewayTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name).resolve()
        self.surface = events.RecordingSurface()
        self.session = ProjectSession(
            self.surface,
            SettingsStore(self.tmp / "settings.json"),
            observer_factory=FakeObserverFactory(),
        )
        self.addCleanup(self.session.close_active_project)
        self.gateway = FileGateway(self.session)
        self.root = make_project(self.tmp / "blog")
        self.outside = self.tmp / "outside"
        self.outside.mkdir()

    def open(self) -> None:
        self.session.open_project(self.root)


class NoActiveProjectTests(GatewayTestCase):
    def test_every_operation_is_skipped_without_project(self) -> None:
        target = self.root / "posts" / "a.md"
        target.write_text("a", encoding="utf-8")

        self.assertIsNone(self.gateway.read_file(target))
        self.assertIsNone(self.gateway.write_file(target, "changed"))
        self.assertIsNone(self.gateway.create_post("new", "x"))
        self.assertIsNone(self.gateway.clone_file(target))
        self.assertIsNone(self.gateway.rename_file(target, "b.md"))
        self.assertIsNone(self.gateway.delete_file(target))
        self.assertIsNone(self.gateway.read_stylesheet())

        self.assertEqual(target.read_text(encoding="utf-8"), "a")
        self.assertEqual(sorted(os.listdir(self.root / "posts")), ["a.md"])


class OutsideRootTests(GatewayTestCase):
    def test_outside_paths_leave_filesystem_untouched(self) -> None:
        self.open()
        victim = self.outside / "victim.md"
        victim.write_text("keep", encoding="utf-8")

        self.assertIsNone(self.gateway.read_file(victim))
        self.assertIsNone(self.gateway.write_file(victim, "overwritten"))
        self.assertIsNone(self.gateway.write_file(self.outside / "new.md", "x"))
        self.assertIsNone(self.gateway.delete_file(victim))
        self.assertIsNone(self.gateway.clone_file(victim))

        self.assertEqual(victim.read_text(encoding="utf-8"), "keep")
        self.assertEqual(os.listdir(self.outside), ["victim.md"])

    def test_sibling_directory_sharing_root_prefix_is_outside(self) -> None:
        self.open()
        sibling = self.tmp / "blog-drafts"
        sibling.mkdir()
        target = sibling / "a.md"

        self.assertIsNone(self.gateway.write_file(target, "x"))
        self.assertFalse(target.exists())

    def test_dot_dot_escapes_are_outside(self) -> None:
        self.open()
        sneaky = self.root / "posts" / ".." / ".." / "outside" / "escaped.md"

        self.assertIsNone(self.gateway.write_file(sneaky, "x"))
        self.assertIsNone(self.gateway.create_post("../../outside/post", "x"))
        self.assertEqual(os.listdir(self.outside), [])

    def test_symlink_pointing_outside_is_outside(self) -> None:
        self.open()
        link = self.root / "linked"
        try:
            os.symlink(self.outside, link)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks unavailable")

        self.assertIsNone(self.gateway.write_file(link / "through.md", "x"))
        self.assertEqual(os.listdir(self.outside), [])

    def test_rename_target_outside_root_is_skipped(self) -> None:
        self.open()
        source = self.root / "posts" / "a.md"
        source.write_text("a", encoding="utf-8")

        self.assertIsNone(self.gateway.rename_file(source, self.outside / "moved.md"))
        self.assertTrue(source.exists())


class InsideRootTests(GatewayTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.open()

    def test_write_then_read(self) -> None:
        target = self.root / "posts" / "a.md"

        self.assertEqual(self.gateway.write_file(target, "# A\n"), target)
        self.assertEqual(self.gateway.read_file(str(target)), "# A\n")

    def test_read_missing_file_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            self.gateway.read_file(self.root / "posts" / "missing.md")

    def test_create_post_uses_manifest_posts_directory(self) -> None:
        created = self.gateway.create_post("Hello World", "body")

        self.assertEqual(created, self.root / "posts" / "Hello World.md")
        self.assertEqual(created.read_text(encoding="utf-8"), "body")

    def test_create_post_creates_missing_posts_directory(self) -> None:
        (self.root / "posts").rmdir()

        created = self.gateway.create_post("first", "")

        self.assertIsNotNone(created)
        self.assertTrue((self.root / "posts" / "first.md").is_file())

    def test_create_file_makes_empty_file(self) -> None:
        created = self.gateway.create_file("notes.txt", self.root)

        self.assertEqual(created, self.root / "notes.txt")
        self.assertEqual(created.read_text(encoding="utf-8"), "")

    def test_rename_relative_name_stays_in_source_directory(self) -> None:
        source = self.root / "posts" / "old.md"
        source.write_text("x", encoding="utf-8")

        renamed = self.gateway.rename_file(source, "new.md")

        self.assertEqual(renamed, self.root / "posts" / "new.md")
        self.assertFalse(source.exists())
        self.assertEqual(renamed.read_text(encoding="utf-8"), "x")

    def test_rename_missing_source_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            self.gateway.rename_file(self.root / "posts" / "ghost.md", "other.md")

    def test_clone_suffixes_are_gapless_and_increasing(self) -> None:
        source = self.root / "posts" / "post.md"
        payload = "# Post\nété \x00 bytes\n".encode("utf-8")
        source.write_bytes(payload)
        (self.root / "posts" / "post(1).md").write_text("older clone", encoding="utf-8")

        second = self.gateway.clone_file(source)
        third = self.gateway.clone_file(source)

        self.assertEqual(second, self.root / "posts" / "post(2).md")
        self.assertEqual(third, self.root / "posts" / "post(3).md")
        self.assertEqual(second.read_bytes(), payload)
        self.assertEqual(third.read_bytes(), payload)

    def test_clone_missing_source_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            self.gateway.clone_file(self.root / "posts" / "ghost.md")

    def test_delete_is_idempotent(self) -> None:
        target = self.root / "posts" / "bye.md"
        target.write_text("x", encoding="utf-8")

        self.assertTrue(self.gateway.delete_file(target))
        self.assertFalse(target.exists())
        self.assertTrue(self.gateway.delete_file(target))
        self.assertTrue(self.gateway.delete_file(self.root / "never-existed.md"))

    def test_read_stylesheet(self) -> None:
        (self.root / "css").mkdir()
        (self.root / "css" / "style.css").write_text("body { color: red; }\n", encoding="utf-8")

        self.assertEqual(self.gateway.read_stylesheet(), "body { color: red; }\n")


if __name__ == "__main__":
    unittest.main()
