"""Command-line front door for blogdown.

Offers project scaffolding, tree printing, a watch mode that reprints the
sidebar tree on every rebuild, and a few project-scoped file operations.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from .errors import BlogdownError
from .events import RecordingSurface
from .gateway import FileGateway
from .project_tree import build_directory_tree, reconcile_expansion
from .session import OpenOutcome, ProjectSession
from .terminal import TerminalSurface, format_tree

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blogdown", description="Markdown blog project tools.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Create a blog project in PATH.")
    init.add_argument("path", type=Path)

    tree = commands.add_parser("tree", help="Print the directory tree of PATH.")
    tree.add_argument("path", type=Path)
    tree.add_argument(
        "--expand",
        metavar="DIR",
        type=Path,
        action="append",
        default=[],
        help="Show the contents of DIR (repeatable).",
    )

    watch = commands.add_parser("watch", help="Open PATH and reprint the tree on every change.")
    watch.add_argument("path", type=Path)
    watch.add_argument("-y", "--yes", action="store_true", help="Initialize PATH without asking.")

    commands.add_parser("last", help="Print the last opened project path.")

    clone = commands.add_parser("clone", help="Copy FILE to the next free FILE(n) name.")
    clone.add_argument("file", type=Path)

    new_post = commands.add_parser("new-post", help="Create an empty post called TITLE in project PATH.")
    new_post.add_argument("path", type=Path)
    new_post.add_argument("title")
    return parser


def _project_root_of(path: Path) -> Path | None:
    session = ProjectSession(RecordingSurface())
    for candidate in (path, *path.parents):
        if session.is_project(candidate):
            return candidate
    return None


def _open_quietly(root: Path) -> tuple[ProjectSession, FileGateway]:
    """Open ``root`` without printing trees; caller must close the session."""
    session = ProjectSession(RecordingSurface())
    session.open_project(root)
    return session, FileGateway(session)


def _run_watch(args: argparse.Namespace, color: bool) -> int:
    session = ProjectSession(TerminalSurface(color=color))
    if args.yes:
        outcome = session.initialize_then_open(args.path)
    else:
        outcome = session.confirm_and_open(args.path)
    if outcome is not OpenOutcome.OPENED:
        return 1
    stop = threading.Event()
    try:
        stop.wait()
    except KeyboardInterrupt:
        pass
    finally:
        session.close_active_project()
    return 0


def _dispatch(args: argparse.Namespace, color: bool) -> int:
    if args.command == "init":
        session = ProjectSession(RecordingSurface())
        if session.is_project(args.path):
            raise BlogdownError(f"already a blog project: {args.path}")
        session.initialize_project(args.path)
        print(f"Initialized blog project in {args.path}")
        return 0

    if args.command == "tree":
        root = build_directory_tree(args.path.resolve(), expanded=True)
        reconcile_expansion(root, {path.resolve() for path in args.expand})
        sys.stdout.write(format_tree(root, color=color))
        return 0

    if args.command == "watch":
        return _run_watch(args, color)

    if args.command == "last":
        last = ProjectSession(RecordingSurface()).last_opened_project_path()
        if last:
            print(last)
        return 0

    if args.command == "clone":
        target = args.file.resolve()
        root = _project_root_of(target.parent)
        if root is None:
            raise SystemExit(f"Not inside a blog project: {target}")
        session, gateway = _open_quietly(root)
        try:
            print(gateway.clone_file(target))
        finally:
            session.close_active_project()
        return 0

    if args.command == "new-post":
        session, gateway = _open_quietly(args.path.resolve())
        try:
            created = gateway.create_post(args.title, "")
        finally:
            session.close_active_project()
        if created is None:
            raise SystemExit(f"Not a blog project: {args.path}")
        print(created)
        return 0

    raise SystemExit(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one command and return the exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    color = sys.stdout.isatty() and not args.no_color
    try:
        return _dispatch(args, color)
    except BlogdownError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"blogdown: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
