"""blogdown: a headless core for a markdown blog editor.

The core keeps one blog project open, mirrors its directory tree to a UI
surface and rebuilds that tree whenever files change on disk. Sessions live
in ``blogdown.session``, project-scoped file access in ``blogdown.gateway``,
and the ``blogdown`` command line in ``blogdown.cli``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the ``blogdown`` command line; ``blogdown.cli`` is imported on first use."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
