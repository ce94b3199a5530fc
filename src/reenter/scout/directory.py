"""Project folder outline, a couple of levels deep."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

SKIP = frozenset({"node_modules", "__pycache__", ".git", "dist", "build", ".next"})


def scan_directory(path: str, depth: int = 0, max_depth: int = 2) -> list[str]:
    """List entries under *path*, indented two spaces per level.

    Directories end with ``/`` and are followed by their own contents.
    Dotfiles and build or dependency folders are skipped, as are folders
    that cannot be read.
    """
    if depth > max_depth:
        return []

    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable folder %s: %s", path, e)
        return []

    indent = "  " * depth
    items: list[str] = []
    for entry in entries:
        if entry.name.startswith(".") or entry.name in SKIP:
            continue
        if entry.is_dir():
            items.append(f"{indent}{entry.name}/")
            items.extend(scan_directory(entry.path, depth + 1, max_depth))
        else:
            items.append(f"{indent}{entry.name}")
    return items
