"""Reads the handful of files that say what a project is."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

KEY_FILES = (
    "package.json",
    "README.md",
    "requirements.txt",
    "pyproject.toml",
    "Makefile",
    "docker-compose.yml",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    ".env.example",
)

MAX_FILE_CHARS = 1000


def read_key_files(path: str) -> str:
    """Concatenate the key files found in *path*, each under a ``--- name ---`` header.

    Each file is cut to its first 1000 characters. Returns ``""`` when none exist.
    """
    contents: list[str] = []
    root = Path(path)

    for name in KEY_FILES:
        file_path = root / name
        if not file_path.is_file():
            continue
        try:
            text = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Skipping unreadable key file %s: %s", file_path, e)
            continue
        contents.append(f"--- {name} ---\n{text[:MAX_FILE_CHARS]}")

    return "\n\n".join(contents)
