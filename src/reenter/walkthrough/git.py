"""Saves where the user is before anything else touches the project.

Three cases, one experience ("Saving your starting point"):

* no git: ``git init`` and commit everything
* loose ends: commit everything as it is
* clean: an empty commit, which still marks the restore point
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import subprocess
from typing import Literal

from reenter.tui import Terminal, with_spinner

logger = logging.getLogger(__name__)

GitState = Literal["no-git", "loose-ends", "clean"]

COMMIT_BASE = "saving starting point before reenter"
_COMMIT_RE = re.compile(re.escape(COMMIT_BASE) + r" \[\d+\]")

DEFAULT_GITIGNORE = "node_modules\ndist\n.env\n"


def _git(args: list[str], cwd: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def next_commit_message(path: str) -> str:
    """Commit message numbered after the restore points already in the history."""
    try:
        log = _git(["log", "--all", "--format=%s"], path)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return f"{COMMIT_BASE} [00]"
    count = len(_COMMIT_RE.findall(log))
    return f"{COMMIT_BASE} [{count:02d}]"


def check_git_state(path: str) -> GitState:
    """Classify *path*. A repository rooted in a parent folder counts as no git."""
    try:
        repo_root = _git(["rev-parse", "--show-toplevel"], path).strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "no-git"

    if os.path.realpath(repo_root) != os.path.realpath(path):
        return "no-git"

    status = _git(["status", "--porcelain"], path)
    return "loose-ends" if status.strip() else "clean"


def ensure_gitignore(path: str) -> None:
    gitignore = os.path.join(path, ".gitignore")
    if not os.path.exists(gitignore):
        with open(gitignore, "w", encoding="utf-8") as f:
            f.write(DEFAULT_GITIGNORE)


def commit_starting_point(path: str) -> str:
    """Record the restore point and describe what was done."""
    state = check_git_state(path)

    if state == "no-git":
        # Any history git sees here belongs to a parent repository.
        message = f"{COMMIT_BASE} [00]"
        ensure_gitignore(path)
        _git(["init"], path)
        _git(["add", "."], path)
        _git(["commit", "-m", message], path)
        return f"no git found, initialized repo and committed everything ({message})"

    message = next_commit_message(path)
    if state == "loose-ends":
        _git(["add", "."], path)
        _git(["commit", "-m", message], path)
        return f"git found, committed loose ends ({message})"

    _git(["commit", "--allow-empty", "-m", message], path)
    return f"git found, already clean, created empty restore point ({message})"


async def save_starting_point(path: str, *, terminal: Terminal | None = None) -> str:
    outcome = await with_spinner(
        "Saving your starting point",
        "Starting point saved",
        lambda: asyncio.to_thread(commit_starting_point, path),
        terminal=terminal,
    )
    logger.info("Starting point for %s: %s", path, outcome)
    return outcome
