"""Reads a project folder and asks the model what it is."""

from reenter.scout.analyze import MODE_INTENT, analyze_project, generate_steps
from reenter.scout.directory import SKIP, scan_directory
from reenter.scout.files import KEY_FILES, read_key_files

__all__ = [
    "KEY_FILES",
    "MODE_INTENT",
    "SKIP",
    "analyze_project",
    "generate_steps",
    "read_key_files",
    "scan_directory",
]
