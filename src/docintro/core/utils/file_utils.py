"""
File utility functions for DocIntro application.
"""

import re
from pathlib import Path
from typing import List

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def safe_file_stem(filename: str, default: str = "chunk", max_length: int = 64) -> str:
    """Reduce a client-supplied filename to a safe stem.

    Directory components and the extension are dropped, anything outside
    ``[A-Za-z0-9_.-]`` becomes ``_``.
    """
    name = Path(filename or "").name
    stem = Path(name).stem if name else ""
    stem = _UNSAFE_CHARS.sub("_", stem).strip("._")
    return stem[:max_length] or default


def ensure_directory(directory: Path) -> Path:
    """Create directory (and parents) if it doesn't exist."""
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def remove_directory_tree(directory: Path) -> List[str]:
    """Delete every file in ``directory`` and then the directory itself.

    A missing directory is a no-op. Returns the names of the removed files.
    Nested directories are not expected and are removed recursively.
    """
    if not directory.exists():
        return []

    removed = []
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            removed.extend(remove_directory_tree(entry))
        else:
            entry.unlink(missing_ok=True)
            removed.append(entry.name)
    directory.rmdir()
    return removed
