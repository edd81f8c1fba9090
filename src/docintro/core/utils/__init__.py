"""
Utility helpers shared across DocIntro layers.
"""

from .concurrency import run_blocking
from .file_utils import (
    ensure_directory,
    remove_directory_tree,
    safe_file_stem,
)

__all__ = [
    "run_blocking",
    "ensure_directory",
    "remove_directory_tree",
    "safe_file_stem",
]
