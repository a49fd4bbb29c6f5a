# src/basetree/fs.py
"""Filesystem helpers shared by the materializer and the cleaner."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import BasetreeError

logger = logging.getLogger("basetree.fs")


class UnsafePathError(BasetreeError):
    """Manifest path resolves outside the target root."""


def resolve_under(root: str | Path, rel_path: str) -> Path:
    """
    Resolve manifest *rel_path* against *root*.

    Absolute keys and ``..`` segments that leave the root, or a key that
    names the root itself, raise UnsafePathError.
    """
    base = Path(root).resolve()
    target = (base / rel_path).resolve()
    if target == base or base not in target.parents:
        raise UnsafePathError(f"'{rel_path}' resolves outside {base}")
    return target


def ensure_directory(path: str | Path) -> bool:
    """
    Create *path* and any missing ancestors.

    Returns True if the directory was created, False if it already existed.
    An existing non-directory at *path* raises FileExistsError.
    """
    path = Path(path)
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Created directory: %s", path)
    return True
