# src/basetree/materializer.py
"""
Entry materializer
------------------

Turns one manifest entry into a filesystem object under the target root.

    FileEntry     → parent directories + file bytes (overwrites)
    FolderEntry   → nothing; directories appear as parents of files
    UnknownEntry  → nothing, logged as a warning

Keys that resolve outside the root raise UnsafePathError.  Filesystem
failures are *not* caught here: the first OSError ends the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .errors import BasetreeError
from .fs import ensure_directory, resolve_under
from .manifest import Entry, FileEntry, FolderEntry, Manifest, UnknownEntry

logger = logging.getLogger("basetree.materializer")

# Result actions
TEXT = "text"
BINARY = "binary"
EMPTY = "empty"
SKIPPED_FOLDER = "skipped-folder"
SKIPPED_UNKNOWN = "skipped-unknown"


class MaterializeError(BasetreeError):
    """Entry payload could not be decoded."""


@dataclass(slots=True, frozen=True)
class MaterializeResult:
    path: str
    action: str
    size: int = 0


def materialize_entry(path: str, entry: Entry, root: str | Path) -> MaterializeResult:
    """Materialize *entry* at ``root / path``."""
    if isinstance(entry, FolderEntry):
        logger.info("Skipping folder: %s", path)
        return MaterializeResult(path, SKIPPED_FOLDER)

    if isinstance(entry, UnknownEntry):
        logger.warning(
            "Ignoring entry with unrecognized type '%s': %s", entry.type_tag, path
        )
        return MaterializeResult(path, SKIPPED_UNKNOWN)

    assert isinstance(entry, FileEntry)
    try:
        data = entry.payload()
    except ValueError as exc:
        raise MaterializeError(f"{path}: {exc}") from exc

    target = resolve_under(root, path)
    ensure_directory(target.parent)
    target.write_bytes(data)

    if not data:
        action = EMPTY
        logger.info("Created empty file: %s", path)
    elif entry.is_binary:
        action = BINARY
        logger.info("Created binary file: %s", path)
    else:
        action = TEXT
        logger.info("Created file: %s", path)
    return MaterializeResult(path, action, len(data))


def materialize_all(manifest: Manifest, root: str | Path) -> List[MaterializeResult]:
    """Materialize every entry in manifest order, stopping at the first error."""
    logger.info("Creating file structure...")
    return [materialize_entry(path, entry, root) for path, entry in manifest]
