# src/basetree/cleaner.py
"""
Cleaner – optional pre-pass that undoes a previous materialization.

Only paths implied by file entries are touched, and every one of them must
resolve inside the target root.  Directories are removed deepest first and
only when empty, so anything the user added by hand keeps its parent
directories alive.  The target root itself is never removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from .fs import resolve_under
from .manifest import Manifest

logger = logging.getLogger("basetree.cleaner")


@dataclass(slots=True)
class CleanReport:
    removed_files: List[str] = field(default_factory=list)
    removed_dirs: List[str] = field(default_factory=list)


def clean(manifest: Manifest, root: str | Path) -> CleanReport:
    base = Path(root).resolve()
    report = CleanReport()
    logger.info("Cleaning up existing files...")

    # unsafe keys raise before anything is deleted
    targets = [(rel_path, resolve_under(base, rel_path)) for rel_path, _ in manifest.files()]

    dirs: Set[Path] = set()
    for rel_path, target in targets:
        if target.exists():
            target.unlink()
            report.removed_files.append(rel_path)
            logger.info("Removed existing file: %s", rel_path)
        if target.parent != base:
            dirs.add(target.parent)

    for directory in sorted(dirs, key=lambda d: len(d.parts), reverse=True):
        if directory.is_dir() and not any(directory.iterdir()):
            directory.rmdir()
            rel_dir = directory.relative_to(base).as_posix()
            report.removed_dirs.append(rel_dir)
            logger.info("Removed empty directory: %s", rel_dir)

    return report
