# src/basetree/orchestrator.py
"""
basetree ProvisionOrchestrator
------------------------------

Linear pipeline, one pass per invocation::

    Validate → (Prompt) → (Clean) → EnsureRoot → MaterializeAll → Report

Every stage is a public method so tests (or other callers) can drive the
clean and create phases independently.  The manifest is passed explicitly
from stage to stage; nothing is held as module state.  Any exception ends
the run; files already written stay on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from tabulate import tabulate

from .cleaner import CleanReport, clean
from .config import BasetreeConfig
from .fs import ensure_directory
from .manifest import Manifest, load_manifest
from .materializer import MaterializeResult, materialize_all
from .prompt import prompt_folder_name, validate_folder_name

logger = logging.getLogger("basetree.orchestrator")


@dataclass(slots=True)
class RunSummary:
    root: Path
    results: List[MaterializeResult] = field(default_factory=list)
    clean_report: Optional[CleanReport] = None

    def format_table(self) -> str:
        rows = [(r.path, r.action, r.size) for r in self.results]
        return tabulate(rows, ["path", "action", "bytes"], tablefmt="github")


class ProvisionOrchestrator:
    def __init__(
        self,
        config: BasetreeConfig,
        *,
        ask: Callable[[str], str] = input,
        base_dir: str | Path | None = None,
    ):
        self.config = config
        self._ask = ask
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    # ------------------------------------------------------------------ #
    # Stages
    # ------------------------------------------------------------------ #
    def validate(self) -> Manifest:
        """Load the manifest; raises ManifestError before any side effect."""
        path = self.config.manifest_path
        if not path.is_absolute():
            path = self.base_dir / path
        return load_manifest(path)

    def resolve_root(self) -> Path:
        if not self.config.project_mode:
            return self.base_dir
        if self.config.root_name is not None:
            name = validate_folder_name(self.config.root_name)
        else:
            name = prompt_folder_name(self._ask, max_attempts=self.config.prompt_attempts)
        logger.info("Target folder: %s", name)
        return self.base_dir / name

    def clean(self, manifest: Manifest, root: Path) -> CleanReport:
        return clean(manifest, root)

    def create(self, manifest: Manifest, root: Path) -> List[MaterializeResult]:
        ensure_directory(root)
        return materialize_all(manifest, root)

    # ------------------------------------------------------------------ #
    def run(self) -> RunSummary:
        manifest = self.validate()
        root = self.resolve_root()
        summary = RunSummary(root=root)
        if self.config.clean:
            summary.clean_report = self.clean(manifest, root)
        summary.results = self.create(manifest, root)
        logger.info(
            "Materialized %d entries under %s", len(summary.results), root
        )
        return summary
