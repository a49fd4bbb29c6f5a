#!/usr/bin/env python3
"""Create the file structure described by a JSON manifest (base.json)."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from .config import load_config
from .fs import UnsafePathError
from .log import configure_logging
from .manifest import (
    ManifestEmptyError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
)
from .materializer import MaterializeError
from .orchestrator import ProvisionOrchestrator
from .prompt import InvalidFolderNameError, PromptCancelledError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="basetree", description=__doc__)
    parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Remove previously created files (and emptied dirs) first.",
    )
    parser.add_argument(
        "--project",
        dest="project_mode",
        action="store_true",
        default=None,
        help="Prompt for a project folder and create the tree inside it.",
    )
    parser.add_argument(
        "--root",
        dest="root_name",
        default=None,
        help="Project folder name (implies --project, skips the prompt).",
    )
    parser.add_argument(
        "--manifest",
        dest="manifest_path",
        default=None,
        help="Manifest path (default: $BASETREE_MANIFEST or base.json).",
    )
    parser.add_argument(
        "--summary",
        dest="show_summary",
        action="store_true",
        default=None,
        help="Print a table of per-entry actions when done.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _diagnose(exc: BaseException) -> str:
    if isinstance(exc, ManifestNotFoundError):
        return f"Manifest not found: {exc}"
    if isinstance(exc, ManifestEmptyError):
        return f"Manifest is empty: {exc}"
    if isinstance(exc, ManifestParseError):
        return f"Manifest could not be parsed: {exc}"
    if isinstance(exc, ManifestError):
        return f"Manifest error: {exc}"
    if isinstance(exc, (PromptCancelledError, InvalidFolderNameError)):
        return f"Aborted: {exc}"
    if isinstance(exc, (MaterializeError, UnsafePathError)):
        return f"Invalid entry: {exc}"
    return f"Filesystem error: {exc}"


def main(
    argv: Optional[List[str]] = None,
    *,
    ask: Callable[[str], str] = input,
) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            clean=args.clean,
            project_mode=args.project_mode,
            root_name=args.root_name,
            manifest_path=args.manifest_path,
            show_summary=args.show_summary,
            log_level="DEBUG" if args.verbose else None,
        )
        configure_logging(config.log_level)
    except ValueError as exc:
        print(f"[X] Configuration error: {exc}", file=sys.stderr)
        return 1

    orch = ProvisionOrchestrator(config, ask=ask)
    try:
        summary = orch.run()
    except (ManifestError, MaterializeError, UnsafePathError,
            PromptCancelledError, InvalidFolderNameError, OSError) as exc:
        print(f"[X] {_diagnose(exc)}", file=sys.stderr)
        return 1

    if config.show_summary:
        print(summary.format_table())
    print("[✔] File structure created successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
