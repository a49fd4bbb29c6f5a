# src/basetree/config.py
"""
Run configuration.

Values come from (lowest → highest precedence): built-in defaults, a
``.env`` file, process environment, explicit overrides from the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

from .manifest import DEFAULT_MANIFEST_NAME

_dotenv_loaded = False


@dataclass(slots=True)
class BasetreeConfig:
    manifest_path: Path = Path(DEFAULT_MANIFEST_NAME)
    clean: bool = False
    # project mode prompts for (or takes) a folder under the cwd
    project_mode: bool = False
    root_name: Optional[str] = None
    prompt_attempts: Optional[int] = None
    log_level: str = "INFO"
    show_summary: bool = False


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    return value if value > 0 else None


def load_config(**overrides: Any) -> BasetreeConfig:
    """Build a config from env (after ``load_dotenv``) plus *overrides*."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        load_dotenv(find_dotenv(usecwd=True))
        _dotenv_loaded = True

    cfg = BasetreeConfig(
        manifest_path=Path(os.getenv("BASETREE_MANIFEST", DEFAULT_MANIFEST_NAME)),
        log_level=os.getenv("BASETREE_LOG_LEVEL", "INFO").upper(),
        prompt_attempts=_env_int("BASETREE_PROMPT_ATTEMPTS"),
    )

    known = {f.name for f in fields(BasetreeConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    if cfg.root_name is not None:
        cfg.project_mode = True
    cfg.manifest_path = Path(cfg.manifest_path)
    return cfg
