# src/basetree/prompt.py
"""Interactive target-folder prompt."""

from __future__ import annotations

import re
from typing import Callable, Optional

from .errors import BasetreeError

FOLDER_NAME_PATTERN = re.compile(r"[A-Za-z0-9\-_.]+")

PROMPT_TEXT = "Project folder name: "


class PromptCancelledError(BasetreeError):
    """Input ended or was interrupted before a valid folder name arrived."""


class InvalidFolderNameError(BasetreeError):
    """A non-interactive folder name failed validation."""


def is_valid_folder_name(name: str) -> bool:
    return bool(FOLDER_NAME_PATTERN.fullmatch(name))


def validate_folder_name(name: str) -> str:
    name = name.strip()
    if not is_valid_folder_name(name):
        raise InvalidFolderNameError(
            f"'{name}' – use only letters, digits, '-', '_' and '.'"
        )
    return name


def prompt_folder_name(
    ask: Callable[[str], str] = input,
    *,
    max_attempts: Optional[int] = None,
    echo: Callable[[str], None] = print,
) -> str:
    """
    Block until *ask* yields a valid folder name.

    EOF / Ctrl-C, or running out of *max_attempts*, raise
    PromptCancelledError.
    """
    attempt = 0
    while max_attempts is None or attempt < max_attempts:
        attempt += 1
        try:
            ans = ask(PROMPT_TEXT)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptCancelledError("no folder name supplied") from exc

        name = ans.strip()
        if not name:
            echo("Folder name cannot be empty. Try again.")
            continue
        if not is_valid_folder_name(name):
            echo("Invalid folder name (letters, digits, '-', '_' and '.' only). Try again.")
            continue
        return name

    raise PromptCancelledError(f"no valid folder name after {max_attempts} attempts")
