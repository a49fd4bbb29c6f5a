# src/basetree/manifest.py
"""
Manifest model and loader.

A manifest is a JSON object mapping repository-relative paths (POSIX
slashes) to entry descriptors::

    {
      "src":          {"type": "folder", "name": "src"},
      "src/index.js": {"type": "file", "name": "index.js",
                       "contents": "console.log(1)"},
      "logo.png":     {"type": "file", "name": "logo.png",
                       "contents": "iVBORw0KGgo=", "isBinary": true}
    }

Entries become a tagged variant: ``FileEntry``, ``FolderEntry`` or
``UnknownEntry`` (any other ``type`` tag, kept so callers can log it).
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union

import jsonschema

from .errors import BasetreeError
from .schema import MANIFEST_V1

logger = logging.getLogger("basetree.manifest")

DEFAULT_MANIFEST_NAME = "base.json"


# --------------------------------------------------------------------------- #
# Exceptions
# --------------------------------------------------------------------------- #
class ManifestError(BasetreeError):
    """Manifest could not be read or understood."""


class ManifestNotFoundError(ManifestError):
    """Manifest file does not exist."""


class ManifestEmptyError(ManifestError):
    """Manifest file is empty or whitespace only."""


class ManifestParseError(ManifestError):
    """Manifest is not valid JSON or lacks the entry type tags."""


# --------------------------------------------------------------------------- #
# Entry variants
# --------------------------------------------------------------------------- #
@dataclass(slots=True, frozen=True)
class FileEntry:
    """
    A file to write.

    • `contents`  – text, or base64 when `is_binary` is set; None means empty.
    • `is_binary` – ``isBinary`` in the manifest; only JSON ``true`` counts.
    """

    name: str = ""
    contents: Optional[str] = None
    is_binary: bool = False

    def payload(self) -> bytes:
        """Return the exact bytes this entry materializes to."""
        if not self.contents:
            return b""
        if self.is_binary:
            return _decode_base64(self.contents)
        return self.contents.encode("utf-8")


@dataclass(slots=True, frozen=True)
class FolderEntry:
    """Descriptive placeholder; directories appear as file parents."""

    name: str = ""


@dataclass(slots=True, frozen=True)
class UnknownEntry:
    """Entry whose ``type`` is neither "file" nor "folder"."""

    type_tag: str
    name: str = ""


Entry = Union[FileEntry, FolderEntry, UnknownEntry]


def entry_from_dict(obj: Mapping[str, Any]) -> Entry:
    tag = obj.get("type")
    name = obj.get("name") or ""
    if tag == "file":
        contents = obj.get("contents")
        if contents is not None and not isinstance(contents, str):
            raise ManifestParseError(
                f"file entry '{name}' has non-string contents ({type(contents).__name__})"
            )
        return FileEntry(
            name=name,
            contents=contents,
            is_binary=obj.get("isBinary") is True,
        )
    if tag == "folder":
        return FolderEntry(name=name)
    return UnknownEntry(type_tag=str(tag), name=name)


def _decode_base64(text: str) -> bytes:
    """
    Decode base64, ignoring whitespace and missing ``=`` padding.

    Raises ValueError when no valid decoding exists (e.g. a lone trailing
    character).
    """
    compact = "".join(text.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 contents: {exc}") from exc


# --------------------------------------------------------------------------- #
# Manifest
# --------------------------------------------------------------------------- #
@dataclass(slots=True, frozen=True)
class Manifest:
    """Ordered, read-only mapping of relative path → Entry."""

    entries: Mapping[str, Entry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __iter__(self) -> Iterator[Tuple[str, Entry]]:
        return iter(self.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def files(self) -> Iterator[Tuple[str, FileEntry]]:
        for path, entry in self.entries.items():
            if isinstance(entry, FileEntry):
                yield path, entry

    # --- parsing --------------------------------------------------------- #
    @staticmethod
    def from_dict(obj: Any) -> "Manifest":
        try:
            jsonschema.validate(obj, MANIFEST_V1)
        except jsonschema.ValidationError as exc:
            where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ManifestParseError(f"{where}: {exc.message}") from exc
        return Manifest(
            entries={path: entry_from_dict(data) for path, data in obj.items()},
        )

    @staticmethod
    def from_json(text: str | bytes) -> "Manifest":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestParseError(str(exc)) from exc
        return Manifest.from_dict(obj)


# --------------------------------------------------------------------------- #
# Loader
# --------------------------------------------------------------------------- #
def check_manifest_file(path: str | Path) -> str:
    """
    Return the manifest text after the presence / emptiness checks.

    Raises ManifestNotFoundError or ManifestEmptyError; nothing is parsed
    beyond UTF-8 decoding, whose failure is a ManifestParseError.
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(f"{path} not found")
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"{path} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        raise ManifestEmptyError(f"{path} is empty")
    return text


def load_manifest(path: str | Path = DEFAULT_MANIFEST_NAME) -> Manifest:
    path = Path(path)
    logger.info("Reading %s...", path)
    text = check_manifest_file(path)
    manifest = Manifest.from_json(text)
    logger.debug("Loaded %d entries from %s", len(manifest), path)
    return manifest
