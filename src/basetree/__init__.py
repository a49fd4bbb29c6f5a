"""basetree package root: materialize a file tree from a JSON manifest."""

from .errors import BasetreeError
from .manifest import (
    FileEntry,
    FolderEntry,
    Manifest,
    ManifestEmptyError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    UnknownEntry,
    load_manifest,
)
from .fs import UnsafePathError, ensure_directory, resolve_under
from .materializer import MaterializeError, MaterializeResult, materialize_all, materialize_entry
from .cleaner import CleanReport, clean
from .prompt import (
    FOLDER_NAME_PATTERN,
    InvalidFolderNameError,
    PromptCancelledError,
    is_valid_folder_name,
    prompt_folder_name,
)
from .orchestrator import ProvisionOrchestrator, RunSummary

__all__ = [
    "BasetreeError",
    "FileEntry",
    "FolderEntry",
    "UnknownEntry",
    "Manifest",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestEmptyError",
    "ManifestParseError",
    "load_manifest",
    "UnsafePathError",
    "ensure_directory",
    "resolve_under",
    "MaterializeError",
    "MaterializeResult",
    "materialize_entry",
    "materialize_all",
    "CleanReport",
    "clean",
    "FOLDER_NAME_PATTERN",
    "InvalidFolderNameError",
    "PromptCancelledError",
    "is_valid_folder_name",
    "prompt_folder_name",
    "ProvisionOrchestrator",
    "RunSummary",
]
