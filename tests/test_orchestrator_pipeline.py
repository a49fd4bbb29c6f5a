"""
tests/test_orchestrator_pipeline.py
===================================

End-to-end runs through ProvisionOrchestrator and the CLI entry point:

    Validate → (Prompt) → (Clean) → EnsureRoot → MaterializeAll → Report
"""
from __future__ import annotations

import base64
import json
import logging
from pathlib import Path
from typing import List

import pytest

from basetree.cli import main
from basetree.config import BasetreeConfig
from basetree.manifest import ManifestNotFoundError
from basetree.orchestrator import ProvisionOrchestrator
from basetree.prompt import InvalidFolderNameError

DEMO_MANIFEST = {
    "src/index.js": {"type": "file", "name": "index.js", "contents": "console.log(1)"},
    "src": {"type": "folder", "name": "src"},
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    for name in ("BASETREE_MANIFEST", "BASETREE_LOG_LEVEL", "BASETREE_PROMPT_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # handlers bind to the per-test captured stderr
    logging.getLogger("basetree").handlers.clear()


def _write_manifest(base: Path, doc: dict) -> Path:
    p = base / "base.json"
    p.write_text(json.dumps(doc), encoding="utf-8")
    return p


class _Ask:
    def __init__(self, *answers: str):
        self._queue = list(answers)
        self.asked: List[str] = []

    def __call__(self, question: str) -> str:
        self.asked.append(question)
        if not self._queue:
            raise EOFError
        return self._queue.pop(0)


# --------------------------------------------------------------------------- #
# Orchestrator
# --------------------------------------------------------------------------- #
def test_demo_scenario_in_project_mode(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    ask = _Ask("demo")
    orch = ProvisionOrchestrator(BasetreeConfig(project_mode=True), ask=ask, base_dir=tmp_path)

    summary = orch.run()

    assert summary.root == tmp_path / "demo"
    assert (tmp_path / "demo" / "src" / "index.js").read_text(encoding="utf-8") == "console.log(1)"
    assert (tmp_path / "demo" / "src").is_dir()
    assert [r.action for r in summary.results] == ["text", "skipped-folder"]


def test_legacy_mode_writes_into_base_dir(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    ask = _Ask()

    ProvisionOrchestrator(BasetreeConfig(), ask=ask, base_dir=tmp_path).run()

    assert (tmp_path / "src" / "index.js").exists()
    assert ask.asked == []


def test_missing_manifest_fails_before_prompt(tmp_path: Path):
    ask = _Ask("demo")
    orch = ProvisionOrchestrator(BasetreeConfig(project_mode=True), ask=ask, base_dir=tmp_path)

    with pytest.raises(ManifestNotFoundError):
        orch.run()

    assert ask.asked == []
    assert list(tmp_path.iterdir()) == []


def test_invalid_root_name_is_fatal(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    cfg = BasetreeConfig(project_mode=True, root_name="My Project!")
    with pytest.raises(InvalidFolderNameError):
        ProvisionOrchestrator(cfg, base_dir=tmp_path).run()
    assert not (tmp_path / "src").exists()


def test_clean_and_create_are_separate_stages(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    orch = ProvisionOrchestrator(BasetreeConfig(), base_dir=tmp_path)
    manifest = orch.validate()

    orch.create(manifest, tmp_path)
    assert (tmp_path / "src" / "index.js").exists()

    report = orch.clean(manifest, tmp_path)
    assert report.removed_files == ["src/index.js"]
    assert not (tmp_path / "src").exists()
    assert (tmp_path / "base.json").exists()


def test_clean_flag_runs_before_create(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    stale = tmp_path / "demo" / "src" / "index.js"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale", encoding="utf-8")

    cfg = BasetreeConfig(clean=True, project_mode=True, root_name="demo")
    summary = ProvisionOrchestrator(cfg, base_dir=tmp_path).run()

    assert summary.clean_report is not None
    assert summary.clean_report.removed_files == ["src/index.js"]
    assert summary.clean_report.removed_dirs == ["src"]
    assert stale.read_text(encoding="utf-8") == "console.log(1)"


def test_summary_table_lists_every_entry(tmp_path: Path):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    summary = ProvisionOrchestrator(BasetreeConfig(), base_dir=tmp_path).run()

    table = summary.format_table()
    assert "src/index.js" in table
    assert "skipped-folder" in table


# --------------------------------------------------------------------------- #
# CLI
# --------------------------------------------------------------------------- #
def test_cli_success_exit_code(tmp_path: Path, capsys):
    payload = base64.b64encode(b"\x89PNG\r\n").decode("ascii")
    _write_manifest(
        tmp_path,
        {**DEMO_MANIFEST, "img/logo.png": {"type": "file", "name": "logo.png", "contents": payload, "isBinary": True}},
    )

    assert main(["--root", "demo", "--summary"]) == 0

    out = capsys.readouterr().out
    assert "created successfully" in out
    assert "img/logo.png" in out
    assert (tmp_path / "demo" / "img" / "logo.png").read_bytes() == b"\x89PNG\r\n"


def test_cli_missing_manifest_exits_non_zero(tmp_path: Path, capsys):
    ask = _Ask("demo")

    assert main(["--project"], ask=ask) == 1

    assert "Manifest not found" in capsys.readouterr().err
    assert ask.asked == []
    assert list(tmp_path.iterdir()) == []


def test_cli_empty_manifest_diagnostic(tmp_path: Path, capsys):
    (tmp_path / "base.json").write_text("\n", encoding="utf-8")
    assert main([]) == 1
    assert "Manifest is empty" in capsys.readouterr().err


def test_cli_parse_error_diagnostic(tmp_path: Path, capsys):
    (tmp_path / "base.json").write_text("{not json", encoding="utf-8")
    assert main([]) == 1
    assert "could not be parsed" in capsys.readouterr().err


def test_cli_prompt_reasks_until_valid(tmp_path: Path, capsys):
    _write_manifest(tmp_path, DEMO_MANIFEST)
    ask = _Ask("My Project!", "my-project_1.0")

    assert main(["--project"], ask=ask) == 0

    assert len(ask.asked) == 2
    assert (tmp_path / "my-project_1.0" / "src" / "index.js").exists()


def test_cli_prompt_eof_aborts(tmp_path: Path, capsys):
    _write_manifest(tmp_path, DEMO_MANIFEST)

    assert main(["--project"], ask=_Ask()) == 1

    assert "Aborted" in capsys.readouterr().err
    assert not (tmp_path / "src").exists()


def test_cli_filesystem_error_is_fatal(tmp_path: Path, capsys):
    _write_manifest(
        tmp_path,
        {
            "base.json/inner.txt": {"type": "file", "contents": "x"},
            "after.txt": {"type": "file", "contents": "y"},
        },
    )

    assert main([]) == 1

    assert "Filesystem error" in capsys.readouterr().err
    assert not (tmp_path / "after.txt").exists()


def test_cli_manifest_flag(tmp_path: Path):
    (tmp_path / "tree.json").write_text(json.dumps(DEMO_MANIFEST), encoding="utf-8")
    assert main(["--manifest", "tree.json"]) == 0
    assert (tmp_path / "src" / "index.js").exists()


def test_cli_non_utf8_manifest_diagnostic(tmp_path: Path, capsys):
    (tmp_path / "base.json").write_bytes(b'{"a.txt": {"type": "file", "contents": "\xff\xfe"}}')
    assert main([]) == 1
    assert "could not be parsed" in capsys.readouterr().err


def test_cli_refuses_key_outside_root(tmp_path: Path, capsys):
    victim = tmp_path / "victim.txt"
    victim.write_text("mine", encoding="utf-8")
    _write_manifest(tmp_path, {str(victim): {"type": "file", "contents": "pwned"}})

    assert main(["--clean", "--root", "demo"]) == 1

    assert "Invalid entry" in capsys.readouterr().err
    assert victim.read_text(encoding="utf-8") == "mine"
