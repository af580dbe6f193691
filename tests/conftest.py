"""Shared fixtures for the notes test suite."""

import os
from pathlib import Path
from types import SimpleNamespace

import pytest

from obsidian_notes.core.vault_operations import VaultStorage
from obsidian_notes.data_models import NotesConfiguration
from obsidian_notes.server import NotesRuntime


@pytest.fixture
def vault_path(tmp_path):
    """An empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def storage(vault_path):
    return VaultStorage(vault_path)


@pytest.fixture
def write_note(vault_path):
    """Write a note relative to the vault root, optionally setting its mtime."""

    def _write(relative: str, content: str, mtime: float | None = None) -> Path:
        note_path = vault_path / relative
        note_path.parent.mkdir(parents=True, exist_ok=True)
        note_path.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(note_path, (mtime, mtime))
        return note_path

    return _write


@pytest.fixture
def runtime(vault_path):
    config = NotesConfiguration(vault_path=vault_path)
    return NotesRuntime.from_config(config)


@pytest.fixture
def ctx(runtime):
    """Stand-in for the FastMCP request context."""
    return SimpleNamespace(request_context=SimpleNamespace(lifespan_context=runtime))
