"""Filesystem access for the vault and note filename helpers."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from obsidian_notes.constants import (
    INVALID_FILENAME_CHARS,
    MAX_FILENAME_TOPIC_LENGTH,
    NOTE_EXTENSION,
)

logger = logging.getLogger(__name__)

_INVALID_CHARS_PATTERN = re.compile("[" + re.escape(INVALID_FILENAME_CHARS) + "]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def sanitize_file_name(name: str) -> str:
    """Make a topic safe for use as a file name.

    Strips ``<>:"/\\|?*``, collapses whitespace runs to a single space, trims
    the result and truncates it to 100 characters.
    """
    cleaned = _INVALID_CHARS_PATTERN.sub("", name)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned)
    return cleaned.strip()[:MAX_FILENAME_TOPIC_LENGTH]


def generate_file_name(topic: str, when: datetime) -> str:
    """Build ``<ISO date> - <sanitized topic>.md`` for a note.

    Args:
        topic: Raw topic supplied by the caller.
        when: Timestamp whose date part prefixes the name. Aware datetimes are
            converted to UTC first.

    Returns:
        The file name (no folder component).

    Examples:
        >>> generate_file_name("Python: tips?", datetime(2024, 5, 1, 9, 30))
        '2024-05-01 - Python tips.md'
    """
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return f"{when.date().isoformat()} - {sanitize_file_name(topic)}{NOTE_EXTENSION}"


def collision_timestamp(when: datetime) -> str:
    """Render an instant as an ISO-8601 UTC string safe for file names.

    ``:`` and ``.`` are replaced with ``-``, e.g. ``2024-01-01T12-30-45-123Z``.
    """
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    iso = when.strftime("%Y-%m-%dT%H:%M:%S") + f".{when.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class VaultStorage:
    """Whole-file text access to notes stored under a vault root.

    Every path accepted by this class is relative to the vault root and uses
    forward slashes. Paths that resolve outside of the vault are rejected.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def validate_vault_path(self) -> bool:
        """Return True when the vault root exists and is a directory."""
        return self.is_directory()

    def full_path(self, relative: str = "") -> Path:
        """Resolve a vault-relative path to an absolute path inside the vault.

        Raises:
            ValueError: If the resolved path escapes the vault root.
        """
        candidate = (self.root / Path(relative)).resolve(strict=False)
        vault_root = self.root.resolve(strict=False)
        if not candidate.is_relative_to(vault_root):
            raise ValueError(f"Path '{relative}' escapes the vault.")
        return candidate

    def exists(self, relative: str) -> bool:
        return self.full_path(relative).exists()

    def is_directory(self, relative: str = "") -> bool:
        return self.full_path(relative).is_dir()

    def ensure_dir(self, relative: str) -> Path:
        """Create a folder (and its parents) inside the vault if missing."""
        target = self.full_path(relative)
        target.mkdir(parents=True, exist_ok=True)
        return target

    def read_file(self, relative: str) -> str:
        return self.full_path(relative).read_text(encoding="utf-8", errors="replace")

    def write_file(self, relative: str, content: str) -> Path:
        """Replace the whole file with ``content``."""
        target = self.full_path(relative)
        target.write_text(content, encoding="utf-8")
        return target

    def modified_time(self, relative: str) -> datetime:
        return datetime.fromtimestamp(self.full_path(relative).stat().st_mtime)

    def list_files(self, folder: Optional[str] = None, extension: str = NOTE_EXTENSION) -> list[str]:
        """Recursively list files with ``extension`` below ``folder``.

        Args:
            folder: Folder relative to the vault root. ``None`` or empty lists
                the whole vault.
            extension: File suffix to keep (case-sensitive).

        Returns:
            Vault-relative, forward-slash paths in directory traversal order
            (entries sorted by name, sub-folders expanded in place). A missing
            folder yields an empty list.

        Raises:
            ValueError: If ``folder`` escapes the vault.
        """
        start = self.full_path(folder or "")
        if not start.exists():
            return []

        vault_root = self.root.resolve(strict=False)
        files: list[str] = []
        self._walk(start, vault_root, extension, files)
        return files

    def _walk(self, directory: Path, vault_root: Path, extension: str, files: list[str]) -> None:
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            logger.warning("Skipping unreadable folder '%s': %s", directory, exc)
            return

        for entry in entries:
            if entry.is_dir():
                self._walk(entry, vault_root, extension, files)
            elif entry.name.endswith(extension):
                files.append(entry.relative_to(vault_root).as_posix())

