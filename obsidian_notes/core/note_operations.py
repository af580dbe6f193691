"""Core business logic for listing, reading and creating notes."""

from __future__ import annotations

import asyncio
import logging
import posixpath
from collections.abc import Sequence
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Optional

from pyuca import Collator

from obsidian_notes.constants import (
    AUTO_TAGS,
    DEFAULT_FOLDER,
    DEFAULT_LIST_LIMIT,
    EXCERPT_LENGTH,
)
from obsidian_notes.core.formatter import format_conversation_note
from obsidian_notes.core.parser import extract_tags, extract_title, parse_note
from obsidian_notes.core.search_operations import gather_in_batches
from obsidian_notes.core.vault_operations import (
    VaultStorage,
    collision_timestamp,
    generate_file_name,
)
from obsidian_notes.data_models import (
    ConversationNoteParams,
    CreateNoteResult,
    EnrichedResult,
    ListCriteria,
    ListResult,
    NoteStructure,
    SortBy,
    SortOrder,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def _name_sort_key(note: EnrichedResult) -> tuple[tuple[int, ...], str]:
    """Unicode collation order; lowercase sorts before uppercase on ties."""
    return _collator().sort_key(note.filename), note.filename.swapcase()


_SORT_KEYS: dict[SortBy, Callable[[EnrichedResult], Any]] = {
    SortBy.NAME: _name_sort_key,
    SortBy.DATE: lambda note: note.modified.timestamp(),
    # Excerpt length, not file size: capped at 200 characters
    SortBy.SIZE: lambda note: len(note.excerpt),
}


def sort_notes(
    notes: Sequence[EnrichedResult],
    sort_by: SortBy = SortBy.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[EnrichedResult]:
    """Return ``notes`` ordered by ``sort_by``; ties keep their input order."""
    return sorted(notes, key=_SORT_KEYS[sort_by], reverse=sort_order is SortOrder.DESC)


def _load_entry(storage: VaultStorage, path: str, include_content: bool) -> EnrichedResult:
    modified = storage.modified_time(path)
    content = storage.read_file(path)
    return EnrichedResult(
        path=path,
        filename=posixpath.basename(path),
        title=extract_title(content),
        tags=extract_tags(content),
        excerpt=content[:EXCERPT_LENGTH],
        modified=modified,
        content=content if include_content else None,
    )


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


async def list_notes(storage: VaultStorage, criteria: ListCriteria) -> ListResult:
    """List every note under ``criteria.folder``, sorted and paginated.

    Args:
        storage: Vault file access.
        criteria: Folder scope, sort key/direction and pagination.

    Returns:
        A :class:`ListResult` holding the requested page, the number of notes
        before pagination, and whether more notes follow. Failures are logged
        and produce an empty result.
    """

    async def _process(path: str) -> Optional[EnrichedResult]:
        try:
            return await asyncio.to_thread(_load_entry, storage, path, criteria.include_content)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping file '%s' while listing notes: %s", path, exc)
            return None

    try:
        files = await asyncio.to_thread(storage.list_files, criteria.folder)
        notes = await gather_in_batches(files, _process)
    except Exception:
        logger.exception("Error listing notes in folder %r", criteria.folder)
        return ListResult(notes=[], total=0, has_more=False)

    limit = criteria.limit or DEFAULT_LIST_LIMIT
    offset = criteria.offset or 0

    ordered = sort_notes(notes, criteria.sort_by, criteria.sort_order)
    total = len(ordered)
    return ListResult(
        notes=ordered[offset:offset + limit],
        total=total,
        has_more=offset + limit < total,
    )


async def get_note_structure(storage: VaultStorage, note_path: str) -> Optional[NoteStructure]:
    """Read one note and return its parsed structure.

    Args:
        storage: Vault file access.
        note_path: Vault-relative path of the note, including ``.md``.

    Returns:
        The :class:`NoteStructure`, or None when the note does not exist or
        cannot be read.
    """
    try:
        if not await asyncio.to_thread(storage.exists, note_path):
            return None
        content = await asyncio.to_thread(storage.read_file, note_path)
    except (OSError, ValueError) as exc:
        logger.warning("Error reading note '%s': %s", note_path, exc)
        return None

    parsed = parse_note(content)
    return NoteStructure(
        path=note_path,
        content=content,
        title=parsed.title,
        frontmatter=parsed.frontmatter,
        tags=parsed.tags,
    )


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================


async def create_conversation_note(
    storage: VaultStorage,
    params: ConversationNoteParams,
    default_folder: str = DEFAULT_FOLDER,
    auto_tags: Sequence[str] = AUTO_TAGS,
    now: Optional[datetime] = None,
) -> CreateNoteResult:
    """Write a new note summarizing a conversation.

    The note lands in ``params.folder`` (or ``default_folder``), which is
    created if needed, under ``<date> - <topic>.md``. If that file exists the
    topic gets a timestamp suffix and the name is generated once more; the
    fallback name is not checked again.

    Args:
        storage: Vault file access.
        params: Topic, highlights, tags, folder and style.
        default_folder: Folder used when ``params.folder`` is empty.
        auto_tags: Tags appended to every created note.
        now: Creation instant. Defaults to the current UTC time.

    Returns:
        A :class:`CreateNoteResult` carrying the absolute path on success or
        the error message on failure. Errors are never raised.
    """
    try:
        if not await asyncio.to_thread(storage.validate_vault_path):
            return CreateNoteResult(success=False, error="Obsidian vault path not found or invalid")

        created_at = now or datetime.now(timezone.utc)
        folder = params.folder or default_folder
        await asyncio.to_thread(storage.ensure_dir, folder)

        relative = posixpath.join(folder, generate_file_name(params.topic, created_at))
        if await asyncio.to_thread(storage.exists, relative):
            fallback_topic = f"{params.topic} - {collision_timestamp(created_at)}"
            relative = posixpath.join(folder, generate_file_name(fallback_topic, created_at))

        content = format_conversation_note(params, created_at.astimezone(), auto_tags)
        target = await asyncio.to_thread(storage.write_file, relative, content)
    except Exception as exc:
        logger.exception("Error creating note for topic %r", params.topic)
        return CreateNoteResult(success=False, error=str(exc) or "Unknown error creating note")

    logger.info("Created note '%s' in vault %s", relative, storage.root)
    return CreateNoteResult(success=True, path=str(target))
