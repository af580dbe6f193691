"""Search and filtering of notes by text, regex, tags and folder."""

from __future__ import annotations

import asyncio
import logging
import posixpath
import re
from collections.abc import Awaitable, Callable, Sequence
from typing import Optional, TypeVar

from obsidian_notes.constants import (
    DEFAULT_SEARCH_LIMIT,
    EXCERPT_LENGTH,
    READ_BATCH_SIZE,
)
from obsidian_notes.core.parser import extract_tags, extract_title
from obsidian_notes.core.vault_operations import VaultStorage
from obsidian_notes.data_models import (
    EnrichedResult,
    SearchCriteria,
    SearchInField,
    TagOperator,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


async def gather_in_batches(
    items: Sequence[str],
    worker: Callable[[str], Awaitable[Optional[T]]],
    batch_size: int = READ_BATCH_SIZE,
) -> list[T]:
    """Run ``worker`` over ``items`` in fixed-size concurrent batches.

    Results keep the order of ``items``; ``None`` results are dropped.
    """
    results: list[T] = []
    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        batch_results = await asyncio.gather(*(worker(item) for item in batch))
        results.extend(result for result in batch_results if result is not None)
    return results


def _compile_regex(pattern: Optional[str]) -> Optional[re.Pattern[str]]:
    """Compile a case-insensitive pattern, or return None if it is invalid."""
    if not pattern:
        return None
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        logger.warning("Invalid regex pattern %r ignored: %s", pattern, exc)
        return None


def _query_fields(search_in: SearchInField) -> tuple[str, ...]:
    if search_in is SearchInField.ALL:
        return ("filename", "title", "content")
    return (search_in.value,)


def _tags_match(note_tags: Sequence[str], required: Sequence[str], operator: TagOperator) -> bool:
    if operator is TagOperator.OR:
        return any(tag in note_tags for tag in required)
    return all(tag in note_tags for tag in required)


def match_note(
    criteria: SearchCriteria,
    filename: str,
    title: str,
    content: str,
    tags: Sequence[str],
    pattern: Optional[re.Pattern[str]] = None,
) -> Optional[list[str]]:
    """Decide whether a note satisfies the search criteria.

    The text decision is the OR of the signals that were requested: the
    query signal (any selected field contains the query) and the regex
    signal (content or filename matches). A note passes the text stage when
    no signal was requested. The tag filter is applied on top and always
    excludes on failure.

    Args:
        criteria: Search parameters. ``criteria.regex`` is ignored in favour
            of ``pattern``, which the caller compiles once per search.
        filename: Base name of the note file.
        title: Extracted note title.
        content: Raw note text.
        tags: Extracted note tags.
        pattern: Compiled regex, or None when absent or invalid.

    Returns:
        The list of matched fields when the note is included, otherwise None.
    """
    matched_fields: list[str] = []
    text_signals: list[bool] = []

    if criteria.query:
        query_lower = criteria.query.lower()
        values = {"filename": filename, "title": title, "content": content}
        for field_name in _query_fields(criteria.search_in):
            if query_lower in values[field_name].lower():
                matched_fields.append(field_name)
        text_signals.append(bool(matched_fields))

    if pattern is not None:
        if pattern.search(content):
            regex_field: Optional[str] = "content"
        elif pattern.search(filename):
            regex_field = "filename"
        else:
            regex_field = None
        if regex_field is not None and regex_field not in matched_fields:
            matched_fields.append(regex_field)
        text_signals.append(regex_field is not None)

    if text_signals and not any(text_signals):
        return None

    if criteria.tags:
        if not _tags_match(tags, criteria.tags, criteria.tag_operator):
            return None
        matched_fields.append("tags")

    return matched_fields


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def _evaluate_file(
    storage: VaultStorage,
    path: str,
    criteria: SearchCriteria,
    pattern: Optional[re.Pattern[str]],
) -> Optional[EnrichedResult]:
    content = storage.read_file(path)
    title = extract_title(content)
    tags = extract_tags(content)
    filename = posixpath.basename(path)

    matched_fields = match_note(criteria, filename, title, content, tags, pattern)
    if matched_fields is None:
        return None

    return EnrichedResult(
        path=path,
        filename=filename,
        title=title,
        tags=tags,
        excerpt=content[:EXCERPT_LENGTH],
        modified=storage.modified_time(path),
        content=content if criteria.include_content else None,
        matched_fields=matched_fields,
    )


async def search_notes(storage: VaultStorage, criteria: SearchCriteria) -> list[EnrichedResult]:
    """Search notes under ``criteria.folder`` and return one page of matches.

    Every note is read from storage on each call. Files are evaluated in
    concurrent batches, matches are kept in listing order, and the whole
    match list is sliced to ``[offset, offset + limit)``.

    Args:
        storage: Vault file access.
        criteria: Query, regex, tag filter, scope and pagination.

    Returns:
        The requested page of :class:`EnrichedResult`. Unreadable files are
        skipped; any other failure is logged and yields an empty list.
    """
    pattern = _compile_regex(criteria.regex)

    async def _process(path: str) -> Optional[EnrichedResult]:
        try:
            return await asyncio.to_thread(_evaluate_file, storage, path, criteria, pattern)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping file '%s' during search: %s", path, exc)
            return None

    try:
        files = await asyncio.to_thread(storage.list_files, criteria.folder)
        matches = await gather_in_batches(files, _process)
    except Exception:
        logger.exception("Error searching notes in folder %r", criteria.folder)
        return []

    limit = criteria.limit or DEFAULT_SEARCH_LIMIT
    offset = criteria.offset or 0
    logger.info(
        "Search matched %d of %d notes (query=%r, regex=%r, tags=%s)",
        len(matches),
        len(files),
        criteria.query,
        criteria.regex,
        criteria.tags,
    )
    return matches[offset:offset + limit]
