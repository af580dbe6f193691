"""Markdown rendering for conversation notes."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from obsidian_notes.constants import AUTO_TAGS
from obsidian_notes.data_models import ConversationNoteParams, NoteStyle


def _format_frontmatter_value(value: str | Sequence[str]) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return "[" + ", ".join(f'"{item}"' for item in value) + "]"


def generate_frontmatter(
    tags: Sequence[str],
    style: NoteStyle,
    created: datetime,
    auto_tags: Sequence[str] = AUTO_TAGS,
) -> str:
    """Render the ``---`` block with ``created``, ``style`` and ``tags``.

    Values are written as double-quoted strings and the tag list as a
    bracketed array, which is the shape :mod:`obsidian_notes.core.parser`
    reads back.
    """
    fields: dict[str, str | list[str]] = {
        "created": created.strftime("%Y-%m-%d"),
        "style": style.value,
        "tags": [*tags, *auto_tags],
    }
    body = "\n".join(f"{key}: {_format_frontmatter_value(value)}" for key, value in fields.items())
    return f"---\n{body}\n---"


def _concise_content(topic: str, highlights: Sequence[str]) -> str:
    content = f"# {topic}\n\n"
    for point in highlights:
        content += f"- {point}\n"
    return content


def _detailed_content(topic: str, highlights: Sequence[str]) -> str:
    content = f"# {topic}\n\n"
    for point in highlights:
        content += f"{point}\n\n"
    return content


def _eli5_content(topic: str, highlights: Sequence[str]) -> str:
    content = f"# {topic}\n\n"
    content += "> Simple explanation\n\n"
    for point in highlights:
        content += f"{point}\n\n"
    return content


def generate_main_content(topic: str, highlights: Sequence[str], style: NoteStyle) -> str:
    if style is NoteStyle.CONCISE:
        return _concise_content(topic, highlights)
    if style is NoteStyle.ELI5:
        return _eli5_content(topic, highlights)
    return _detailed_content(topic, highlights)


def format_conversation_note(
    params: ConversationNoteParams,
    date: Optional[datetime] = None,
    auto_tags: Sequence[str] = AUTO_TAGS,
) -> str:
    """Render a conversation summary as a complete markdown note.

    Args:
        params: Topic, highlights, tags and style of the note.
        date: Creation date written to the front matter. Defaults to now.
        auto_tags: Literal tags appended after the caller's tags.

    Returns:
        The front matter block, a blank line, and the style-specific body.

    Examples:
        >>> params = ConversationNoteParams(topic="Git", highlights=["rebase often"])
        >>> print(format_conversation_note(params, datetime(2024, 1, 1)))
        ---
        created: "2024-01-01"
        style: "concise"
        tags: ["mcp"]
        ---
        <BLANKLINE>
        # Git
        <BLANKLINE>
        - rebase often
        <BLANKLINE>
    """
    created = date or datetime.now()
    frontmatter = generate_frontmatter(params.tags, params.style, created, auto_tags)
    main_content = generate_main_content(params.topic, params.highlights, params.style)
    return f"{frontmatter}\n\n{main_content}"
