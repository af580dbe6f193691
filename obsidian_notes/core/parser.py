"""Line-oriented extraction of title, front matter and tags from note text.

Only a small subset of YAML is understood: one ``key: value`` pair per line,
with double-quoted scalars and single-line ``[a, b]`` arrays. Anything the
parser does not recognize is skipped, so malformed notes degrade to a missing
title, missing front matter or an empty tag list instead of raising.
"""

from __future__ import annotations

import re
from typing import Optional

from obsidian_notes.constants import UNTITLED
from obsidian_notes.data_models import FrontmatterValue, ParsedNote

FRONTMATTER_DELIMITER = "---"

_FRONTMATTER_TAGS_PATTERN = re.compile(r"tags:\s*\[(.*?)\]")
_HASHTAG_PATTERN = re.compile(r"#\w+", re.ASCII)
_QUOTES_PATTERN = re.compile(r"['\"]")


def _split_array(inner: str) -> list[str]:
    """Split the inside of ``[...]`` into cleaned, non-empty tokens."""
    tokens = (_QUOTES_PATTERN.sub("", item).strip() for item in inner.split(","))
    return [token for token in tokens if token]


def _parse_value(raw: str) -> FrontmatterValue:
    value = raw.strip()
    if value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    if value.startswith("[") and value.endswith("]"):
        return _split_array(value[1:-1])
    return value


def extract_title(content: str) -> str:
    """Return the text of the first level-1 heading, or ``"Untitled"``."""
    for line in content.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith("# "):
            return trimmed[2:].strip()
    return UNTITLED


def extract_frontmatter(content: str) -> Optional[dict[str, FrontmatterValue]]:
    """Parse the leading ``---`` delimited block into a mapping.

    Args:
        content: Raw note text.

    Returns:
        A mapping of keys to string or list values, or ``None`` when the note
        does not open with ``---`` or the block is never closed.
    """
    lines = content.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None

    closing_index = next(
        (index for index in range(1, len(lines)) if lines[index].strip() == FRONTMATTER_DELIMITER),
        None,
    )
    if closing_index is None:
        return None

    metadata: dict[str, FrontmatterValue] = {}
    for line in lines[1:closing_index]:
        colon_index = line.find(":")
        if colon_index <= 0:
            continue
        key = line[:colon_index].strip()
        metadata[key] = _parse_value(line[colon_index + 1:])

    return metadata


def extract_tags(content: str) -> list[str]:
    """Collect front matter ``tags: [...]`` entries and inline ``#hashtags``.

    Every line equal to ``---`` toggles the front matter flag. Inside the
    block only the bracketed ``tags:`` line contributes; outside it every
    ``#word`` run does. Duplicates are dropped, first occurrence wins.
    """
    tags: list[str] = []
    in_frontmatter = False

    for line in content.split("\n"):
        trimmed = line.strip()

        if trimmed == FRONTMATTER_DELIMITER:
            in_frontmatter = not in_frontmatter
            continue

        if in_frontmatter:
            if trimmed.startswith("tags:"):
                match = _FRONTMATTER_TAGS_PATTERN.search(trimmed)
                if match:
                    tags.extend(_split_array(match.group(1)))
        elif "#" in trimmed:
            tags.extend(tag[1:] for tag in _HASHTAG_PATTERN.findall(trimmed))

    return list(dict.fromkeys(tags))


def parse_note(content: str) -> ParsedNote:
    """Extract the full structure of a note in one call."""
    return ParsedNote(
        title=extract_title(content),
        frontmatter=extract_frontmatter(content),
        tags=extract_tags(content),
    )
