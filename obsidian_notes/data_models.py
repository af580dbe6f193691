"""Data models for configuration, parsed notes, and operation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from obsidian_notes.constants import (
    AUTO_TAGS,
    DEFAULT_FOLDER,
    DEFAULT_LIST_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    LOG_LEVEL,
)

# A front matter value is either a scalar string or an ordered list of strings.
FrontmatterValue = Union[str, list[str]]


class TagOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class SearchInField(str, Enum):
    FILENAME = "filename"
    TITLE = "title"
    CONTENT = "content"
    ALL = "all"


class SortBy(str, Enum):
    NAME = "name"
    DATE = "date"
    SIZE = "size"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NoteStyle(str, Enum):
    CONCISE = "concise"
    DETAILED = "detailed"
    ELI5 = "eli5"


@dataclass(frozen=True)
class NotesConfiguration:
    """Immutable server configuration, built once at startup."""

    vault_path: Path
    default_folder: str = DEFAULT_FOLDER
    auto_tags: tuple[str, ...] = AUTO_TAGS
    log_level: str = LOG_LEVEL

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "vault_path": str(self.vault_path),
            "default_folder": self.default_folder,
            "auto_tags": list(self.auto_tags),
            "log_level": self.log_level,
        }


@dataclass(frozen=True)
class ParsedNote:
    """Structure extracted from raw note text."""

    title: str
    frontmatter: Optional[dict[str, FrontmatterValue]]
    tags: list[str]


@dataclass(frozen=True)
class NoteStructure:
    """A single note together with its parsed structure."""

    path: str
    content: str
    title: str
    frontmatter: Optional[dict[str, FrontmatterValue]]
    tags: list[str]

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "content": self.content,
            "title": self.title,
            "frontmatter": self.frontmatter,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class SearchCriteria:
    """Request-scoped search parameters."""

    query: Optional[str] = None
    tags: Optional[list[str]] = None
    tag_operator: TagOperator = TagOperator.AND
    folder: Optional[str] = None
    search_in: SearchInField = SearchInField.CONTENT
    regex: Optional[str] = None
    include_content: bool = False
    limit: int = DEFAULT_SEARCH_LIMIT
    offset: int = 0


@dataclass(frozen=True)
class ListCriteria:
    """Request-scoped listing parameters."""

    folder: Optional[str] = None
    limit: int = DEFAULT_LIST_LIMIT
    offset: int = 0
    sort_by: SortBy = SortBy.NAME
    sort_order: SortOrder = SortOrder.ASC
    include_content: bool = False


@dataclass(frozen=True)
class ConversationNoteParams:
    """Structured input for a conversation summary note."""

    topic: str
    highlights: list[str]
    tags: list[str] = field(default_factory=list)
    folder: Optional[str] = None
    style: NoteStyle = NoteStyle.CONCISE


@dataclass
class EnrichedResult:
    """A note as returned by search and list operations."""

    path: str
    filename: str
    title: str
    tags: list[str]
    excerpt: str
    modified: datetime
    content: Optional[str] = None
    matched_fields: list[str] = field(default_factory=list)

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "path": self.path,
            "filename": self.filename,
            "title": self.title,
            "tags": list(self.tags),
            "excerpt": self.excerpt,
            "modified": self.modified.isoformat(),
            "matchedFields": list(self.matched_fields),
        }
        if self.content is not None:
            payload["content"] = self.content
        return payload


@dataclass
class ListResult:
    notes: list[EnrichedResult]
    total: int
    has_more: bool

    def as_payload(self) -> dict[str, Any]:
        return {
            "notes": [note.as_payload() for note in self.notes],
            "total": self.total,
            "hasMore": self.has_more,
        }


@dataclass(frozen=True)
class CreateNoteResult:
    success: bool
    path: Optional[str] = None
    error: Optional[str] = None

    def as_payload(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "path": self.path,
            "error": self.error,
        }
