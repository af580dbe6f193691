"""Pydantic input models for search and listing operations.

This module defines input models for discovery tools:
- Search notes by text, regex, tags and folder
- List notes with sorting and pagination
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from obsidian_notes.constants import DEFAULT_LIST_LIMIT, DEFAULT_SEARCH_LIMIT
from obsidian_notes.data_models import (
    ListCriteria,
    SearchCriteria,
    SearchInField,
    SortBy,
    SortOrder,
    TagOperator,
)

from .base import BaseToolInput, clean_tags, normalize_choice, validate_relative_path


class SearchNotesInput(BaseToolInput):
    """Input model for search_notes tool.

    Combines free-text, regex and tag filters within an optional folder.
    All filters are optional; with none given every note matches.

    Examples:
        >>> SearchNotesInput(query="machine learning", folder="Research")
        >>> SearchNotesInput(tags=["python", "javascript"], tagOperator="OR")
    """

    query: Optional[str] = Field(
        None,
        description=(
            "Text to search in notes (case-insensitive). "
            "Searches content by default unless searchIn is specified."
        )
    )

    tags: Optional[list[str]] = Field(
        None,
        description=(
            "Tags to filter notes by. Use tagOperator to specify AND or OR logic. "
            "Examples: ['python'], ['obsidian', 'mcp']"
        )
    )

    tag_operator: TagOperator = Field(
        TagOperator.AND,
        alias="tagOperator",
        description=(
            "How to combine multiple tags: AND (all tags must be present) "
            "or OR (any tag can be present). Default: AND"
        )
    )

    folder: Optional[str] = Field(
        None,
        description=(
            "Folder path to filter notes. Only searches within this folder "
            "and its subfolders."
        )
    )

    search_in: SearchInField = Field(
        SearchInField.CONTENT,
        alias="searchIn",
        description="Where to search for the query: filename, title, content or all. Default: content"
    )

    regex: Optional[str] = Field(
        None,
        description=(
            "Regular expression matched case-insensitively against content, "
            "then filename. A note passes the text stage when either the "
            "query or the regex matches."
        )
    )

    include_content: bool = Field(
        False,
        alias="includeContent",
        description="Whether to include full note content in results. Default: false"
    )

    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=1,
        description="Maximum number of results. Default: 10"
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of results to skip for pagination. Default: 0"
    )

    @field_validator('query', 'regex')
    @classmethod
    def validate_optional_text(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank strings as absent."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Strip whitespace from each tag and filter out empty strings."""
        return clean_tags(v)

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: Optional[str]) -> Optional[str]:
        """Validate folder path is relative and free of traversal."""
        return validate_relative_path(v, "Folder path")

    @field_validator('tag_operator', mode='before')
    @classmethod
    def normalize_tag_operator(cls, v: Any) -> Any:
        return normalize_choice(v, upper=True)

    @field_validator('search_in', mode='before')
    @classmethod
    def normalize_search_in(cls, v: Any) -> Any:
        return normalize_choice(v)

    def to_criteria(self) -> SearchCriteria:
        """Convert the validated input into search criteria."""
        return SearchCriteria(
            query=self.query,
            tags=self.tags,
            tag_operator=self.tag_operator,
            folder=self.folder,
            search_in=self.search_in,
            regex=self.regex,
            include_content=self.include_content,
            limit=self.limit,
            offset=self.offset,
        )

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {"query": "machine learning", "folder": "Research"},
                {"tags": ["python", "javascript"], "tagOperator": "OR"},
                {"regex": "[a-z0-9._%+-]+@[a-z0-9.-]+\\.[a-z]{2,}", "searchIn": "all"},
                {"folder": "Projects", "includeContent": True, "limit": 20, "offset": 20}
            ]
        }


class ListNotesInput(BaseToolInput):
    """Input model for list_notes tool.

    Lists every note (optionally within a folder) with metadata, sorted and
    paginated.

    Examples:
        >>> ListNotesInput(limit=20, sortBy="date", sortOrder="desc")
        >>> ListNotesInput(folder="Projects")
    """

    folder: Optional[str] = Field(
        None,
        description="Folder path to filter notes. Lists all notes if not specified."
    )

    limit: int = Field(
        DEFAULT_LIST_LIMIT,
        ge=1,
        description="Maximum number of results. Default: 50"
    )

    offset: int = Field(
        0,
        ge=0,
        description="Number of results to skip for pagination. Default: 0"
    )

    sort_by: SortBy = Field(
        SortBy.NAME,
        alias="sortBy",
        description=(
            "Field to sort results by: 'name' (filename), 'date' (modified time) "
            "or 'size' (length of the 200-character excerpt). Default: name"
        )
    )

    sort_order: SortOrder = Field(
        SortOrder.ASC,
        alias="sortOrder",
        description="Sort order: 'asc' or 'desc'. Default: asc"
    )

    include_content: bool = Field(
        False,
        alias="includeContent",
        description="Whether to include full note content. Default: false"
    )

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: Optional[str]) -> Optional[str]:
        """Validate folder path is relative and free of traversal."""
        return validate_relative_path(v, "Folder path")

    @field_validator('sort_by', 'sort_order', mode='before')
    @classmethod
    def normalize_sorting(cls, v: Any) -> Any:
        return normalize_choice(v)

    def to_criteria(self) -> ListCriteria:
        """Convert the validated input into listing criteria."""
        return ListCriteria(
            folder=self.folder,
            limit=self.limit,
            offset=self.offset,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            include_content=self.include_content,
        )

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {"limit": 20, "sortBy": "date", "sortOrder": "desc"},
                {"folder": "Projects", "includeContent": False}
            ]
        }
