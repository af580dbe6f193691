"""Pydantic input models for MCP tool validation.

This package defines Pydantic models that provide automatic input validation
for all MCP tools. Each model represents the input schema for one tool, with
field-level validation, type checking, and descriptive error messages.

Architecture:
- base: BaseToolInput plus shared path/tag/enum validation helpers
- note_models: Input models for note creation and structure retrieval
- search_models: Input models for search and listing operations

Usage:
    from obsidian_notes.models import SearchNotesInput, ListNotesInput
    from obsidian_notes.models import CreateConversationNoteInput, GetNoteStructureInput
"""

from .base import BaseToolInput, validate_relative_path
from .note_models import (
    CreateConversationNoteInput,
    GetNoteStructureInput,
)
from .search_models import (
    ListNotesInput,
    SearchNotesInput,
)

__all__ = [
    # Base
    "BaseToolInput",
    "validate_relative_path",
    # Note models
    "CreateConversationNoteInput",
    "GetNoteStructureInput",
    # Search models
    "ListNotesInput",
    "SearchNotesInput",
]
