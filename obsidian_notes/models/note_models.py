"""Pydantic input models for note creation and retrieval.

This module defines input models for note operations:
- Create a note from a conversation summary
- Read a note's parsed structure
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from obsidian_notes.constants import NOTE_EXTENSION
from obsidian_notes.data_models import ConversationNoteParams, NoteStyle

from .base import BaseToolInput, clean_tags, normalize_choice, validate_relative_path


class CreateConversationNoteInput(BaseToolInput):
    """Input model for create_conversation_note tool.

    Creates a note from a topic and a list of highlights, rendered in one of
    three styles. The folder is created when missing.

    Examples:
        >>> CreateConversationNoteInput(topic="Git rebase", highlights=["Use --onto"])
        >>> CreateConversationNoteInput(
        ...     topic="Transformers", highlights=["Attention weighs tokens"], style="eli5"
        ... )
    """

    topic: str = Field(
        min_length=1,
        description="Clear title summarizing the subject",
        examples=["Python packaging", "Git rebase workflow"]
    )

    highlights: list[str] = Field(
        description=(
            "Key points to save. For concise: short phrases or single sentences. "
            "For detailed: complete explanatory paragraphs."
        )
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Tags to categorize the note (optional)"
    )

    folder: Optional[str] = Field(
        None,
        description="Specific folder in vault to save the note (optional)"
    )

    style: NoteStyle = Field(
        NoteStyle.CONCISE,
        description=(
            "Note format style. concise: bullet points. detailed: full paragraphs. "
            "eli5: simple explanations. Default: concise"
        )
    )

    @field_validator('topic')
    @classmethod
    def validate_topic(cls, v: str) -> str:
        """Validate topic is not blank."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(
                "Topic cannot be empty. "
                "Provide a short title summarizing the conversation."
            )
        return cleaned

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v: Any) -> Any:
        """Treat a missing tag list as empty and drop blank tags."""
        if v is None:
            return []
        if isinstance(v, list) and all(isinstance(tag, str) for tag in v):
            return clean_tags(v)
        return v

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: Optional[str]) -> Optional[str]:
        """Validate folder path is relative and free of traversal."""
        return validate_relative_path(v, "Folder path")

    @field_validator('style', mode='before')
    @classmethod
    def normalize_style(cls, v: Any) -> Any:
        if v is None:
            return NoteStyle.CONCISE
        return normalize_choice(v)

    def to_params(self) -> ConversationNoteParams:
        """Convert the validated input into note parameters."""
        return ConversationNoteParams(
            topic=self.topic,
            highlights=list(self.highlights),
            tags=list(self.tags),
            folder=self.folder,
            style=self.style,
        )

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {
                    "topic": "Git rebase workflow",
                    "highlights": ["Rebase feature branches onto main", "Use --autosquash"],
                    "tags": ["git"],
                    "style": "concise"
                },
                {
                    "topic": "How attention works",
                    "highlights": ["Each word looks at the other words to decide what matters."],
                    "folder": "Learning",
                    "style": "eli5"
                }
            ]
        }


class GetNoteStructureInput(BaseToolInput):
    """Input model for get_note_structure tool.

    Examples:
        >>> GetNoteStructureInput(note_path="MCP Notes/2024-01-01 - Git.md")
    """

    note_path: str = Field(
        min_length=1,
        description=(
            "Relative path of the note in the vault, including the .md extension. "
            "Example: 'MCP Notes/2024-01-01 - Git.md'"
        )
    )

    @field_validator('note_path')
    @classmethod
    def validate_note_path(cls, v: str) -> str:
        """Validate note path is relative, safe and non-empty.

        A missing ``.md`` suffix is added for convenience.
        """
        cleaned = validate_relative_path(v, "Note path")
        if not cleaned:
            raise ValueError(
                "Note path cannot be empty. "
                "Provide a path like 'MCP Notes/2024-01-01 - Git.md'."
            )
        if not cleaned.lower().endswith(NOTE_EXTENSION):
            cleaned = f"{cleaned}{NOTE_EXTENSION}"
        return cleaned

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {"note_path": "MCP Notes/2024-01-01 - Git rebase workflow.md"},
                {"note_path": "Projects/Roadmap.md"}
            ]
        }
