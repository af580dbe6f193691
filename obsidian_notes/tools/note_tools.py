"""Note management MCP tools.

This module provides MCP tool wrappers for note operations:
- Create notes from conversation summaries
- Read a note's parsed structure

All tools delegate to core operations in obsidian_notes.core.note_operations.
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_notes.server import mcp
from obsidian_notes.session import get_runtime
from obsidian_notes.models import CreateConversationNoteInput, GetNoteStructureInput
from obsidian_notes.core.note_operations import (
    create_conversation_note as create_conversation_note_core,
    get_note_structure as get_note_structure_core,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# CREATE OPERATIONS
# ==============================================================================

@mcp.tool()
async def create_conversation_note(
    input: CreateConversationNoteInput,
    ctx: Context,
) -> dict[str, Any]:
    """Create a note in Obsidian from a conversation, in one of three styles.

    Styles:
        - concise (default): Brief bullet points. Use for quick references,
          commands, syntax, or factual information.
        - detailed: Full paragraphs. Use for concepts that need explanation.
        - eli5: Simple language and analogies for complex topics.

    The note is saved as "<date> - <topic>.md" in the requested folder
    (default "MCP Notes", created if missing). If that name is taken a
    timestamp is added to it.

    Args:
        input (CreateConversationNoteInput): Validated input containing:
            - topic (str): Clear title summarizing the subject
            - highlights (list[str]): Key points to save
            - tags (list[str], optional): Tags to categorize the note
            - folder (str, optional): Folder in vault to save the note
            - style (str, optional): "concise", "detailed" or "eli5"

    Returns:
        {"success": bool, "path": str | None, "error": str | None}

    Examples:
        - Use when: User asks to save or summarize the conversation
        - Use style="detailed": For explanations worth rereading later
        - Don't use: Editing an existing note

    Error Handling:
        - ValidationError: Empty topic or path traversal in folder
        - Vault missing or write failure → {"success": false, "error": "..."}
    """
    runtime = get_runtime(ctx)
    result = await create_conversation_note_core(
        runtime.storage,
        input.to_params(),
        default_folder=runtime.config.default_folder,
        auto_tags=runtime.config.auto_tags,
    )
    if not result.success:
        logger.warning("Note creation for topic '%s' failed: %s", input.topic, result.error)
    return result.as_payload()


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

@mcp.tool(
    annotations={
        "title": "Get Note Structure",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def get_note_structure(
    input: GetNoteStructureInput,
    ctx: Context,
) -> dict[str, Any]:
    """Get the structure and content of a specific note.

    Args:
        input (GetNoteStructureInput): Validated input containing:
            - note_path (str): Relative path of the note in the vault

    Returns (found):
        {
            "found": true,
            "path": str,
            "content": str,
            "title": str,            # First H1 or "Untitled"
            "frontmatter": dict | None,
            "tags": [str, ...]       # Front matter tags plus inline #tags
        }

    Returns (missing):
        {"found": false, "path": str}

    Error Handling:
        - ValidationError: Empty path, absolute path or traversal attempt
        - Note not found or unreadable → {"found": false}
    """
    runtime = get_runtime(ctx)
    structure = await get_note_structure_core(runtime.storage, input.note_path)
    if structure is None:
        return {"found": False, "path": input.note_path}
    return {"found": True, **structure.as_payload()}
