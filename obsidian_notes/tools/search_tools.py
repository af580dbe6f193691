"""Search and discovery tools for Obsidian notes.

This module contains the MCP tool wrappers for discovery operations:
- search_notes: Filter notes by text, regex, tags and folder
- list_notes: Browse notes with sorting and pagination
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_notes.server import mcp
from obsidian_notes.session import get_runtime
from obsidian_notes.models import ListNotesInput, SearchNotesInput
from obsidian_notes.core.search_operations import search_notes as search_notes_core
from obsidian_notes.core.note_operations import list_notes as list_notes_core

logger = logging.getLogger(__name__)

# ==============================================================================
# DISCOVERY & SEARCH TOOLS
# ==============================================================================


@mcp.tool(
    annotations={
        "title": "Search Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_notes(
    input: SearchNotesInput,
    ctx: Context,
) -> dict[str, Any]:
    """Advanced search for notes in the Obsidian vault.

    Search by filename, title (H1), content, or all fields; filter by folder;
    filter by tags with AND/OR logic; match a regular expression; choose
    whether to return full content or metadata only.

    The input is validated automatically by Pydantic, providing detailed
    error messages for invalid inputs before any processing occurs.

    Args:
        input (SearchNotesInput): Validated input containing:
            - query (str, optional): Case-insensitive text to find
            - tags (list[str], optional): Tags to filter by
            - tagOperator (str): "AND" (all tags) or "OR" (any tag). Default: AND
            - folder (str, optional): Restrict to this folder and its subfolders
            - searchIn (str): "filename", "title", "content" or "all". Default: content
            - regex (str, optional): Pattern matched against content, then filename
            - includeContent (bool): Include full note content. Default: false
            - limit (int): Maximum results. Default: 10
            - offset (int): Results to skip. Default: 0

    Returns:
        {
            "count": int,
            "results": [
                {
                    "path": str,
                    "filename": str,
                    "title": str,
                    "tags": [str, ...],
                    "excerpt": str,          # First 200 characters
                    "modified": str,         # ISO timestamp
                    "matchedFields": [str, ...],
                    "content": str           # Only with includeContent
                },
                ...
            ]
        }

    Examples:
        - Notes about "machine learning" in Research: query="machine learning", folder="Research"
        - Notes tagged python OR javascript: tags=["python", "javascript"], tagOperator="OR"
        - Notes containing an email address: regex="[a-z0-9._%+-]+@[a-z0-9.-]+\\.[a-z]{2,}"
        - Browse a folder with content: folder="Projects", includeContent=true

    Error Handling:
        - ValidationError: Path traversal in folder, limit < 1, offset < 0, unknown enum value
        - Invalid regex → Ignored (logged), other filters still apply
        - Unreadable files → Skipped
    """
    runtime = get_runtime(ctx)
    results = await search_notes_core(runtime.storage, input.to_criteria())
    logger.info("search_notes returned %d results", len(results))
    return {
        "count": len(results),
        "results": [result.as_payload() for result in results],
    }


@mcp.tool(
    annotations={
        "title": "List Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_notes(
    input: ListNotesInput,
    ctx: Context,
) -> dict[str, Any]:
    """Browse and list notes in the Obsidian vault with metadata.

    Lists all notes or those in one folder, sorted by name, modification
    date or size, with pagination for large vaults.

    Args:
        input (ListNotesInput): Validated input containing:
            - folder (str, optional): Folder to list. Whole vault if omitted
            - limit (int): Maximum results. Default: 50
            - offset (int): Results to skip. Default: 0
            - sortBy (str): "name", "date" or "size". Default: name
            - sortOrder (str): "asc" or "desc". Default: asc
            - includeContent (bool): Include full note content. Default: false

    Returns:
        {
            "notes": [...],     # Same entries as search_notes results
            "total": int,       # Notes before pagination
            "hasMore": bool     # offset + limit < total
        }

    Examples:
        - 20 most recent notes: limit=20, sortBy="date", sortOrder="desc"
        - Notes in Projects: folder="Projects"
        - Next page: offset=<previous offset + limit>

    Error Handling:
        - ValidationError: Path traversal in folder, limit < 1, offset < 0
        - Missing folder → Returns {"notes": [], "total": 0, "hasMore": false}
    """
    runtime = get_runtime(ctx)
    result = await list_notes_core(runtime.storage, input.to_criteria())
    return result.as_payload()
