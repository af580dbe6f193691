"""Obsidian Notes MCP Server

Conversation note creation, search and listing over an Obsidian vault via
Model Context Protocol.
"""

from obsidian_notes.config import load_notes_configuration
from obsidian_notes.data_models import (
    NotesConfiguration,
    SearchCriteria,
    ListCriteria,
    ConversationNoteParams,
)
from obsidian_notes.server import NotesRuntime, mcp, run_server

# Import tools to register them with the MCP server
from obsidian_notes import tools  # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "load_notes_configuration",
    "NotesConfiguration",
    "SearchCriteria",
    "ListCriteria",
    "ConversationNoteParams",
    "NotesRuntime",
    "mcp",
    "run_server",
]
