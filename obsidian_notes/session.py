"""Resolution of the server runtime for a tool call."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from obsidian_notes.server import NotesRuntime


def get_runtime(ctx: Context) -> NotesRuntime:
    """Return the runtime built by the server lifespan.

    Args:
        ctx: The request context supplied by FastMCP.

    Returns:
        The :class:`NotesRuntime` holding configuration and vault storage.
    """
    return ctx.request_context.lifespan_context
