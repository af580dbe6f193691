"""FastMCP server initialization and tool registration."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from mcp.server.fastmcp import FastMCP

from obsidian_notes.config import load_notes_configuration
from obsidian_notes.core.vault_operations import VaultStorage
from obsidian_notes.data_models import NotesConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotesRuntime:
    """Per-server state handed to every tool call."""

    config: NotesConfiguration
    storage: VaultStorage

    @classmethod
    def from_config(cls, config: NotesConfiguration) -> "NotesRuntime":
        return cls(config=config, storage=VaultStorage(config.vault_path))


# Configuration loaded by run_server before the transport starts
_startup_config: Optional[NotesConfiguration] = None


@asynccontextmanager
async def notes_lifespan(server: FastMCP) -> AsyncIterator[NotesRuntime]:
    """Expose the runtime built from the startup configuration to tools.

    When the server is launched without ``run_server`` (e.g. by an MCP
    inspector importing ``mcp``), the configuration is loaded here instead.
    """
    config = _startup_config or load_notes_configuration()
    logger.info("Serving notes from vault %s", config.vault_path)
    yield NotesRuntime.from_config(config)


# Initialize FastMCP server
mcp = FastMCP("obsidian_notes", lifespan=notes_lifespan)

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def configure_logging(level: str) -> None:
    """Apply ``level`` to the root logger.

    FastMCP installs its own root handler when ``mcp`` is created, which turns
    a later ``basicConfig`` into a no-op, so the level is set directly.
    """
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)


def run_server() -> None:
    """Load configuration once and start the MCP server with stdio transport."""
    global _startup_config

    try:
        config = load_notes_configuration()
    except (ValueError, FileNotFoundError) as exc:
        configure_logging("ERROR")
        logger.error("%s", exc)
        sys.exit(1)

    configure_logging(config.log_level)
    _startup_config = config
    logger.info("Starting Obsidian Notes MCP Server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
