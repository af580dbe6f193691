"""Module-level constants for the Obsidian notes MCP server."""

# Configuration
VAULT_PATH_ENV = "OBSIDIAN_VAULT_PATH"
CONFIG_PATH_ENV = "OBSIDIAN_NOTES_CONFIG"
DEFAULT_FOLDER = "MCP Notes"
AUTO_TAGS = ("mcp",)

# Notes
NOTE_EXTENSION = ".md"
UNTITLED = "Untitled"
EXCERPT_LENGTH = 200
MAX_FILENAME_TOPIC_LENGTH = 100
INVALID_FILENAME_CHARS = '<>:"/\\|?*'

# Limits
READ_BATCH_SIZE = 50  # Bounds concurrent file reads per operation
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LIST_LIMIT = 50

# Logging
LOG_LEVEL = "INFO"
