"""Shared validation helpers and base model for MCP tool inputs.

Every tool input model inherits from :class:`BaseToolInput`, which accepts
both the snake_case field names and the camelCase aliases used by MCP
clients. Path-like fields are checked with :func:`validate_relative_path`.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class BaseToolInput(BaseModel):
    """Base model for tool inputs accepting field names or their aliases."""

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True


def validate_relative_path(value: Optional[str], label: str) -> Optional[str]:
    """Validate a vault-relative path for safety and format.

    Enforces:
    - No path traversal attempts (.., .)
    - Relative path only (no absolute paths)

    Args:
        value: The path to validate (``None`` passes through)
        label: Human-readable field name used in error messages

    Returns:
        The stripped path, or None when the value is None or blank

    Raises:
        ValueError: If the path is absolute or contains traversal segments
    """
    if value is None:
        return None

    cleaned = value.strip().replace("\\", "/")
    if not cleaned:
        return None

    if cleaned.startswith("/"):
        raise ValueError(
            f"{label} must be relative to the vault root. "
            "Do not start with '/'. "
            f"Invalid path: '{cleaned}'"
        )

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            f"{label} cannot contain '.' or '..' path segments. "
            "These are not allowed for security reasons. "
            f"Invalid path: '{cleaned}'"
        )

    return cleaned


def clean_tags(value: Optional[list[str]]) -> Optional[list[str]]:
    """Strip each tag and drop empty entries."""
    if value is None:
        return None
    return [tag.strip() for tag in value if tag.strip()]


def normalize_choice(value: Any, upper: bool = False) -> Any:
    """Case-normalize a string enum value before enum validation."""
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned.upper() if upper else cleaned.lower()
    return value
