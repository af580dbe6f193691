"""Configuration loading for the notes server."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml

from obsidian_notes.constants import (
    AUTO_TAGS,
    CONFIG_PATH_ENV,
    DEFAULT_FOLDER,
    LOG_LEVEL,
    VAULT_PATH_ENV,
)
from obsidian_notes.data_models import NotesConfiguration

logger = logging.getLogger(__name__)


def _load_overrides(config_path: Path) -> dict[str, Any]:
    """Read optional settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        The validated override mapping (possibly empty).

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file does not contain the expected structure.
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Notes configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Notes configuration must be a mapping of settings")

    overrides: dict[str, Any] = {}

    default_folder = raw_config.get("default_folder")
    if default_folder is not None:
        if not isinstance(default_folder, str) or not default_folder.strip():
            raise ValueError("'default_folder' must be a non-empty string")
        overrides["default_folder"] = default_folder.strip()

    auto_tags = raw_config.get("auto_tags")
    if auto_tags is not None:
        if not isinstance(auto_tags, list) or not all(isinstance(tag, str) for tag in auto_tags):
            raise ValueError("'auto_tags' must be a list of strings")
        overrides["auto_tags"] = tuple(tag.strip() for tag in auto_tags if tag.strip())

    log_level = raw_config.get("log_level")
    if log_level is not None:
        if not isinstance(log_level, str) or not log_level.strip():
            raise ValueError("'log_level' must be a non-empty string")
        level_name = log_level.strip().upper()
        if not isinstance(logging.getLevelName(level_name), int):
            raise ValueError(f"'log_level' must be a logging level name, got '{log_level}'")
        overrides["log_level"] = level_name

    return overrides


def load_notes_configuration(environ: Optional[Mapping[str, str]] = None) -> NotesConfiguration:
    """Build the server configuration from the environment.

    The vault root comes from ``OBSIDIAN_VAULT_PATH``. When
    ``OBSIDIAN_NOTES_CONFIG`` names a YAML file, its ``default_folder``,
    ``auto_tags`` and ``log_level`` keys override the defaults.

    Args:
        environ: Mapping to read variables from. Defaults to ``os.environ``.

    Returns:
        A frozen :class:`NotesConfiguration`.

    Raises:
        ValueError: If the vault path is missing or the YAML file is malformed.
        FileNotFoundError: If the YAML file named by the environment is missing.
    """
    env = os.environ if environ is None else environ

    raw_path = env.get(VAULT_PATH_ENV, "")
    if not raw_path.strip():
        raise ValueError(f"{VAULT_PATH_ENV} not configured")

    vault_path = Path(raw_path.strip()).expanduser().resolve(strict=False)

    settings: dict[str, Any] = {
        "default_folder": DEFAULT_FOLDER,
        "auto_tags": AUTO_TAGS,
        "log_level": LOG_LEVEL,
    }

    config_file = env.get(CONFIG_PATH_ENV, "").strip()
    if config_file:
        settings.update(_load_overrides(Path(config_file).expanduser()))

    if not vault_path.is_dir():
        logger.warning("Vault path %s does not exist or is not a directory", vault_path)

    return NotesConfiguration(vault_path=vault_path, **settings)
