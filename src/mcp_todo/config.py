"""Configuration management for the mcp-todo core."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mcp_todo.utils.logger import get_logger

APP_DIR_NAME = "mcp-todo"
DATA_DIR_ENV_VAR = "MCP_TODO_DATA_DIR"
DATABASE_FILENAME = "todos.db"
CONFIG_FILENAME = "config.json"

# Checked in order at every directory level; the first hit wins.
PROJECT_INDICATORS: tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    "package.json",
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "build.gradle.kts",
    "composer.json",
    "Gemfile",
    "CMakeLists.txt",
    "Makefile",
)


def get_data_directory() -> Path:
    """Resolve the directory holding the SQLite database.

    ``$MCP_TODO_DATA_DIR`` wins when set; otherwise the platform data
    directory is used (``$XDG_DATA_HOME/mcp-todo`` on Linux).
    """
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(user_data_dir(APP_DIR_NAME))


def get_database_path() -> Path:
    """Full path to the SQLite database file."""
    return get_data_directory() / DATABASE_FILENAME


class StoreConfig(BaseModel):
    """Core configuration.

    Attributes:
        db_path: Database file; ``None`` means ``get_database_path()``
        use_migrations: Create the schema through the migration runner.
            When False the equivalent DDL is issued directly.
        default_list_name: Name of the list bootstrap creates for a project
        default_list_description: Description of that list
        fallback_project_name: Project name when the location has no basename
        project_indicators: Marker files/directories identifying a project root
    """

    db_path: str | None = None
    use_migrations: bool = Field(default=True)
    default_list_name: str = Field(default="Default")
    default_list_description: str | None = Field(
        default="Default todo list for this project"
    )
    fallback_project_name: str = Field(default="project")
    project_indicators: list[str] = Field(
        default_factory=lambda: list(PROJECT_INDICATORS)
    )

    @property
    def database_path(self) -> Path:
        if self.db_path:
            return Path(self.db_path)
        return get_database_path()


def get_config_path() -> Path:
    return Path(user_config_dir(APP_DIR_NAME)) / CONFIG_FILENAME


def load_store_config(config_path: Path | None = None) -> StoreConfig:
    """Load configuration from the JSON file, falling back to defaults."""
    path = config_path or get_config_path()
    if not path.exists():
        return StoreConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return StoreConfig(**data)
    except (OSError, json.JSONDecodeError, TypeError, PydanticValidationError) as e:
        get_logger().warning("ignoring unreadable config %s: %s", path, e)
        return StoreConfig()


@lru_cache(maxsize=1)
def get_store_config() -> StoreConfig:
    """Get the cached configuration for this process."""
    return load_store_config()
