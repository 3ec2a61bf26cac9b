"""SQLite adapter module - Local database storage implementation."""

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.project_repository import SqliteProjectRepository
from mcp_todo.adapters.sqlite.settings_repository import SqliteSettingsRepository
from mcp_todo.adapters.sqlite.todo_list_repository import SqliteTodoListRepository
from mcp_todo.adapters.sqlite.todo_repository import SqliteTodoRepository

__all__ = [
    "DatabaseConnection",
    "SqliteProjectRepository",
    "SqliteTodoListRepository",
    "SqliteTodoRepository",
    "SqliteSettingsRepository",
]
