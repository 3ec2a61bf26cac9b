"""Repository interfaces for mcp-todo.

Abstract base classes defining the persistence contracts ("Ports").

Implementations (Adapters) are in:
- mcp_todo.adapters.sqlite (local storage)
"""

from .repository import (
    ProjectRepository,
    SettingsRepository,
    TodoListRepository,
    TodoRepository,
)

__all__ = [
    "ProjectRepository",
    "TodoListRepository",
    "TodoRepository",
    "SettingsRepository",
]
