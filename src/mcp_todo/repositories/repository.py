"""Repository abstraction layer for mcp-todo.

Abstract base classes (ports) for every persisted entity. The SQLite
adapters in ``mcp_todo.adapters.sqlite`` implement them; services depend
only on these contracts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mcp_todo.models import Project, Setting, Todo, TodoList


class ProjectRepository(ABC):
    """Persistence operations for projects."""

    @abstractmethod
    async def find_by_location(self, location: str) -> Project | None:
        """Return the project bound to ``location`` or None."""

    @abstractmethod
    async def get(self, project_id: int) -> Project | None:
        """Return a project by id or None."""

    @abstractmethod
    async def create(self, name: str, location: str) -> Project:
        """Insert a project without a default list.

        Raises:
            sqlite3.IntegrityError: If a project already uses ``location``
        """

    @abstractmethod
    async def update(self, project_id: int, updates: dict[str, Any]) -> Project | None:
        """Apply a partial update; returns None when no row matches."""


class TodoListRepository(ABC):
    """Persistence operations for todo lists."""

    @abstractmethod
    async def get(self, todo_list_id: int) -> TodoList | None:
        """Return a todo list by id or None."""

    @abstractmethod
    async def list_for_project(self, project_id: int) -> list[TodoList]:
        """Return every list owned by a project, ordered by name."""

    @abstractmethod
    async def create(
        self, project_id: int, name: str, description: str | None = None
    ) -> TodoList:
        """Insert a list owned by ``project_id``."""

    @abstractmethod
    async def update(self, todo_list_id: int, updates: dict[str, Any]) -> TodoList | None:
        """Apply a partial update; returns None when no row matches."""

    @abstractmethod
    async def delete(self, todo_list_id: int) -> bool:
        """Delete a list (its todos cascade); False when no row matched."""

    @abstractmethod
    async def is_default_for_any_project(self, todo_list_id: int) -> bool:
        """True when some project uses the list as its default."""


class TodoRepository(ABC):
    """Persistence operations for todos."""

    @abstractmethod
    async def get(self, todo_id: int) -> Todo | None:
        """Return a todo by id or None."""

    @abstractmethod
    async def list_by_list_id(self, todo_list_id: int) -> list[Todo]:
        """Return the todos of a list in id order."""

    @abstractmethod
    async def insert(
        self,
        todo_id: int,
        todo_list_id: int,
        content: str,
        status: str,
        priority: str,
    ) -> Todo:
        """Insert a todo with a caller-chosen id."""

    @abstractmethod
    async def update(self, todo_id: int, updates: dict[str, Any]) -> Todo | None:
        """Apply a partial update; returns None when no row matches."""

    @abstractmethod
    async def delete(self, todo_id: int) -> bool:
        """Delete a todo; False when no row matched."""


class SettingsRepository(ABC):
    """Key/value settings store."""

    @abstractmethod
    async def get(self, key: str) -> Setting | None:
        """Return a setting or None."""

    @abstractmethod
    async def set(self, key: str, value: str) -> Setting:
        """Insert or replace a setting."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a setting; False when absent."""

    @abstractmethod
    async def list_all(self) -> list[Setting]:
        """Return every setting ordered by key."""
