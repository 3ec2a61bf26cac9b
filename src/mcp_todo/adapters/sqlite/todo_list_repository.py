"""SQLite implementation of TodoListRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.utils import build_update_clause, row_to_dict
from mcp_todo.models import TodoList
from mcp_todo.repositories import TodoListRepository

_UPDATABLE_COLUMNS = {"name", "description"}


class SqliteTodoListRepository(TodoListRepository):
    """SQLite implementation of todo list repository.

    ``num_completed``, ``total_count`` and ``updated_at`` are never written
    here; the schema triggers own them.
    """

    def __init__(self, database: DatabaseConnection):
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.connection

    async def get(self, todo_list_id: int) -> TodoList | None:
        cursor = self.connection.execute(
            "SELECT * FROM todo_list WHERE id = ?", (todo_list_id,)
        )
        row = cursor.fetchone()
        return TodoList(**row_to_dict(row)) if row else None

    async def list_for_project(self, project_id: int) -> list[TodoList]:
        cursor = self.connection.execute(
            "SELECT * FROM todo_list WHERE project_id = ? ORDER BY name, id",
            (project_id,),
        )
        return [TodoList(**row_to_dict(row)) for row in cursor.fetchall()]

    async def create(
        self, project_id: int, name: str, description: str | None = None
    ) -> TodoList:
        cursor = self.connection.execute(
            "INSERT INTO todo_list (project_id, name, description) VALUES (?, ?, ?)",
            (project_id, name, description),
        )
        self.database.commit()

        todo_list = await self.get(cursor.lastrowid)
        if todo_list is None:
            raise sqlite3.DatabaseError(f"Failed to create todo list {name!r}")
        return todo_list

    async def update(self, todo_list_id: int, updates: dict[str, Any]) -> TodoList | None:
        unknown = set(updates) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update todo list columns: {sorted(unknown)}")

        if not updates:
            return await self.get(todo_list_id)

        set_clause, params = build_update_clause(updates)
        cursor = self.connection.execute(
            f"UPDATE todo_list SET {set_clause} WHERE id = ?",
            [*params, todo_list_id],
        )
        self.database.commit()

        if cursor.rowcount == 0:
            return None
        return await self.get(todo_list_id)

    async def delete(self, todo_list_id: int) -> bool:
        cursor = self.connection.execute(
            "DELETE FROM todo_list WHERE id = ?", (todo_list_id,)
        )
        self.database.commit()
        return cursor.rowcount > 0

    async def is_default_for_any_project(self, todo_list_id: int) -> bool:
        cursor = self.connection.execute(
            "SELECT 1 FROM project WHERE default_todo_list_id = ? LIMIT 1",
            (todo_list_id,),
        )
        return cursor.fetchone() is not None
