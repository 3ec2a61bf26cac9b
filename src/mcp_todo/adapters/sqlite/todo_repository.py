"""SQLite implementation of TodoRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.utils import build_update_clause, row_to_dict
from mcp_todo.models import Todo
from mcp_todo.repositories import TodoRepository

_UPDATABLE_COLUMNS = {"content", "status", "priority", "todo_list_id"}


class SqliteTodoRepository(TodoRepository):
    """SQLite implementation of todo repository."""

    def __init__(self, database: DatabaseConnection):
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.connection

    async def get(self, todo_id: int) -> Todo | None:
        cursor = self.connection.execute("SELECT * FROM todo WHERE id = ?", (todo_id,))
        row = cursor.fetchone()
        return Todo(**row_to_dict(row)) if row else None

    async def list_by_list_id(self, todo_list_id: int) -> list[Todo]:
        cursor = self.connection.execute(
            "SELECT * FROM todo WHERE todo_list_id = ? ORDER BY id",
            (todo_list_id,),
        )
        return [Todo(**row_to_dict(row)) for row in cursor.fetchall()]

    async def insert(
        self,
        todo_id: int,
        todo_list_id: int,
        content: str,
        status: str,
        priority: str,
    ) -> Todo:
        self.connection.execute(
            """INSERT INTO todo (id, todo_list_id, content, status, priority)
               VALUES (?, ?, ?, ?, ?)""",
            (todo_id, todo_list_id, content, status, priority),
        )
        self.database.commit()

        todo = await self.get(todo_id)
        if todo is None:
            raise sqlite3.DatabaseError(f"Failed to create todo {todo_id}")
        return todo

    async def update(self, todo_id: int, updates: dict[str, Any]) -> Todo | None:
        unknown = set(updates) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update todo columns: {sorted(unknown)}")

        if not updates:
            return await self.get(todo_id)

        set_clause, params = build_update_clause(updates)
        cursor = self.connection.execute(
            f"UPDATE todo SET {set_clause} WHERE id = ?",
            [*params, todo_id],
        )
        self.database.commit()

        if cursor.rowcount == 0:
            return None
        return await self.get(todo_id)

    async def delete(self, todo_id: int) -> bool:
        cursor = self.connection.execute("DELETE FROM todo WHERE id = ?", (todo_id,))
        self.database.commit()
        return cursor.rowcount > 0
