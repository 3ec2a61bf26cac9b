"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.utils import build_update_clause, row_to_dict
from mcp_todo.models import Project
from mcp_todo.repositories import ProjectRepository

_UPDATABLE_COLUMNS = {"name", "default_todo_list_id"}


class SqliteProjectRepository(ProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, database: DatabaseConnection):
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.connection

    async def find_by_location(self, location: str) -> Project | None:
        cursor = self.connection.execute(
            "SELECT * FROM project WHERE location = ? LIMIT 1",
            (location,),
        )
        row = cursor.fetchone()
        return Project(**row_to_dict(row)) if row else None

    async def get(self, project_id: int) -> Project | None:
        cursor = self.connection.execute(
            "SELECT * FROM project WHERE id = ?", (project_id,)
        )
        row = cursor.fetchone()
        return Project(**row_to_dict(row)) if row else None

    async def create(self, name: str, location: str) -> Project:
        cursor = self.connection.execute(
            "INSERT INTO project (name, location) VALUES (?, ?)",
            (name, location),
        )
        self.database.commit()

        project = await self.get(cursor.lastrowid)
        if project is None:
            raise sqlite3.DatabaseError(f"Failed to create project at {location}")
        return project

    async def update(self, project_id: int, updates: dict[str, Any]) -> Project | None:
        unknown = set(updates) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update project columns: {sorted(unknown)}")

        if not updates:
            return await self.get(project_id)

        set_clause, params = build_update_clause(updates)
        cursor = self.connection.execute(
            f"UPDATE project SET {set_clause} WHERE id = ?",
            [*params, project_id],
        )
        self.database.commit()

        if cursor.rowcount == 0:
            return None
        return await self.get(project_id)
