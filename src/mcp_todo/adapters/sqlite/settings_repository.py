"""SQLite implementation of SettingsRepository."""

from __future__ import annotations

import sqlite3

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.utils import row_to_dict
from mcp_todo.models import Setting
from mcp_todo.repositories import SettingsRepository


class SqliteSettingsRepository(SettingsRepository):
    """Key/value settings stored in the ``settings`` table."""

    def __init__(self, database: DatabaseConnection):
        self.database = database

    @property
    def connection(self) -> sqlite3.Connection:
        return self.database.connection

    async def get(self, key: str) -> Setting | None:
        cursor = self.connection.execute(
            "SELECT key, value FROM settings WHERE key = ?", (key,)
        )
        row = cursor.fetchone()
        return Setting(**row_to_dict(row)) if row else None

    async def set(self, key: str, value: str) -> Setting:
        setting = Setting(key=key, value=value)
        self.connection.execute(
            """INSERT INTO settings (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
            (setting.key, setting.value),
        )
        self.database.commit()
        return setting

    async def delete(self, key: str) -> bool:
        cursor = self.connection.execute("DELETE FROM settings WHERE key = ?", (key,))
        self.database.commit()
        return cursor.rowcount > 0

    async def list_all(self) -> list[Setting]:
        cursor = self.connection.execute("SELECT key, value FROM settings ORDER BY key")
        return [Setting(**row_to_dict(row)) for row in cursor.fetchall()]
