"""Migration 003: Scope the todo update triggers to data columns.

The list touch and statistics triggers used to fire on every UPDATE of a
todo, including the updated_at refresh issued by update_todo_timestamp, so
each write recounted its list twice. They now fire only when a column that
affects them changes.
"""

from __future__ import annotations

import sqlite3

from mcp_todo.adapters.sqlite import schema
from mcp_todo.adapters.sqlite.migrations.runner import Migration


class ScopeTodoUpdateTriggersMigration(Migration):
    """Recreate the todo update triggers with column lists."""

    @property
    def version(self) -> int:
        return 3

    @property
    def description(self) -> str:
        return "Fire todo list touch and statistics triggers only on data column updates"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("DROP TRIGGER IF EXISTS update_todo_list_on_todo_update")
        connection.execute("DROP TRIGGER IF EXISTS update_todo_list_stats_on_update")
        connection.execute(schema.CREATE_TOUCH_LIST_ON_TODO_UPDATE_TRIGGER)
        connection.execute(schema.CREATE_STATS_ON_TODO_UPDATE_TRIGGER)


scope_todo_update_triggers_migration = ScopeTodoUpdateTriggersMigration()
