"""Migration 002: Todo list statistics and default list ownership.

Adds the triggers that keep todo_list.num_completed / total_count in sync
with the todo rows, and the guard that a project's default list is one of
its own lists. Existing rows are recounted once so stats are correct from
the start.
"""

from __future__ import annotations

import sqlite3

from mcp_todo.adapters.sqlite import schema
from mcp_todo.adapters.sqlite.migrations.runner import Migration


class TodoListStatsMigration(Migration):
    """Add statistics triggers and the default list ownership guard."""

    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add todo list statistics triggers and default list ownership check"

    def up(self, connection: sqlite3.Connection) -> None:
        cursor = connection.cursor()

        for trigger_sql in schema.STATS_TRIGGERS:
            cursor.execute(trigger_sql)
        cursor.execute(schema.CREATE_DEFAULT_LIST_OWNER_TRIGGER)

        cursor.execute("""
            UPDATE todo_list SET
                num_completed = (
                    SELECT COUNT(*) FROM todo
                    WHERE todo.todo_list_id = todo_list.id AND todo.status = 'completed'
                ),
                total_count = (
                    SELECT COUNT(*) FROM todo WHERE todo.todo_list_id = todo_list.id
                )
        """)


todo_list_stats_migration = TodoListStatsMigration()
