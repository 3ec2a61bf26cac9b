"""Initial database schema migration.

Creates the core tables, their indexes and the timestamp triggers:
- project
- todo_list
- todo
- settings
- schema_version (created by migration system)
"""

import sqlite3

from mcp_todo.adapters.sqlite import schema
from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables."""
        for table_sql in schema.ALL_TABLES:
            connection.execute(table_sql)

        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)

        # updated_at maintenance, including touching the parent list
        for trigger_sql in schema.TIMESTAMP_TRIGGERS:
            connection.execute(trigger_sql)


# Export singleton instance
initial_migration = InitialSchemaMigration()
