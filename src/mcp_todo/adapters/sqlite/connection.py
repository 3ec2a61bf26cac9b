"""Database connection management for the SQLite vault.

Each ``DatabaseConnection`` is an explicit handle owned by its caller: it
opens the file lazily, enforces foreign keys, brings the schema up to date
and provides the transaction boundary used by batch operations.
"""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from mcp_todo.adapters.sqlite import schema
from mcp_todo.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from mcp_todo.adapters.sqlite.migrations.m002_todo_list_stats import (
    todo_list_stats_migration,
)
from mcp_todo.adapters.sqlite.migrations.m003_scope_todo_update_triggers import (
    scope_todo_update_triggers_migration,
)
from mcp_todo.adapters.sqlite.migrations.runner import Migration, MigrationRunner
from mcp_todo.config import get_database_path
from mcp_todo.utils.logger import get_logger

IN_MEMORY = ":memory:"

# All migrations in order
MIGRATIONS: list[Migration] = [
    initial_migration,
    todo_list_stats_migration,
    scope_todo_update_triggers_migration,
]


class DatabaseConnection:
    """Lazily opened connection to one SQLite database file.

    Provides:
    - Connection reuse for the lifetime of the handle
    - WAL mode for file databases
    - Foreign key constraint enforcement
    - Automatic directory creation
    - Owner-only permissions on newly created files
    - Explicit BEGIN/COMMIT/ROLLBACK boundary via ``transaction()``
    """

    def __init__(self, db_path: str | Path | None = None, use_migrations: bool = True):
        """Create a handle; nothing is opened until first use.

        Args:
            db_path: Database file, ``":memory:"``, or None for the default location
            use_migrations: Use the migration runner; when False the schema
                DDL is applied directly
        """
        if db_path is None:
            db_path = get_database_path()
        self.db_path = db_path if str(db_path) == IN_MEMORY else Path(db_path)
        self.use_migrations = use_migrations
        self._connection: sqlite3.Connection | None = None
        self._transaction_depth = 0

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create the underlying connection."""
        if self._connection is None:
            self._connection = self._open()
        return self._connection

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def in_transaction(self) -> bool:
        """True while inside an explicit ``transaction()`` block."""
        return self._transaction_depth > 0

    def _open(self) -> sqlite3.Connection:
        is_memory = self.db_path == IN_MEMORY
        is_new_database = False

        if not is_memory:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not self.db_path.exists()

        connection = sqlite3.connect(
            str(self.db_path),
            check_same_thread=False,  # Async callers may hop threads
            timeout=30.0,  # Wait up to 30s for locks
        )

        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        if not is_memory:
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(self.db_path, 0o600)

        if self.use_migrations:
            applied = MigrationRunner(connection).run_migrations(MIGRATIONS)
        else:
            schema.apply_schema(connection)
            applied = 0

        get_logger().info(
            "opened database %s (new=%s, migrations applied=%d)",
            self.db_path,
            is_new_database,
            applied,
        )
        return connection

    def commit(self) -> None:
        """Commit pending work unless an explicit transaction is open.

        Repository writes call this after each statement; inside
        ``transaction()`` the outer block owns the commit.
        """
        if self._transaction_depth == 0:
            self.connection.commit()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block inside one BEGIN/COMMIT, rolling back on any exception.

        Nested calls join the outermost transaction.
        """
        connection = self.connection
        if self._transaction_depth > 0:
            self._transaction_depth += 1
            try:
                yield connection
            finally:
                self._transaction_depth -= 1
            return

        if connection.in_transaction:
            connection.commit()

        connection.execute("BEGIN")
        self._transaction_depth = 1
        try:
            yield connection
        except BaseException:
            self._transaction_depth = 0
            connection.rollback()
            raise
        self._transaction_depth = 0
        connection.commit()

    def close(self) -> None:
        """Close the connection; the next access reopens it.

        Safe to call repeatedly and on a handle that was never opened.
        """
        if self._connection is None:
            return
        try:
            self._connection.commit()
            self._connection.close()
        finally:
            self._connection = None
            self._transaction_depth = 0

    def get_schema_version(self) -> int:
        return MigrationRunner(self.connection).get_current_version()

    def get_migration_history(self) -> list[dict]:
        return MigrationRunner(self.connection).get_migration_history()
