"""Database schema definitions for the local SQLite vault.

Derived state (timestamps and todo list statistics) is maintained by
triggers so every write path stays consistent without the application
recomputing anything.
"""

from __future__ import annotations

import sqlite3

# Schema version tracking
SCHEMA_VERSION = 3

# Current time in epoch seconds; works on SQLite builds without unixepoch().
EPOCH_NOW = "CAST(strftime('%s', 'now') AS INTEGER)"

# Projects table - one row per project root
CREATE_PROJECT_TABLE = f"""
CREATE TABLE IF NOT EXISTS project (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    location TEXT NOT NULL,
    default_todo_list_id INTEGER REFERENCES todo_list(id),
    updated_at INTEGER NOT NULL DEFAULT ({EPOCH_NOW})
)
"""

# Todo lists table
CREATE_TODO_LIST_TABLE = f"""
CREATE TABLE IF NOT EXISTS todo_list (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    description TEXT,
    num_completed INTEGER NOT NULL DEFAULT 0,
    total_count INTEGER NOT NULL DEFAULT 0,
    updated_at INTEGER NOT NULL DEFAULT ({EPOCH_NOW}),
    FOREIGN KEY (project_id) REFERENCES project(id) ON DELETE CASCADE
)
"""

# Todos table - ids are chosen by the caller
CREATE_TODO_TABLE = f"""
CREATE TABLE IF NOT EXISTS todo (
    id INTEGER PRIMARY KEY,
    todo_list_id INTEGER NOT NULL,
    content TEXT NOT NULL CHECK (content <> ''),
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'in_progress', 'completed')),
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ('high', 'medium', 'low')),
    updated_at INTEGER NOT NULL DEFAULT ({EPOCH_NOW}),
    FOREIGN KEY (todo_list_id) REFERENCES todo_list(id) ON DELETE CASCADE
)
"""

# Settings table - key/value store for future features
CREATE_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

ALL_TABLES = [
    CREATE_PROJECT_TABLE,
    CREATE_TODO_LIST_TABLE,
    CREATE_TODO_TABLE,
    CREATE_SETTINGS_TABLE,
]

# Indexes
CREATE_PROJECT_LOCATION_INDEX = (
    "CREATE UNIQUE INDEX IF NOT EXISTS location_idx ON project(location)"
)
CREATE_TODO_LIST_PROJECT_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_todo_list_project ON todo_list(project_id)"
)
CREATE_TODO_LIST_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_todo_todo_list ON todo(todo_list_id)"
)

ALL_INDEXES = [
    CREATE_PROJECT_LOCATION_INDEX,
    CREATE_TODO_LIST_PROJECT_INDEX,
    CREATE_TODO_LIST_INDEX,
]

# Touch the owning list(s) when a todo changes. Scoped to the data columns:
# the updated_at refresh below is itself an UPDATE and must not fire it again.
CREATE_TOUCH_LIST_ON_TODO_UPDATE_TRIGGER = f"""
CREATE TRIGGER IF NOT EXISTS update_todo_list_on_todo_update
AFTER UPDATE OF content, status, priority, todo_list_id ON todo
BEGIN
    UPDATE todo_list SET updated_at = {EPOCH_NOW}
    WHERE id IN (OLD.todo_list_id, NEW.todo_list_id);
END
"""

# Timestamp refresh triggers
TIMESTAMP_TRIGGERS = [
    f"""
    CREATE TRIGGER IF NOT EXISTS update_project_timestamp
    AFTER UPDATE ON project
    BEGIN
        UPDATE project SET updated_at = {EPOCH_NOW} WHERE id = NEW.id;
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_list_timestamp
    AFTER UPDATE ON todo_list
    BEGIN
        UPDATE todo_list SET updated_at = {EPOCH_NOW} WHERE id = NEW.id;
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_timestamp
    AFTER UPDATE ON todo
    BEGIN
        UPDATE todo SET updated_at = {EPOCH_NOW} WHERE id = NEW.id;
    END
    """,
    # Touch the owning list whenever one of its todos changes
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_list_on_todo_insert
    AFTER INSERT ON todo
    BEGIN
        UPDATE todo_list SET updated_at = {EPOCH_NOW} WHERE id = NEW.todo_list_id;
    END
    """,
    CREATE_TOUCH_LIST_ON_TODO_UPDATE_TRIGGER,
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_list_on_todo_delete
    AFTER DELETE ON todo
    BEGIN
        UPDATE todo_list SET updated_at = {EPOCH_NOW} WHERE id = OLD.todo_list_id;
    END
    """,
]

_RECOUNT = """
    UPDATE todo_list SET
        num_completed = (
            SELECT COUNT(*) FROM todo
            WHERE todo.todo_list_id = todo_list.id AND todo.status = 'completed'
        ),
        total_count = (
            SELECT COUNT(*) FROM todo WHERE todo.todo_list_id = todo_list.id
        )
"""

# A move changes two lists, so both sides are recounted. Only status and
# list membership affect the counts.
CREATE_STATS_ON_TODO_UPDATE_TRIGGER = f"""
CREATE TRIGGER IF NOT EXISTS update_todo_list_stats_on_update
AFTER UPDATE OF status, todo_list_id ON todo
BEGIN
    {_RECOUNT}
    WHERE id IN (OLD.todo_list_id, NEW.todo_list_id);
END
"""

# Todo list statistics triggers
STATS_TRIGGERS = [
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_list_stats_on_insert
    AFTER INSERT ON todo
    BEGIN
        {_RECOUNT}
        WHERE id = NEW.todo_list_id;
    END
    """,
    CREATE_STATS_ON_TODO_UPDATE_TRIGGER,
    f"""
    CREATE TRIGGER IF NOT EXISTS update_todo_list_stats_on_delete
    AFTER DELETE ON todo
    BEGIN
        {_RECOUNT}
        WHERE id = OLD.todo_list_id;
    END
    """,
]

# A project's default list must be one of its own lists
CREATE_DEFAULT_LIST_OWNER_TRIGGER = """
CREATE TRIGGER IF NOT EXISTS enforce_project_default_list_owner
BEFORE UPDATE OF default_todo_list_id ON project
WHEN NEW.default_todo_list_id IS NOT NULL
    AND NOT EXISTS (
        SELECT 1 FROM todo_list
        WHERE id = NEW.default_todo_list_id AND project_id = NEW.id
    )
BEGIN
    SELECT RAISE(ABORT, 'default todo list must belong to the project');
END
"""

ALL_TRIGGERS = TIMESTAMP_TRIGGERS + STATS_TRIGGERS + [CREATE_DEFAULT_LIST_OWNER_TRIGGER]


def apply_schema(connection: sqlite3.Connection) -> None:
    """Create every table, index and trigger directly.

    Fallback for when the migration runner is not used. All statements are
    idempotent.
    """
    for table_sql in ALL_TABLES:
        connection.execute(table_sql)
    for index_sql in ALL_INDEXES:
        connection.execute(index_sql)
    for trigger_sql in ALL_TRIGGERS:
        connection.execute(trigger_sql)
    connection.commit()
