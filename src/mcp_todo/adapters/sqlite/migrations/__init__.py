"""Database migration system for the SQLite vault."""

from .runner import (
    Migration,
    MigrationRunner,
    get_current_version,
    run_migrations,
)

__all__ = [
    "Migration",
    "MigrationRunner",
    "get_current_version",
    "run_migrations",
]
