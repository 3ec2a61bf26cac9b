"""mcp-todo - project-scoped todo storage on a local SQLite vault."""

__version__ = "0.3.0"
