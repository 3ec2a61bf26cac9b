"""Storage adapters (hexagonal "adapters") for the repository ports.

- mcp_todo.adapters.sqlite: local SQLite vault
"""
