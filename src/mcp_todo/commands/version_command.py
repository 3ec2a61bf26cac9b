"""Command 'version' of mcp-todo"""

from mcp_todo import __version__
from mcp_todo.adapters.sqlite.schema import SCHEMA_VERSION
from mcp_todo.utils.console import get_console


def version() -> None:
    """Show the package version and the schema version it writes."""
    console = get_console(highlight=False)
    console.print(f"mcp-todo {__version__} (schema {SCHEMA_VERSION})")
