"""Main entry point for the mcp-todo CLI."""

import typer

from mcp_todo.commands import store_commands
from mcp_todo.commands.version_command import version

app = typer.Typer(
    name="mcp-todo",
    help="Local, project-scoped todo store for coding agents",
    no_args_is_help=True,
)

app.command("init")(store_commands.init)
app.command("status")(store_commands.status)
app.command("migrate")(store_commands.migrate)
app.command("version")(version)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
