"""Store commands - bootstrap, inspect and migrate the local todo database."""

from pathlib import Path

import typer
from rich.table import Table

from mcp_todo.exceptions import NotFoundError
from mcp_todo.services.context_manager import ProjectContext
from mcp_todo.utils.console import format_success, get_console

from .decorators import command_wrapper

console = get_console()

DB_OPTION = typer.Option(None, "--db", help="Database file (default: platform data dir)")
PATH_OPTION = typer.Option(None, "--path", "-p", help="Directory to resolve the project from")


@command_wrapper
def migrate(db: Path | None = DB_OPTION) -> None:
    """Bring the database schema up to date and show the migration history."""
    context = ProjectContext(db_path=db)
    try:
        database = context.database
        version = database.get_schema_version()
        history = database.get_migration_history()
    finally:
        context.clear_all_caches()

    table = Table(title=f"Schema version {version}")
    table.add_column("Version", justify="right", style="cyan")
    table.add_column("Description")
    table.add_column("Applied at", style="dim")
    for entry in history:
        table.add_row(str(entry["version"]), entry["description"], entry["applied_at"])
    console.print(table)


@command_wrapper
async def init(
    path: Path | None = PATH_OPTION,
    db: Path | None = DB_OPTION,
) -> None:
    """Register the project at PATH and create its default todo list."""
    context = ProjectContext(db_path=db, cwd=path)
    try:
        project = await context.ensure_context()
    finally:
        context.clear_all_caches()

    format_success(
        f"Project [bold]{project.name}[/bold] ({project.location}) "
        f"uses todo list {project.default_todo_list_id} by default"
    )


@command_wrapper
async def status(
    path: Path | None = PATH_OPTION,
    db: Path | None = DB_OPTION,
) -> None:
    """Show the todo lists of the project at PATH without creating anything."""
    context = ProjectContext(db_path=db, cwd=path)
    try:
        project = await context.current_project()
        if project is None:
            raise NotFoundError(
                f"No project registered for {context.resolve_location()}; run 'mcp-todo init'"
            )
        todo_lists = await context.todo_lists.list_for_project(project.id)
    finally:
        context.clear_all_caches()

    table = Table(title=f"{project.name} ({project.location})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Done", justify="right", style="green")
    table.add_column("Total", justify="right")
    for todo_list in todo_lists:
        name = todo_list.name
        if todo_list.id == project.default_todo_list_id:
            name += " [dim](default)[/dim]"
        table.add_row(
            str(todo_list.id),
            name,
            str(todo_list.num_completed),
            str(todo_list.total_count),
        )
    console.print(table)
