"""Console helpers for the mcp-todo CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


def format_error(message: str) -> None:
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    get_console().print(f"[bold green]Success:[/bold green] {message}")
