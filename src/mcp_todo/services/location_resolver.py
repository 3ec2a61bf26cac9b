"""Project root discovery from a working directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from mcp_todo.config import PROJECT_INDICATORS


def find_project_root(
    start: str | Path | None = None,
    indicators: Iterable[str] = PROJECT_INDICATORS,
) -> Path:
    """Find the closest ancestor of ``start`` that looks like a project root.

    Every directory from ``start`` up to the filesystem root is checked for
    the indicator files in order; the first directory holding any of them
    wins. Without a match the resolved ``start`` itself is returned, so
    sibling subdirectories of one checkout converge on the same location
    while ad-hoc directories still get a stable key.

    Args:
        start: Directory to start from (default: current working directory)
        indicators: Marker names such as ``.git`` or ``pyproject.toml``

    Returns:
        Absolute, resolved path
    """
    start_dir = Path(start or Path.cwd()).resolve()
    markers = list(indicators)
    for candidate in [start_dir, *start_dir.parents]:
        if any((candidate / marker).exists() for marker in markers):
            return candidate
    return start_dir


def project_name_for(location: str | Path, fallback: str = "project") -> str:
    """Display name for a new project: the last path segment, or ``fallback``."""
    return Path(location).name or fallback
