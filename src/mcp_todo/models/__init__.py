"""mcp-todo domain models.

Pydantic models for the core entities. Repositories return them and
services accept them, so validation happens once at the edge.
"""

from .core import (
    PRIORITY_RANK,
    BatchItemResult,
    Project,
    ProjectUpdate,
    Setting,
    Todo,
    TodoList,
    TodoListUpdate,
    TodoPriority,
    TodoStatus,
    TodoWrite,
)

__all__ = [
    # Project models
    "Project",
    "ProjectUpdate",
    # Todo list models
    "TodoList",
    "TodoListUpdate",
    # Todo models
    "Todo",
    "TodoWrite",
    "TodoStatus",
    "TodoPriority",
    "PRIORITY_RANK",
    # Batch results
    "BatchItemResult",
    # Settings
    "Setting",
]
