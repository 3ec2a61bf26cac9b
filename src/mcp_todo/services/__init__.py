"""Business logic layer for mcp-todo."""

from .context_manager import ProjectContext, get_project_context
from .location_resolver import find_project_root, project_name_for
from .todo_list_service import TodoListService, get_todo_list_service
from .todo_service import TodoService, get_todo_service, sort_by_priority

__all__ = [
    "ProjectContext",
    "get_project_context",
    "find_project_root",
    "project_name_for",
    "TodoService",
    "TodoListService",
    "get_todo_service",
    "get_todo_list_service",
    "sort_by_priority",
]
