"""Core data models for projects, todo lists and todos."""

from typing import Literal

from pydantic import BaseModel, Field

TodoStatus = Literal["pending", "in_progress", "completed"]
TodoPriority = Literal["high", "medium", "low"]

# SQLite sorts the priority text alphabetically, so ordering goes through this rank.
PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


class Project(BaseModel):
    """Project bound to one filesystem location.

    Attributes:
        id: Unique identifier for the project
        name: Display name, defaults to the last segment of ``location``
        location: Absolute path of the project root (natural key)
        default_todo_list_id: List used when callers give no list id
        updated_at: Last update, epoch seconds
    """

    id: int
    name: str
    location: str
    default_todo_list_id: int | None = None
    updated_at: int


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = None
    default_todo_list_id: int | None = None


class TodoList(BaseModel):
    """Named collection of todos owned by a project.

    ``num_completed`` and ``total_count`` are maintained by triggers.
    """

    id: int
    project_id: int
    name: str
    description: str | None = None
    num_completed: int = 0
    total_count: int = 0
    updated_at: int


class TodoListUpdate(BaseModel):
    """Model for updating an existing todo list.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = None
    description: str | None = None


class Todo(BaseModel):
    """Single unit of work.

    Attributes:
        id: Caller-chosen identifier
        todo_list_id: Owning todo list
        content: What needs doing
        status: pending, in_progress or completed
        priority: high, medium or low
        updated_at: Last update, epoch seconds
    """

    id: int
    todo_list_id: int
    content: str
    status: TodoStatus = "pending"
    priority: TodoPriority = "medium"
    updated_at: int


class TodoWrite(BaseModel):
    """Create-or-patch request for a todo.

    Only ``id`` is required. On create ``content`` is mandatory; on patch
    every field that was not supplied keeps its stored value.
    """

    id: int
    content: str | None = None
    status: TodoStatus | None = None
    priority: TodoPriority | None = None
    todo_list_id: int | None = None


class BatchItemResult(BaseModel):
    """Outcome of one item of a batch operation."""

    id: int | None = None
    success: bool
    error: str | None = None
    todo: Todo | None = None


class Setting(BaseModel):
    key: str = Field(min_length=1)
    value: str
