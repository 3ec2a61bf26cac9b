"""Todo service - Business logic for todo operations."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from mcp_todo.exceptions import NotFoundError, TodoStoreError, ValidationError
from mcp_todo.models import PRIORITY_RANK, BatchItemResult, Todo, TodoWrite
from mcp_todo.services.context_manager import ProjectContext, get_project_context
from mcp_todo.utils.logger import get_logger

# Failures reported per item by batch operations; anything else aborts the batch.
ITEM_ERRORS = (TodoStoreError, sqlite3.IntegrityError)


def _coerce_write(item: TodoWrite | Mapping[str, Any]) -> TodoWrite:
    if isinstance(item, TodoWrite):
        return item
    try:
        return TodoWrite.model_validate(item)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid todo: {e.errors()[0]['msg']}") from e


def _require_id(value: Any, what: str = "Todo ID") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be a valid number, got {value!r}")
    return value


def _failure(item_id: Any, error: Exception) -> BatchItemResult:
    valid_id = item_id if isinstance(item_id, int) and not isinstance(item_id, bool) else None
    return BatchItemResult(id=valid_id, success=False, error=str(error))


def sort_by_priority(todos: Iterable[Todo]) -> list[Todo]:
    """Order todos high, medium, low; equal priorities by ascending id."""
    return sorted(todos, key=lambda t: (PRIORITY_RANK[t.priority], t.id))


class TodoService:
    """Service for todo business logic.

    Encapsulates validation, default list resolution, ordering and the
    batch policy on top of the todo repository.
    """

    def __init__(self, context: ProjectContext):
        self.context = context
        self.repository = context.todos

    async def _require_list(self, todo_list_id: int) -> None:
        if await self.context.todo_lists.get(todo_list_id) is None:
            raise NotFoundError(f"Todo list with ID {todo_list_id} not found")

    async def get_todo_by_id(self, todo_id: int) -> Todo | None:
        """Get a todo by ID; None when it does not exist."""
        return await self.repository.get(todo_id)

    async def get_todos_by_list_id(self, todo_list_id: int | None = None) -> list[Todo]:
        """Get all todos of a list, highest priority first.

        Args:
            todo_list_id: List to read; the current project's default list if None

        Returns:
            Todos ordered by priority (high, medium, low) then ascending id
        """
        if todo_list_id is None:
            todo_list_id = await self.context.default_todo_list_id()
        todos = await self.repository.list_by_list_id(todo_list_id)
        return sort_by_priority(todos)

    async def save_todo(self, data: TodoWrite | Mapping[str, Any]) -> Todo:
        """Create a todo or patch an existing one, keyed by the caller's id.

        Create requires non-empty ``content`` (whitespace is accepted) and
        targets ``todo_list_id`` or the default list. Patch changes only the
        supplied fields; no fields at all returns the row unchanged.

        Raises:
            ValidationError: Missing/empty content, or a malformed request
            NotFoundError: Target todo list does not exist
        """
        write = _coerce_write(data)
        updates = write.model_dump(exclude_none=True, exclude={"id"})
        existing = await self.repository.get(write.id)

        if existing is None:
            if not write.content:
                raise ValidationError("Content is required when creating a new todo")

            todo_list_id = write.todo_list_id
            if todo_list_id is None:
                todo_list_id = await self.context.default_todo_list_id()
            await self._require_list(todo_list_id)

            return await self.repository.insert(
                write.id,
                todo_list_id,
                write.content,
                write.status or "pending",
                write.priority or "medium",
            )

        if not updates:
            return existing

        if "content" in updates and not updates["content"]:
            raise ValidationError("Content cannot be empty")
        if "todo_list_id" in updates:
            await self._require_list(updates["todo_list_id"])

        todo = await self.repository.update(write.id, updates)
        if todo is None:
            raise NotFoundError(f"Todo with ID {write.id} not found")
        return todo

    async def delete_todo(self, todo_id: int) -> None:
        """Delete a todo.

        Raises:
            NotFoundError: If the todo does not exist
        """
        if not await self.repository.delete(todo_id):
            raise NotFoundError(f"Todo with ID {todo_id} not found")

    async def save_todo_batch(
        self, items: Iterable[TodoWrite | Mapping[str, Any]]
    ) -> list[BatchItemResult]:
        """Save several todos inside one transaction.

        Each item succeeds or fails on its own; failures are reported in the
        result list and do not undo the other items.
        """
        results: list[BatchItemResult] = []
        with self.context.database.transaction():
            for item in items:
                item_id = item.id if isinstance(item, TodoWrite) else (
                    item.get("id") if isinstance(item, Mapping) else None
                )
                try:
                    todo = await self.save_todo(item)
                except ITEM_ERRORS as e:
                    results.append(_failure(item_id, e))
                    continue
                results.append(BatchItemResult(id=todo.id, success=True, todo=todo))

        self._log_batch("save", results)
        return results

    async def delete_todo_batch(self, todo_ids: Iterable[Any]) -> list[BatchItemResult]:
        """Delete several todos inside one transaction, reporting per id."""
        results: list[BatchItemResult] = []
        with self.context.database.transaction():
            for todo_id in todo_ids:
                try:
                    await self.delete_todo(_require_id(todo_id))
                except ITEM_ERRORS as e:
                    results.append(_failure(todo_id, e))
                    continue
                results.append(BatchItemResult(id=todo_id, success=True))

        self._log_batch("delete", results)
        return results

    async def move_todos_batch(
        self, todo_ids: Iterable[Any], target_todo_list_id: int
    ) -> list[BatchItemResult]:
        """Move several todos to another list inside one transaction.

        Raises:
            NotFoundError: If the target list does not exist (nothing is moved)
        """
        target = await self.context.todo_lists.get(
            _require_id(target_todo_list_id, "Target todo list ID")
        )
        if target is None:
            raise NotFoundError(f"Target todo list with ID {target_todo_list_id} not found")

        results: list[BatchItemResult] = []
        with self.context.database.transaction():
            for todo_id in todo_ids:
                try:
                    todo = await self.repository.update(
                        _require_id(todo_id), {"todo_list_id": target.id}
                    )
                    if todo is None:
                        raise NotFoundError(f"Todo with ID {todo_id} not found")
                except ITEM_ERRORS as e:
                    results.append(_failure(todo_id, e))
                    continue
                results.append(BatchItemResult(id=todo.id, success=True, todo=todo))

        self._log_batch("move", results)
        return results

    @staticmethod
    def _log_batch(operation: str, results: list[BatchItemResult]) -> None:
        failed = sum(1 for r in results if not r.success)
        get_logger().info(
            "batch %s completed: %d successful, %d failed",
            operation,
            len(results) - failed,
            failed,
        )


def get_todo_service() -> TodoService:
    """Factory function to create a TodoService on the shared context."""
    return TodoService(get_project_context())
