"""Todo list service - Business logic for todo list operations."""

from __future__ import annotations

from mcp_todo.exceptions import DomainRuleError, NotFoundError, ValidationError
from mcp_todo.models import TodoList, TodoListUpdate
from mcp_todo.services.context_manager import ProjectContext, get_project_context
from mcp_todo.utils.logger import get_logger


class TodoListService:
    """Service for todo list business logic."""

    def __init__(self, context: ProjectContext):
        self.context = context
        self.repository = context.todo_lists

    async def get_todo_list_by_id(self, todo_list_id: int) -> TodoList | None:
        return await self.repository.get(todo_list_id)

    async def get_all_todo_lists_for_current_project(self) -> list[TodoList]:
        """All lists of the current project, bootstrapping it on first use."""
        project = await self.context.ensure_context()
        return await self.repository.list_for_project(project.id)

    async def create_todo_list(self, name: str, description: str | None = None) -> TodoList:
        """Create a list in the current project.

        Raises:
            ValidationError: If the name is empty
        """
        if not name:
            raise ValidationError("Todo list name cannot be empty")
        project = await self.context.ensure_context()
        todo_list = await self.repository.create(project.id, name, description)
        get_logger().info("created todo list %s in project %s", todo_list.id, project.id)
        return todo_list

    async def update_todo_list(self, todo_list_id: int, updates: TodoListUpdate) -> TodoList:
        """Apply a partial update to a list.

        Raises:
            ValidationError: If the new name is empty
            NotFoundError: If the list does not exist
        """
        update_dict = updates.model_dump(exclude_unset=True)
        if "name" in update_dict and not update_dict["name"]:
            raise ValidationError("Todo list name cannot be empty")

        if not update_dict:
            todo_list = await self.repository.get(todo_list_id)
        else:
            todo_list = await self.repository.update(todo_list_id, update_dict)
        if todo_list is None:
            raise NotFoundError(f"Todo list with ID {todo_list_id} not found")
        return todo_list

    async def delete_todo_list(self, todo_list_id: int) -> None:
        """Delete a list and, by cascade, its todos.

        Raises:
            DomainRuleError: If the list is some project's default list
            NotFoundError: If the list does not exist
        """
        if await self.repository.is_default_for_any_project(todo_list_id):
            raise DomainRuleError(
                f"Cannot delete todo list {todo_list_id}: it is a project's default list"
            )
        if not await self.repository.delete(todo_list_id):
            raise NotFoundError(f"Todo list with ID {todo_list_id} not found")
        get_logger().info("deleted todo list %s", todo_list_id)


def get_todo_list_service() -> TodoListService:
    """Factory function to create a TodoListService on the shared context."""
    return TodoListService(get_project_context())
