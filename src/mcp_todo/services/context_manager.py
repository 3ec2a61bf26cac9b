"""Project context for mcp-todo.

``ProjectContext`` binds the current working location to a Project row:
it resolves the project root, creates the project (and its default todo
list) on first sight, and keeps the result cached on the context object.

Usage Pattern:
    context = ProjectContext(db_path="/tmp/todos.db", cwd="/work/repo")
    project = await context.ensure_context()
    todos = TodoService(context)

Each context owns its own database handle and cache, so tests (or callers
that juggle several stores) build independent instances instead of
resetting shared state.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from mcp_todo.adapters.sqlite.connection import DatabaseConnection
from mcp_todo.adapters.sqlite.project_repository import SqliteProjectRepository
from mcp_todo.adapters.sqlite.settings_repository import SqliteSettingsRepository
from mcp_todo.adapters.sqlite.todo_list_repository import SqliteTodoListRepository
from mcp_todo.adapters.sqlite.todo_repository import SqliteTodoRepository
from mcp_todo.config import StoreConfig, get_store_config
from mcp_todo.exceptions import DomainRuleError, NotFoundError, ValidationError
from mcp_todo.models import Project, ProjectUpdate
from mcp_todo.services.location_resolver import find_project_root, project_name_for
from mcp_todo.utils.logger import get_logger


class ProjectContext:
    """Database handle, repositories and the cached current project."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        cwd: str | Path | None = None,
        config: StoreConfig | None = None,
    ):
        """Initialize the context; nothing touches the disk until first use.

        Args:
            db_path: Database file or ``":memory:"``. Defaults to the config's path.
            cwd: Directory to resolve the project from. None means the
                process working directory at resolution time.
            config: Store configuration (default: ``get_store_config()``)
        """
        self.config = config or get_store_config()
        self.database = DatabaseConnection(
            db_path if db_path is not None else self.config.database_path,
            use_migrations=self.config.use_migrations,
        )
        self.cwd = cwd
        self.projects = SqliteProjectRepository(self.database)
        self.todo_lists = SqliteTodoListRepository(self.database)
        self.todos = SqliteTodoRepository(self.database)
        self.settings = SqliteSettingsRepository(self.database)
        self._project: Project | None = None

    @property
    def cached_project(self) -> Project | None:
        return self._project

    def resolve_location(self) -> str:
        """Absolute project root for the configured working directory."""
        return str(find_project_root(self.cwd, self.config.project_indicators))

    async def ensure_context(self) -> Project:
        """Return the project for the current location, creating it if needed.

        Guarantees the project has a default todo list. The project is
        cached only outside an explicit transaction. Storage errors are not
        caught.
        """
        location = self.resolve_location()
        cached = self._project
        if (
            cached is not None
            and cached.location == location
            and cached.default_todo_list_id is not None
        ):
            return cached

        logger = get_logger()
        project = await self.projects.find_by_location(location)
        if project is None:
            name = project_name_for(location, self.config.fallback_project_name)
            logger.info("no project for %s, creating %r", location, name)
            project = await self.projects.create(name, location)
        else:
            logger.debug("found project %s (%s) at %s", project.id, project.name, location)

        if project.default_todo_list_id is None:
            with self.database.transaction():
                todo_list = await self.todo_lists.create(
                    project.id,
                    self.config.default_list_name,
                    self.config.default_list_description,
                )
                project = await self.projects.update(
                    project.id, {"default_todo_list_id": todo_list.id}
                )
            logger.info(
                "created default todo list %s for project %s", todo_list.id, project.id
            )

        # Rows written inside an open transaction may still be rolled back.
        if not self.database.in_transaction:
            self._project = project
        return project

    async def current_project(self) -> Project | None:
        """Cached project, else a read-only lookup by location (never creates)."""
        if self._project is not None:
            return self._project
        return await self.projects.find_by_location(self.resolve_location())

    async def default_todo_list_id(self) -> int:
        """Default list of the current project, bootstrapping if necessary."""
        project = await self.ensure_context()
        return project.default_todo_list_id

    async def update_project(self, project_id: int, updates: ProjectUpdate) -> Project:
        """Apply a partial update to a project.

        Raises:
            ValidationError: Empty name, or clearing the default todo list
            NotFoundError: Unknown project, or unknown default todo list
            DomainRuleError: Default todo list belongs to another project
        """
        update_dict = updates.model_dump(exclude_unset=True)

        if "name" in update_dict and not update_dict["name"]:
            raise ValidationError("Project name cannot be empty")
        if "default_todo_list_id" in update_dict and update_dict["default_todo_list_id"] is None:
            raise ValidationError("A project must keep a default todo list")

        list_id = update_dict.get("default_todo_list_id")
        if list_id is not None:
            todo_list = await self.todo_lists.get(list_id)
            if todo_list is None:
                raise NotFoundError(f"Todo list with ID {list_id} not found")
            if todo_list.project_id != project_id:
                raise DomainRuleError(
                    f"Todo list {list_id} belongs to project {todo_list.project_id}, "
                    f"not project {project_id}"
                )

        project = await self.projects.update(project_id, update_dict)
        if project is None:
            raise NotFoundError(f"Project with ID {project_id} not found")

        if self._project is not None and self._project.id == project.id:
            self._project = project
        return project

    def clear_project_cache(self) -> None:
        """Forget the cached project; the next call re-reads storage."""
        self._project = None

    def clear_all_caches(self) -> None:
        """Forget the cached project and close the connection.

        The connection is reopened lazily on next access.
        """
        self._project = None
        self.database.close()


@lru_cache(maxsize=1)
def get_project_context() -> ProjectContext:
    """Get a cached ProjectContext for the process working directory.

    Convenience for the protocol layer; call ``cache_clear()`` to rebuild.
    """
    return ProjectContext()
