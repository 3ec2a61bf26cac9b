"""Tests for the SQLite repositories.

Uses a real in-memory SQLite database with the full migration schema,
so SQL is exercised without touching production data.
"""

from __future__ import annotations

import sqlite3

import pytest

from mcp_todo.adapters.sqlite import (
    DatabaseConnection,
    SqliteProjectRepository,
    SqliteSettingsRepository,
    SqliteTodoListRepository,
    SqliteTodoRepository,
)
from mcp_todo.adapters.sqlite.connection import IN_MEMORY
from mcp_todo.repositories import (
    ProjectRepository,
    SettingsRepository,
    TodoListRepository,
    TodoRepository,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def database():
    db = DatabaseConnection(IN_MEMORY)
    yield db
    db.close()


@pytest.fixture
def projects(database):
    return SqliteProjectRepository(database)


@pytest.fixture
def todo_lists(database):
    return SqliteTodoListRepository(database)


@pytest.fixture
def todos(database):
    return SqliteTodoRepository(database)


@pytest.fixture
def settings(database):
    return SqliteSettingsRepository(database)


def test_adapters_implement_ports(projects, todo_lists, todos, settings):
    assert isinstance(projects, ProjectRepository)
    assert isinstance(todo_lists, TodoListRepository)
    assert isinstance(todos, TodoRepository)
    assert isinstance(settings, SettingsRepository)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class TestProjectRepository:
    @pytest.mark.asyncio
    async def test_create_and_find(self, projects):
        created = await projects.create("repo", "/work/repo")
        assert created.id > 0
        assert created.name == "repo"
        assert created.default_todo_list_id is None
        assert created.updated_at > 0

        found = await projects.find_by_location("/work/repo")
        assert found == created
        assert await projects.get(created.id) == created

    @pytest.mark.asyncio
    async def test_find_missing(self, projects):
        assert await projects.find_by_location("/nowhere") is None
        assert await projects.get(12345) is None

    @pytest.mark.asyncio
    async def test_duplicate_location(self, projects):
        await projects.create("repo", "/work/repo")
        with pytest.raises(sqlite3.IntegrityError):
            await projects.create("other", "/work/repo")

    @pytest.mark.asyncio
    async def test_update_name(self, projects):
        project = await projects.create("repo", "/work/repo")
        updated = await projects.update(project.id, {"name": "renamed"})
        assert updated.name == "renamed"
        assert updated.location == "/work/repo"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, projects):
        assert await projects.update(999, {"name": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_columns(self, projects):
        project = await projects.create("repo", "/work/repo")
        with pytest.raises(ValueError):
            await projects.update(project.id, {"location": "/elsewhere"})

    @pytest.mark.asyncio
    async def test_set_default_list(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        todo_list = await todo_lists.create(project.id, "Default")
        updated = await projects.update(project.id, {"default_todo_list_id": todo_list.id})
        assert updated.default_todo_list_id == todo_list.id


# ---------------------------------------------------------------------------
# Todo lists
# ---------------------------------------------------------------------------


class TestTodoListRepository:
    @pytest.mark.asyncio
    async def test_create(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        todo_list = await todo_lists.create(project.id, "Backlog", "later")
        assert todo_list.project_id == project.id
        assert todo_list.description == "later"
        assert (todo_list.num_completed, todo_list.total_count) == (0, 0)

    @pytest.mark.asyncio
    async def test_list_for_project_ordered_by_name(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        other = await projects.create("other", "/work/other")
        await todo_lists.create(project.id, "b")
        await todo_lists.create(project.id, "a")
        await todo_lists.create(other.id, "c")

        names = [tl.name for tl in await todo_lists.list_for_project(project.id)]
        assert names == ["a", "b"]

    @pytest.mark.asyncio
    async def test_update_and_clear_description(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        todo_list = await todo_lists.create(project.id, "Backlog", "later")
        updated = await todo_lists.update(todo_list.id, {"description": None})
        assert updated.description is None
        assert updated.name == "Backlog"

    @pytest.mark.asyncio
    async def test_delete(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        todo_list = await todo_lists.create(project.id, "Backlog")
        assert await todo_lists.delete(todo_list.id) is True
        assert await todo_lists.delete(todo_list.id) is False
        assert await todo_lists.get(todo_list.id) is None

    @pytest.mark.asyncio
    async def test_is_default_for_any_project(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        default = await todo_lists.create(project.id, "Default")
        extra = await todo_lists.create(project.id, "Extra")
        await projects.update(project.id, {"default_todo_list_id": default.id})

        assert await todo_lists.is_default_for_any_project(default.id) is True
        assert await todo_lists.is_default_for_any_project(extra.id) is False


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------


class TestTodoRepository:
    async def _list(self, projects, todo_lists):
        project = await projects.create("repo", "/work/repo")
        return await todo_lists.create(project.id, "Default")

    @pytest.mark.asyncio
    async def test_insert_with_caller_id(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        todo = await todos.insert(42, todo_list.id, "write tests", "pending", "high")
        assert todo.id == 42
        assert todo.priority == "high"
        assert await todos.get(42) == todo

    @pytest.mark.asyncio
    async def test_duplicate_id(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        await todos.insert(1, todo_list.id, "a", "pending", "medium")
        with pytest.raises(sqlite3.IntegrityError):
            await todos.insert(1, todo_list.id, "b", "pending", "medium")

    @pytest.mark.asyncio
    async def test_list_by_list_id_in_id_order(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        for todo_id in (3, 1, 2):
            await todos.insert(todo_id, todo_list.id, f"t{todo_id}", "pending", "low")
        assert [t.id for t in await todos.list_by_list_id(todo_list.id)] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_update(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        await todos.insert(1, todo_list.id, "a", "pending", "medium")
        updated = await todos.update(1, {"status": "completed"})
        assert updated.status == "completed"
        assert updated.content == "a"
        assert await todos.update(99, {"status": "completed"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        await todos.insert(1, todo_list.id, "a", "pending", "medium")
        assert await todos.delete(1) is True
        assert await todos.delete(1) is False

    @pytest.mark.asyncio
    async def test_stats_visible_through_list(self, projects, todo_lists, todos):
        todo_list = await self._list(projects, todo_lists)
        await todos.insert(1, todo_list.id, "a", "completed", "medium")
        await todos.insert(2, todo_list.id, "b", "pending", "medium")
        refreshed = await todo_lists.get(todo_list.id)
        assert (refreshed.num_completed, refreshed.total_count) == (1, 2)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettingsRepository:
    @pytest.mark.asyncio
    async def test_set_get_overwrite(self, settings):
        await settings.set("theme", "dark")
        await settings.set("theme", "light")
        setting = await settings.get("theme")
        assert setting.value == "light"

    @pytest.mark.asyncio
    async def test_list_and_delete(self, settings):
        await settings.set("b", "2")
        await settings.set("a", "1")
        assert [s.key for s in await settings.list_all()] == ["a", "b"]
        assert await settings.delete("a") is True
        assert await settings.delete("a") is False
        assert await settings.get("a") is None
