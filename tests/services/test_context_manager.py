"""Tests for ProjectContext bootstrap and caching."""

from __future__ import annotations

import pytest

from mcp_todo.config import StoreConfig
from mcp_todo.exceptions import DomainRuleError, NotFoundError, ValidationError
from mcp_todo.models import ProjectUpdate
from mcp_todo.services.context_manager import ProjectContext, get_project_context


class TestEnsureContext:
    @pytest.mark.asyncio
    async def test_creates_project_and_default_list(self, context, project_dir):
        project = await context.ensure_context()

        assert project.location == str(project_dir.resolve())
        assert project.name == "my-repo"
        assert project.default_todo_list_id is not None

        default = await context.todo_lists.get(project.default_todo_list_id)
        assert default.project_id == project.id
        assert default.name == "Default"
        assert default.description == "Default todo list for this project"

    @pytest.mark.asyncio
    async def test_idempotent(self, context):
        first = await context.ensure_context()
        second = await context.ensure_context()
        assert first == second
        assert len(await context.todo_lists.list_for_project(first.id)) == 1

    @pytest.mark.asyncio
    async def test_idempotent_across_contexts(self, db_path, project_dir):
        one = ProjectContext(db_path=db_path, cwd=project_dir)
        two = ProjectContext(db_path=db_path, cwd=project_dir / "sub")
        try:
            first = await one.ensure_context()
            one.clear_all_caches()
            (project_dir / "sub").mkdir()
            second = await two.ensure_context()
        finally:
            one.clear_all_caches()
            two.clear_all_caches()
        assert first.id == second.id
        assert first.default_todo_list_id == second.default_todo_list_id

    @pytest.mark.asyncio
    async def test_subdirectory_shares_project(self, db_path, project_dir):
        sub = project_dir / "src"
        sub.mkdir()
        ctx = ProjectContext(db_path=db_path, cwd=sub)
        try:
            project = await ctx.ensure_context()
        finally:
            ctx.clear_all_caches()
        assert project.location == str(project_dir.resolve())

    @pytest.mark.asyncio
    async def test_repairs_project_without_default_list(self, context, project_dir):
        location = context.resolve_location()
        bare = await context.projects.create("bare", location)
        assert bare.default_todo_list_id is None

        project = await context.ensure_context()
        assert project.id == bare.id
        assert project.default_todo_list_id is not None

    @pytest.mark.asyncio
    async def test_filesystem_root_uses_fallback_name(self, db_path):
        config = StoreConfig(project_indicators=["no-such-marker"])
        ctx = ProjectContext(db_path=db_path, cwd="/", config=config)
        try:
            project = await ctx.ensure_context()
        finally:
            ctx.clear_all_caches()
        assert project.name == "project"
        assert project.location == "/"

    @pytest.mark.asyncio
    async def test_config_controls_default_list(self, db_path, project_dir):
        config = StoreConfig(default_list_name="Inbox", default_list_description=None)
        ctx = ProjectContext(db_path=db_path, cwd=project_dir, config=config)
        try:
            project = await ctx.ensure_context()
            default = await ctx.todo_lists.get(project.default_todo_list_id)
        finally:
            ctx.clear_all_caches()
        assert default.name == "Inbox"
        assert default.description is None

    @pytest.mark.asyncio
    async def test_direct_ddl_mode(self, db_path, project_dir):
        ctx = ProjectContext(
            db_path=db_path, cwd=project_dir, config=StoreConfig(use_migrations=False)
        )
        try:
            project = await ctx.ensure_context()
        finally:
            ctx.clear_all_caches()
        assert project.default_todo_list_id is not None


class TestCaching:
    @pytest.mark.asyncio
    async def test_cached_after_bootstrap(self, context):
        assert context.cached_project is None
        project = await context.ensure_context()
        assert context.cached_project == project

    @pytest.mark.asyncio
    async def test_current_project_never_creates(self, context):
        assert await context.current_project() is None
        assert await context.projects.find_by_location(context.resolve_location()) is None

    @pytest.mark.asyncio
    async def test_clear_project_cache(self, context):
        await context.ensure_context()
        context.clear_project_cache()
        assert context.cached_project is None
        assert context.database.is_open

    @pytest.mark.asyncio
    async def test_clear_all_caches_closes_connection(self, context):
        project = await context.ensure_context()
        context.clear_all_caches()
        assert context.cached_project is None
        assert not context.database.is_open

        again = await context.ensure_context()
        assert again.id == project.id

    def test_shared_context_is_cached(self):
        get_project_context.cache_clear()
        try:
            assert get_project_context() is get_project_context()
        finally:
            get_project_context().clear_all_caches()
            get_project_context.cache_clear()


class TestUpdateProject:
    @pytest.mark.asyncio
    async def test_rename(self, context):
        project = await context.ensure_context()
        updated = await context.update_project(project.id, ProjectUpdate(name="renamed"))
        assert updated.name == "renamed"
        assert context.cached_project.name == "renamed"

    @pytest.mark.asyncio
    async def test_empty_name(self, context):
        project = await context.ensure_context()
        with pytest.raises(ValidationError):
            await context.update_project(project.id, ProjectUpdate(name=""))

    @pytest.mark.asyncio
    async def test_clearing_default_list_rejected(self, context, todo_service):
        project = await context.ensure_context()
        with pytest.raises(ValidationError):
            await context.update_project(project.id, ProjectUpdate(default_todo_list_id=None))

        again = await context.ensure_context()
        assert again.default_todo_list_id == project.default_todo_list_id
        todo = await todo_service.save_todo({"id": 1, "content": "x"})
        assert todo.todo_list_id == project.default_todo_list_id

    @pytest.mark.asyncio
    async def test_stale_cache_without_default_is_repaired(self, context):
        project = await context.ensure_context()
        context._project = project.model_copy(update={"default_todo_list_id": None})

        again = await context.ensure_context()
        assert again.default_todo_list_id == project.default_todo_list_id

    @pytest.mark.asyncio
    async def test_switch_default_list(self, context):
        project = await context.ensure_context()
        other = await context.todo_lists.create(project.id, "Other")
        updated = await context.update_project(
            project.id, ProjectUpdate(default_todo_list_id=other.id)
        )
        assert updated.default_todo_list_id == other.id

    @pytest.mark.asyncio
    async def test_unknown_default_list(self, context):
        project = await context.ensure_context()
        with pytest.raises(NotFoundError):
            await context.update_project(project.id, ProjectUpdate(default_todo_list_id=999))

    @pytest.mark.asyncio
    async def test_foreign_default_list(self, context):
        project = await context.ensure_context()
        stranger = await context.projects.create("stranger", "/somewhere/else")
        foreign = await context.todo_lists.create(stranger.id, "Theirs")
        with pytest.raises(DomainRuleError):
            await context.update_project(
                project.id, ProjectUpdate(default_todo_list_id=foreign.id)
            )

    @pytest.mark.asyncio
    async def test_unknown_project(self, context):
        await context.ensure_context()
        with pytest.raises(NotFoundError):
            await context.update_project(999, ProjectUpdate(name="x"))
