"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from mcp_todo.services.context_manager import ProjectContext
from mcp_todo.services.todo_list_service import TodoListService
from mcp_todo.services.todo_service import TodoService

# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log output to a tmp directory and reset the logger singleton."""
    import mcp_todo.utils.logger as logger_mod

    logger = logging.getLogger("mcp_todo")
    original_handlers = list(logger.handlers)
    logger_mod._logger = None
    for handler in original_handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            logger.removeHandler(handler)
    with patch("mcp_todo.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in list(logger.handlers):
        if handler not in original_handlers:
            handler.close()
            logger.removeHandler(handler)
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path):
    """A checkout-like directory: contains a .git marker."""
    root = tmp_path / "workspace" / "my-repo"
    (root / ".git").mkdir(parents=True)
    return root


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "todos.db"


@pytest.fixture
def context(db_path, project_dir):
    ctx = ProjectContext(db_path=db_path, cwd=project_dir)
    yield ctx
    ctx.clear_all_caches()


@pytest.fixture
def todo_service(context):
    return TodoService(context)


@pytest.fixture
def todo_list_service(context):
    return TodoListService(context)
