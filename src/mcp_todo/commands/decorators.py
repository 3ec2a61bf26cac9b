"""Decorators for command functions."""

import asyncio
import functools
import inspect
import sqlite3
import time
import traceback
from collections.abc import Callable

import typer

from mcp_todo.exceptions import DomainRuleError, NotFoundError, TodoStoreError, ValidationError
from mcp_todo.utils import exit_codes
from mcp_todo.utils.console import format_error
from mcp_todo.utils.logger import get_logger


def exit_code_for(error: Exception) -> int:
    """Map a failure to its semantic exit code."""
    if isinstance(error, ValidationError):
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, NotFoundError):
        return exit_codes.ERROR_NOT_FOUND
    if isinstance(error, DomainRuleError):
        return exit_codes.ERROR_DOMAIN_RULE
    if isinstance(error, sqlite3.Error):
        return exit_codes.ERROR_STORAGE
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Log the command, run it (awaiting coroutines) and turn errors into exits."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except typer.Exit:
            raise

        except (TodoStoreError, sqlite3.Error) as e:
            logger.error("command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e)
            format_error(str(e))
            raise typer.Exit(code=exit_code_for(e)) from e

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
