"""Custom exceptions for the mcp-todo core.

Storage engine failures are not wrapped: ``sqlite3.Error`` subclasses
propagate to the caller unchanged.
"""


class TodoStoreError(Exception):
    """Base exception for all mcp-todo domain errors."""


class ValidationError(TodoStoreError, ValueError):
    """Raised when input is missing or malformed (e.g. content on create)."""


class NotFoundError(TodoStoreError, ValueError):
    """Raised when a referenced todo, todo list or project does not exist."""


class DomainRuleError(TodoStoreError):
    """Raised when an operation would break a business rule.

    Currently: deleting a todo list that is a project's default list, or
    pointing a project at a default list owned by another project.
    """
