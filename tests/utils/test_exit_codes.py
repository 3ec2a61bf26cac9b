"""Tests for exit code names."""

from mcp_todo.utils import exit_codes


def test_known_names():
    assert exit_codes.get_exit_code_name(exit_codes.SUCCESS) == "SUCCESS"
    assert exit_codes.get_exit_code_name(exit_codes.ERROR_NOT_FOUND) == "ERROR_NOT_FOUND"


def test_unknown_name():
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"
