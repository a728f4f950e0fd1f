"""
CLI module for jsonsmith.

Provides the command-line interface using Click.
"""

from jsonsmith.cli.main import cli, main

__all__ = ["main", "cli"]
