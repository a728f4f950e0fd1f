"""
Configuration module for jsonsmith.

Uses pydantic-settings for environment variable loading.
"""

from jsonsmith.config.settings import Settings, find_project_root
from jsonsmith.config.sources import ConfigFileError

__all__ = ["ConfigFileError", "Settings", "find_project_root"]
