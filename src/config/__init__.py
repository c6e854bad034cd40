"""
Configuration package for autodesc

Provides application settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings, GitHubContext

__all__ = ["appsettings", "AppSettings", "GitHubContext"]
