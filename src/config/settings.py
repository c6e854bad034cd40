"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All application settings use the AUTODESC_ prefix (e.g., AUTODESC_FALLBACK_BRANCH=master).

The GitHub Actions runner context (GITHUB_REPOSITORY, GITHUB_REF, ...) is read
through a second settings class so the pipeline never touches os.environ directly.

Settings can also be loaded from a .env file in the project root.
"""

import re
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use AUTODESC_ prefix.

    Examples:
        AUTODESC_API_URL=https://staging-api.modrinth.com/v2
        AUTODESC_FALLBACK_BRANCH=master
        AUTODESC_HTTP_TIMEOUT_SECONDS=10
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTODESC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote endpoints
    api_url: str = Field(
        default="https://api.modrinth.com/v2",
        description="Base URL of the Modrinth API (no trailing slash)",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API, used for default-branch lookups",
    )

    raw_host: str = Field(
        default="raw.githubusercontent.com",
        description="Host serving raw repository files for rewritten image links",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every outbound HTTP request",
    )

    user_agent_suffix: str = Field(
        default="funnyboy-roks/modrinth-auto-desc",
        description="Client identifier appended to the User-Agent header",
    )

    # Document configuration
    metadata_key: str = Field(
        default="modrinth",
        description="Front matter key holding the project fields to update",
    )

    exclude_start_token: str = Field(
        default="MODRINTH_EXCLUDE_START",
        description="Comment token opening a section excluded from the description",
    )

    exclude_end_token: str = Field(
        default="MODRINTH_EXCLUDE_END",
        description="Comment token closing a section excluded from the description",
    )

    # Branch resolution
    fallback_branch: str = Field(
        default="main",
        description="Branch name used when the default branch cannot be looked up",
    )

    issues_url: str = Field(
        default="https://github.com/funnyboy-roks/modrinth-auto-desc/issues",
        description="Where users are pointed when they cannot resolve a failure",
    )

    def markerPattern_make(self) -> "re.Pattern[str]":
        """
        Compile the regex matching either exclusion marker.

        The START token lands in the "start" group and the END token in the
        "end" group so a single scan yields both kinds in document order.

        Example:
            >>> AppSettings().markerPattern_make().findall("<!-- MODRINTH_EXCLUDE_END -->")
            [('', 'MODRINTH_EXCLUDE_END')]
        """
        start = re.escape(self.exclude_start_token)
        end = re.escape(self.exclude_end_token)
        return re.compile(rf"<!--\s*(?:(?P<start>{start})|(?P<end>{end}))\s*-->")


class GitHubContext(BaseSettings):
    """
    Runner context exported by GitHub Actions.

    Every field is optional so the tool also runs outside a workflow.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    repository: str = ""
    ref: str = ""
    head_ref: str = ""
    output: Optional[str] = None
    workspace: Optional[str] = None


# Singleton instance - import this in your code
appsettings = AppSettings()
