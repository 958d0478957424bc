"""Configuration for the commit-to-PR MCP server.

Settings come from the process environment, optionally seeded from a local
.env file, and are read once at startup into a ServerConfig.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from commit_to_pr.errors import ConfigurationError
from commit_to_pr.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PROVIDER = "github"
DEFAULT_GH_HOST = "github.com"


def setup_environment(load_env_file: bool = True) -> None:
    """Set up environment for the server.

    Args:
        load_env_file: Whether to load a .env file from the working directory.
                       Existing environment variables are never overridden.
    """
    if load_env_file and load_dotenv():
        logger.debug("Loaded environment from .env file")


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(
            f"COMMIT_TO_PR_COMMAND_TIMEOUT must be a number of seconds, got '{value}'"
        ) from None
    if timeout <= 0:
        raise ConfigurationError(
            f"COMMIT_TO_PR_COMMAND_TIMEOUT must be positive, got '{value}'"
        )
    return timeout


@dataclass(frozen=True)
class ServerConfig:
    """Runtime settings for the server.

    Attributes:
        provider: Code-host provider name passed to get_platform
        gh_path: GitHub CLI executable
        git_path: git executable
        gh_host: Host name accepted when parsing git remote URLs
        command_timeout: Optional timeout in seconds for each CLI invocation
        log_level: Log level name
        enable_tracing: Whether OpenTelemetry tracing is installed
        trace_exporter: 'console' or 'cloud'
        google_cloud_project: Project ID for the cloud trace exporter
    """

    provider: str = DEFAULT_PROVIDER
    gh_path: str = "gh"
    git_path: str = "git"
    gh_host: str = DEFAULT_GH_HOST
    command_timeout: Optional[float] = None
    log_level: str = "INFO"
    enable_tracing: bool = False
    trace_exporter: str = "console"
    google_cloud_project: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(
            provider=os.getenv("COMMIT_TO_PR_PROVIDER", DEFAULT_PROVIDER),
            gh_path=os.getenv("GH_PATH") or "gh",
            git_path=os.getenv("GIT_PATH") or "git",
            gh_host=os.getenv("GH_HOST") or DEFAULT_GH_HOST,
            command_timeout=_parse_timeout(os.getenv("COMMIT_TO_PR_COMMAND_TIMEOUT")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            enable_tracing=_parse_bool(os.getenv("ENABLE_TRACING")),
            trace_exporter=os.getenv("TRACE_EXPORTER", "console").lower(),
            google_cloud_project=os.getenv("GOOGLE_CLOUD_PROJECT"),
        )

    def with_overrides(self, **overrides: Optional[str]) -> "ServerConfig":
        """Return a copy with the given non-None fields replaced."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
