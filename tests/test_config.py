"""Tests for environment-driven configuration."""

import pytest

from commit_to_pr.config import ServerConfig
from commit_to_pr.errors import ConfigurationError

CONFIG_ENV_VARS = (
    "COMMIT_TO_PR_PROVIDER",
    "GH_PATH",
    "GIT_PATH",
    "GH_HOST",
    "COMMIT_TO_PR_COMMAND_TIMEOUT",
    "LOG_LEVEL",
    "ENABLE_TRACING",
    "TRACE_EXPORTER",
    "GOOGLE_CLOUD_PROJECT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestServerConfig:
    """Test cases for ServerConfig.from_env."""

    def test_defaults(self, clean_env):
        assert ServerConfig.from_env() == ServerConfig()

    def test_reads_environment(self, clean_env):
        clean_env.setenv("GH_PATH", "/opt/gh")
        clean_env.setenv("GH_HOST", "github.example.com")
        clean_env.setenv("COMMIT_TO_PR_COMMAND_TIMEOUT", "30")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("ENABLE_TRACING", "true")
        clean_env.setenv("TRACE_EXPORTER", "Cloud")

        config = ServerConfig.from_env()

        assert config.gh_path == "/opt/gh"
        assert config.gh_host == "github.example.com"
        assert config.command_timeout == 30.0
        assert config.log_level == "DEBUG"
        assert config.enable_tracing is True
        assert config.trace_exporter == "cloud"

    @pytest.mark.parametrize("value", ["soon", "0", "-5"])
    def test_invalid_timeout(self, clean_env, value):
        clean_env.setenv("COMMIT_TO_PR_COMMAND_TIMEOUT", value)
        with pytest.raises(ConfigurationError, match="COMMIT_TO_PR_COMMAND_TIMEOUT"):
            ServerConfig.from_env()

    def test_overrides_skip_none(self):
        config = ServerConfig().with_overrides(provider="github", log_level=None)
        assert config.log_level == "INFO"
        assert config.provider == "github"
