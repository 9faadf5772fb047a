"""
Tests for configuration loading and validation.
"""
import logging

import pytest

from tf_aws_docs.config import DocsServerConfig
from tf_aws_docs.config_loader import load_config_from_env
from tf_aws_docs.config_validator import (
    GITHUB_TOKEN_ENV_VARS,
    _mask_secret,
    get_github_token,
    validate_github_token,
    validate_path,
)
from tf_aws_docs.exceptions import ConfigurationError
from tf_aws_docs.utils.logging_config import configure_logging, resolve_log_level

CONFIG_ENV_VARS = (
    "TF_AWS_DOCS_DIR",
    "TF_AWS_RESOURCE_DOCS_DIR",
    "TF_AWS_DATASOURCE_DOCS_DIR",
    "DOCS_SOURCE",
    "FUZZY_THRESHOLD",
    "FUZZY_SCORER",
    "GITHUB_API_URL",
    "GITHUB_TIMEOUT",
    "LOG_LEVEL",
) + GITHUB_TOKEN_ENV_VARS

VALID_TOKEN = "ghp_" + "A1b2C3d4E5f6G7h8I9j0"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfigFromEnv:

    def test_defaults(self):
        """Test that an empty environment yields the default configuration."""
        config = load_config_from_env(load_env_file=False)

        assert config == DocsServerConfig(
            resource_docs_dir="data/remote-docs/tf-aws-resources",
            datasource_docs_dir="data/remote-docs/tf-aws-datasources",
        )
        assert config.fuzzy_threshold == 3
        assert config.fuzzy_scorer == "levenshtein"
        assert config.docs_source == "local"

    def test_docs_dir_and_overrides(self, monkeypatch):
        """Test that the docs root and explicit overrides are applied."""
        monkeypatch.setenv("TF_AWS_DOCS_DIR", "/srv/docs")
        monkeypatch.setenv("TF_AWS_DATASOURCE_DOCS_DIR", "/elsewhere/d")
        monkeypatch.setenv("DOCS_SOURCE", "GitHub")
        monkeypatch.setenv("FUZZY_THRESHOLD", "5")
        monkeypatch.setenv("FUZZY_SCORER", "rapidfuzz")
        monkeypatch.setenv("GITHUB_TIMEOUT", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = load_config_from_env(load_env_file=False)

        assert config.resource_docs_dir == "/srv/docs/tf-aws-resources"
        assert config.datasource_docs_dir == "/elsewhere/d"
        assert config.docs_source == "github"
        assert config.fuzzy_threshold == 5
        assert config.fuzzy_scorer == "rapidfuzz"
        assert config.github_timeout == 2.5
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("FUZZY_THRESHOLD", "three"),
            ("FUZZY_THRESHOLD", "-1"),
            ("FUZZY_SCORER", "soundex"),
            ("DOCS_SOURCE", "s3"),
            ("GITHUB_TIMEOUT", "0"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        """Test that invalid values raise ConfigurationError naming the variable."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError, match=name):
            load_config_from_env(load_env_file=False)

    def test_blank_value_uses_default(self, monkeypatch):
        """Test that a blank value falls back to the default."""
        monkeypatch.setenv("FUZZY_THRESHOLD", "  ")
        assert load_config_from_env(load_env_file=False).fuzzy_threshold == 3


class TestGitHubToken:

    @pytest.mark.parametrize(
        "token",
        [VALID_TOKEN, "ghs_" + "Z" * 36, "a" * 40],
    )
    def test_valid_tokens(self, token):
        """Test that well-formed GitHub tokens pass validation."""
        assert validate_github_token(token) == token

    def test_missing_token(self):
        """Test that a missing token names the environment variables."""
        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            validate_github_token(None)

    def test_malformed_token_is_masked(self):
        """Test that a malformed token is masked in the error message."""
        with pytest.raises(ConfigurationError) as excinfo:
            validate_github_token("not-a-real-token-value")
        assert "not-a-real-token-value" not in str(excinfo.value)
        assert "not-...alue" in str(excinfo.value)

    def test_env_lookup_order(self, monkeypatch):
        """Test that GH_TOKEN is preferred over GITHUB_PERSONAL_ACCESS_TOKEN."""
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "b" * 40)
        assert get_github_token() == "b" * 40

        monkeypatch.setenv("GH_TOKEN", VALID_TOKEN)
        assert get_github_token() == VALID_TOKEN

    def test_env_lookup_without_token(self):
        """Test that no token in the environment is an error."""
        with pytest.raises(ConfigurationError):
            get_github_token()


class TestHelpers:

    def test_mask_short_secret(self):
        """Test that short secrets are fully masked."""
        assert _mask_secret("short") == "***"

    def test_validate_path(self, tmp_path):
        """Test path validation for existing, missing and empty paths."""
        assert validate_path(str(tmp_path), "Docs dir", must_exist=True) == str(tmp_path)
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_path(str(tmp_path / "missing"), "Docs dir", must_exist=True)
        with pytest.raises(ConfigurationError, match="is required"):
            validate_path("", "Docs dir")


class TestLoggingConfig:

    def test_resolve_log_level(self):
        """Test that level names resolve and unknown names are rejected."""
        assert resolve_log_level("debug") == logging.DEBUG
        with pytest.raises(ConfigurationError):
            resolve_log_level("chatty")

    def test_configure_logging_quiets_httpx(self):
        """Test that httpx request logging stays at WARNING or above."""
        assert configure_logging("DEBUG", force=True) == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
