"""Tests for multi-source token resolution.

This module tests the CredentialResolver class which finds the Terraform
Enterprise API token from explicit values, the environment, .env files,
token files and the Terraform CLI credentials file.
"""

import json
import logging

import pytest

from tfe_client.auth import CredentialResolver
from tfe_client.auth.exceptions import CredentialFileError, CredentialNotFoundError


@pytest.fixture
def cli_config(tmp_path):
    """Write a Terraform CLI credentials file and return its path."""
    path = tmp_path / "credentials.tfrc.json"

    def write(content):
        path.write_text(content if isinstance(content, str) else json.dumps(content))
        return path

    return write


@pytest.fixture
def resolver(tmp_path):
    """Resolver that skips .env and reads no real CLI credentials."""
    return CredentialResolver(load_dotenv=False, cli_config_path=tmp_path / "missing.tfrc.json")


class TestCredentialResolverInit:
    """Test CredentialResolver initialization."""

    @pytest.mark.unit
    def test_init_skip_dotenv(self):
        resolver = CredentialResolver(load_dotenv=False)
        assert not resolver._dotenv_loaded

    @pytest.mark.unit
    def test_dotenv_file_is_loaded(self, tmp_path, monkeypatch):
        """Values from .env become visible through the environment."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TFE_TOKEN=dotenv-token\n")
        # Registered with monkeypatch so the value python-dotenv sets is removed on teardown
        monkeypatch.setenv("TFE_TOKEN", "placeholder")
        monkeypatch.delenv("TFE_TOKEN")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file), cli_config_path=tmp_path / "none.json")

        assert resolver._dotenv_loaded
        assert resolver.resolve_token() == "dotenv-token"

    @pytest.mark.unit
    def test_dotenv_loaded_only_once(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_VAR=test_value\n")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))
        resolver._ensure_dotenv_loaded()
        resolver._ensure_dotenv_loaded()

        assert resolver._dotenv_loaded is True


class TestCredentialResolverResolve:
    """Test single-setting resolution and its priority ordering."""

    @pytest.mark.unit
    def test_explicit_value_overrides_all(self, resolver, monkeypatch):
        monkeypatch.setenv("TFE_ADDRESS", "https://env.example.com")

        result = resolver.resolve(
            value="https://explicit.example.com",
            env_var_name="TFE_ADDRESS",
            default="https://app.terraform.io",
        )

        assert result == "https://explicit.example.com"

    @pytest.mark.unit
    def test_environment_overrides_default(self, resolver, monkeypatch):
        monkeypatch.setenv("TFE_ADDRESS", "https://env.example.com")

        result = resolver.resolve(env_var_name="TFE_ADDRESS", default="https://app.terraform.io")

        assert result == "https://env.example.com"

    @pytest.mark.unit
    def test_default_used_when_nothing_else_set(self, resolver):
        assert resolver.resolve(env_var_name="TFE_ADDRESS", default="https://app.terraform.io") == (
            "https://app.terraform.io"
        )

    @pytest.mark.unit
    def test_returns_none_when_not_found(self, resolver):
        assert resolver.resolve(env_var_name="TEST_NONEXISTENT_VAR") is None

    @pytest.mark.unit
    def test_raises_when_required_and_not_found(self, resolver):
        with pytest.raises(CredentialNotFoundError) as exc_info:
            resolver.resolve(env_var_name="TEST_NONEXISTENT_VAR", required=True)

        assert "Required credential not found" in str(exc_info.value)
        assert exc_info.value.env_var_name == "TEST_NONEXISTENT_VAR"


class TestCredentialResolverFromFile:
    """Test file-based credential resolution."""

    @pytest.mark.unit
    def test_strips_whitespace(self, resolver, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("  file-token  \n")

        assert resolver.resolve_from_file(file_path=str(token_file)) == "file-token"

    @pytest.mark.unit
    def test_path_from_env_var(self, resolver, tmp_path, monkeypatch):
        token_file = tmp_path / "token"
        token_file.write_text("env-path-token")
        monkeypatch.setenv("TFE_TOKEN_FILE", str(token_file))

        assert resolver.resolve_from_file(env_var_name="TFE_TOKEN_FILE") == "env-path-token"

    @pytest.mark.unit
    def test_tilde_expansion(self, resolver, tmp_path, monkeypatch):
        fake_home = tmp_path / "home"
        (fake_home / ".tfe").mkdir(parents=True)
        (fake_home / ".tfe" / "token").write_text("home-token")
        monkeypatch.setenv("HOME", str(fake_home))

        assert resolver.resolve_from_file(file_path="~/.tfe/token") == "home-token"

    @pytest.mark.unit
    def test_missing_file(self, resolver):
        assert resolver.resolve_from_file(file_path="/nonexistent/token") is None

        with pytest.raises(CredentialFileError, match="not found"):
            resolver.resolve_from_file(file_path="/nonexistent/token", required=True)

    @pytest.mark.unit
    def test_directory_instead_of_file(self, resolver, tmp_path):
        directory = tmp_path / "dir_not_file"
        directory.mkdir()

        assert resolver.resolve_from_file(file_path=str(directory)) is None

        with pytest.raises(CredentialFileError):
            resolver.resolve_from_file(file_path=str(directory), required=True)

    @pytest.mark.unit
    def test_env_var_not_set(self, resolver):
        assert resolver.resolve_from_file(env_var_name="TFE_TOKEN_FILE") is None

        with pytest.raises(CredentialFileError, match="TFE_TOKEN_FILE"):
            resolver.resolve_from_file(env_var_name="TFE_TOKEN_FILE", required=True)


class TestCliConfig:
    """Test reading tokens stored by ``terraform login``."""

    @pytest.mark.unit
    def test_token_for_hostname(self, cli_config):
        path = cli_config(
            {
                "credentials": {
                    "app.terraform.io": {"token": "cloud-token"},
                    "tfe.example.com": {"token": "private-token"},
                }
            }
        )
        resolver = CredentialResolver(load_dotenv=False, cli_config_path=path)

        assert resolver.resolve_from_cli_config("tfe.example.com") == "private-token"
        assert resolver.resolve_from_cli_config("app.terraform.io") == "cloud-token"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "content",
        [
            {"credentials": {"other.example.com": {"token": "x"}}},
            {"credentials": {"tfe.example.com": "not-an-object"}},
            {"credentials": []},
            [],
        ],
    )
    def test_no_token_for_hostname(self, cli_config, content):
        resolver = CredentialResolver(load_dotenv=False, cli_config_path=cli_config(content))

        assert resolver.resolve_from_cli_config("tfe.example.com") is None

    @pytest.mark.unit
    def test_missing_file(self, resolver):
        assert resolver.resolve_from_cli_config("app.terraform.io") is None

    @pytest.mark.unit
    def test_invalid_json(self, cli_config):
        resolver = CredentialResolver(load_dotenv=False, cli_config_path=cli_config("{not json"))

        with pytest.raises(CredentialFileError, match="Invalid Terraform CLI credentials file"):
            resolver.resolve_from_cli_config("app.terraform.io")


class TestResolveToken:
    """Test token resolution across all sources."""

    @pytest.mark.unit
    def test_explicit_value_first(self, resolver, monkeypatch):
        monkeypatch.setenv("TFE_TOKEN", "env-token")

        assert resolver.resolve_token(value="explicit-token") == "explicit-token"

    @pytest.mark.unit
    def test_env_var_before_file(self, resolver, tmp_path, monkeypatch):
        token_file = tmp_path / "token"
        token_file.write_text("file-token")
        monkeypatch.setenv("TFE_TOKEN", "env-token")
        monkeypatch.setenv("TFE_TOKEN_FILE", str(token_file))

        assert resolver.resolve_token() == "env-token"

    @pytest.mark.unit
    def test_file_before_cli_config(self, cli_config, tmp_path, monkeypatch):
        token_file = tmp_path / "token"
        token_file.write_text("file-token")
        monkeypatch.setenv("TFE_TOKEN_FILE", str(token_file))
        path = cli_config({"credentials": {"app.terraform.io": {"token": "cli-token"}}})

        resolver = CredentialResolver(load_dotenv=False, cli_config_path=path)

        assert resolver.resolve_token() == "file-token"

    @pytest.mark.unit
    def test_falls_back_to_cli_config(self, cli_config):
        path = cli_config({"credentials": {"tfe.example.com": {"token": "cli-token"}}})
        resolver = CredentialResolver(load_dotenv=False, cli_config_path=path)

        assert resolver.resolve_token(hostname="tfe.example.com") == "cli-token"

    @pytest.mark.unit
    def test_required_and_missing(self, resolver):
        assert resolver.resolve_token() is None

        with pytest.raises(CredentialNotFoundError) as exc_info:
            resolver.resolve_token(hostname="tfe.example.com", required=True)

        assert "tfe.example.com" in str(exc_info.value)
        assert exc_info.value.env_var_name == "TFE_TOKEN"


class TestCredentialMasking:
    """Test that token values never reach the logs."""

    @pytest.mark.unit
    def test_explicit_token_is_masked(self, resolver, caplog):
        caplog.set_level(logging.DEBUG)

        resolver.resolve_token(value="super-secret-token")

        assert "super-secret-token" not in caplog.text
        assert "***" in caplog.text

    @pytest.mark.unit
    def test_masking_can_be_disabled(self, resolver, caplog):
        caplog.set_level(logging.DEBUG)

        resolver.resolve(value="https://tfe.example.com", mask_in_logs=False)

        assert "https://tfe.example.com" in caplog.text

    @pytest.mark.unit
    def test_cli_config_token_is_masked(self, cli_config, caplog):
        caplog.set_level(logging.DEBUG)
        path = cli_config({"credentials": {"app.terraform.io": {"token": "cli-secret"}}})

        CredentialResolver(load_dotenv=False, cli_config_path=path).resolve_token()

        assert "cli-secret" not in caplog.text
