"""Tests for configuration resolution."""

from pathlib import Path

import pytest

from account_ledger import config
from account_ledger.config import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    load_log_settings,
    load_theme,
    load_timeout,
    parse_args,
    resolve_api_url,
)


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch) -> Path:
    """Point the config module at a temporary config.toml."""
    path = tmp_path / "config.toml"
    monkeypatch.setattr(config, "_CONFIG_PATH", path)
    monkeypatch.delenv("ACCOUNT_LEDGER_URL", raising=False)
    return path


class TestParseArgs:
    """Tests for CLI argument parsing."""

    def test_url_short_flag(self):
        args = parse_args(["-u", "http://localhost:9000"])
        assert args.url == "http://localhost:9000"

    def test_url_long_flag(self):
        args = parse_args(["--url", "http://localhost:9000"])
        assert args.url == "http://localhost:9000"

    def test_log_level(self):
        assert parse_args(["--log-level", "DEBUG"]).log_level == "DEBUG"

    def test_no_args(self):
        args = parse_args([])
        assert args.url is None
        assert args.log_level is None


class TestResolveApiUrl:
    """Tests for backend URL resolution."""

    def test_cli_url_takes_priority(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("ACCOUNT_LEDGER_URL", "http://env.test")
        config_file.write_text('api_url = "http://toml.test"\n')
        assert resolve_api_url(cli_url="http://cli.test/") == "http://cli.test"

    def test_env_variable(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("ACCOUNT_LEDGER_URL", "https://env.test")
        config_file.write_text('api_url = "http://toml.test"\n')
        assert resolve_api_url() == "https://env.test"

    def test_config_toml(self, config_file: Path):
        config_file.write_text('api_url = "http://toml.test"\n')
        assert resolve_api_url() == "http://toml.test"

    def test_default(self, config_file: Path):
        assert resolve_api_url() == DEFAULT_API_URL

    def test_invalid_cli_url_exits(self, config_file: Path):
        with pytest.raises(SystemExit):
            resolve_api_url(cli_url="localhost:8000")

    def test_invalid_env_url_exits(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("ACCOUNT_LEDGER_URL", "ftp://env.test")
        with pytest.raises(SystemExit):
            resolve_api_url()


class TestConfigValues:
    """Tests for the other config.toml keys."""

    def test_theme(self, config_file: Path):
        config_file.write_text('theme = "nord"\n')
        assert load_theme() == "nord"

    def test_missing_file(self, config_file: Path):
        assert load_theme() is None
        assert load_timeout() == DEFAULT_TIMEOUT
        assert load_log_settings() == (None, None)

    def test_broken_toml_is_ignored(self, config_file: Path):
        config_file.write_text("theme = \n")
        assert load_theme() is None

    def test_timeout(self, config_file: Path):
        config_file.write_text("timeout = 2.5\n")
        assert load_timeout() == 2.5

    @pytest.mark.parametrize("raw", ['"fast"', "0", "-3"])
    def test_invalid_timeout_falls_back(self, config_file: Path, raw: str):
        config_file.write_text(f"timeout = {raw}\n")
        assert load_timeout() == DEFAULT_TIMEOUT

    def test_log_settings(self, config_file: Path, tmp_path: Path):
        log_path = tmp_path / "ledger.log"
        config_file.write_text(f'log_level = "debug"\nlog_file = "{log_path}"\n')
        assert load_log_settings() == ("debug", log_path)
