"""Configuration resolution for account-ledger.

Backend URL priority order (highest to lowest):
1. --url / -u CLI argument
2. ACCOUNT_LEDGER_URL environment variable
3. ~/.config/account-ledger/config.toml -> api_url key
4. http://localhost:8000 (default)
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

_CONFIG_PATH = Path.home() / ".config" / "account-ledger" / "config.toml"

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except (OSError, ValueError):
        return {}


def load_theme() -> str | None:
    """Return the saved theme name, or None if not set.

    Returns:
        Theme name string (e.g. 'textual-dark'), or None.
    """
    return _load_config_dict().get("theme")


def load_timeout() -> float:
    """Return the request timeout in seconds from config.toml.

    Falls back to :data:`DEFAULT_TIMEOUT` when missing, non-numeric or not
    positive.
    """
    raw = _load_config_dict().get("timeout")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def load_log_settings() -> tuple[str | None, Path | None]:
    """Return ``(log_level, log_file)`` from config.toml.

    Either element is None when not configured.
    """
    config = _load_config_dict()
    level = config.get("log_level")
    log_file = config.get("log_file")
    return (
        str(level) if level else None,
        Path(log_file).expanduser() if log_file else None,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace with 'url' and 'log_level' attributes.
    """
    parser = argparse.ArgumentParser(
        prog="account-ledger",
        description="A terminal client for browsing account transactions.",
    )
    parser.add_argument(
        "-u",
        "--url",
        help="Base URL of the accounts backend.",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
        default=None,
    )
    return parser.parse_args(argv)


def _validate_url(url: str, source: str) -> str:
    """Return *url* without a trailing slash, or exit if it is not http(s)."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        print(f"Error: invalid backend URL from {source}: {url}", file=sys.stderr)
        sys.exit(1)
    return url.rstrip("/")


def resolve_api_url(cli_url: str | None = None) -> str:
    """Resolve the backend URL using the priority chain.

    Args:
        cli_url: Value from the --url CLI argument, if provided.

    Returns:
        The backend base URL.

    Raises:
        SystemExit: If the chosen URL is not an http(s) URL.
    """
    # 1. CLI argument
    if cli_url:
        return _validate_url(cli_url, "--url")

    # 2. Environment variable
    env_url = os.environ.get("ACCOUNT_LEDGER_URL")
    if env_url:
        return _validate_url(env_url, "ACCOUNT_LEDGER_URL")

    # 3. config.toml
    toml_url = _load_config_dict().get("api_url")
    if toml_url:
        return _validate_url(str(toml_url), "config.toml")

    # 4. Default
    return DEFAULT_API_URL
