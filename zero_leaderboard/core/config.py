"""Configuration for the leaderboard site.

Values are loaded once at startup (environment variables or a .env file)
and handed explicitly to the web app and the orchestrator.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_TOKEN_ADDRESS = "0x88129563b5cd13bd6f0e2dae364b35a5771cbc5e"
DEFAULT_EXPLORER_URL = "https://zero-network.calderaexplorer.xyz"
DEFAULT_IDENTITY_URL = "https://zpi.zerion.io"

_TRUTHY = {"1", "true", "yes", "on", "production"}


@dataclass(frozen=True)
class LeaderboardConfig:
    """Settings for one leaderboard deployment."""

    # Token contract whose holders are ranked
    token_address: str = DEFAULT_TOKEN_ADDRESS

    # Blockscout-compatible explorer (holders, counters, token metadata)
    explorer_base_url: str = DEFAULT_EXPLORER_URL

    # Zerion wallet-meta API (address -> handle)
    identity_base_url: str = DEFAULT_IDENTITY_URL

    # Enables the www -> apex canonical redirect
    production: bool = False

    http_timeout_seconds: float = 30.0
    identity_batch_size: int = 10

    site_title: str = "0"

    @classmethod
    def from_env(cls) -> "LeaderboardConfig":
        """Load configuration from environment variables."""
        timeout = os.getenv("ZERO_HTTP_TIMEOUT")
        try:
            timeout_seconds = float(timeout) if timeout else 30.0
        except ValueError:
            raise ConfigurationError("ZERO_HTTP_TIMEOUT", f"not a number: {timeout!r}")

        return cls(
            token_address=os.getenv("ZERO_TOKEN_ADDRESS", DEFAULT_TOKEN_ADDRESS),
            explorer_base_url=os.getenv("ZERO_EXPLORER_URL", DEFAULT_EXPLORER_URL),
            identity_base_url=os.getenv("ZERO_IDENTITY_URL", DEFAULT_IDENTITY_URL),
            production=os.getenv("ZERO_PRODUCTION", "").strip().lower() in _TRUTHY,
            http_timeout_seconds=timeout_seconds,
        )

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> "LeaderboardConfig":
        """
        Load configuration from .env file and environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                      looks for .env in the project root.

        Returns:
            Validated LeaderboardConfig
        """
        if env_file:
            load_dotenv(env_file)
        else:
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        config = cls.from_env()
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError for values the fetchers cannot use."""
        if not self.token_address.startswith("0x") or len(self.token_address) != 42:
            raise ConfigurationError("token_address", f"not an EVM address: {self.token_address}")
        for key in ("explorer_base_url", "identity_base_url"):
            url = getattr(self, key)
            if not url.startswith(("http://", "https://")):
                raise ConfigurationError(key, f"expected an http(s) URL, got {url!r}")
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError("http_timeout_seconds", "must be positive")
        if self.identity_batch_size <= 0:
            raise ConfigurationError("identity_batch_size", "must be positive")
