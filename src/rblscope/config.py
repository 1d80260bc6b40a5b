"""
Configuration management for RBLScope.

Loads query tuning and logging settings from environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv


DEFAULT_QUERY_TIMEOUT_MS = 1000
DEFAULT_CONCURRENCY = 8

# Check common locations for .env
ENV_LOCATIONS = [
    Path.home() / ".rblscope" / ".env",
    Path.home() / ".config" / "rblscope" / ".env",
    Path.cwd() / ".env",
]


def load_env_file() -> Path | None:
    """Load the first .env file found, returning its path."""
    for env_path in ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class RBLConfig:
    """Settings for the DNSBL query engine."""

    # Deadline applied to every individual A/TXT lookup
    query_timeout_ms: int = DEFAULT_QUERY_TIMEOUT_MS

    # Maximum number of provider queries in flight at once
    concurrency: int = DEFAULT_CONCURRENCY

    # Empty means use the system resolver configuration
    nameservers: tuple[str, ...] = field(default_factory=tuple)

    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self):
        if self.query_timeout_ms < 1:
            raise ValueError("query_timeout_ms must be at least 1")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    @classmethod
    def from_env(cls) -> "RBLConfig":
        """Load configuration from environment variables."""
        nameservers_env = os.getenv("RBLSCOPE_NAMESERVERS", "")
        nameservers = tuple(
            ns.strip() for ns in nameservers_env.split(",") if ns.strip()
        )

        return cls(
            query_timeout_ms=_positive_int(
                "RBLSCOPE_QUERY_TIMEOUT_MS", DEFAULT_QUERY_TIMEOUT_MS
            ),
            concurrency=_positive_int("RBLSCOPE_CONCURRENCY", DEFAULT_CONCURRENCY),
            nameservers=nameservers,
            log_level=os.getenv("RBLSCOPE_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("RBLSCOPE_LOG_FILE") or None,
        )


# Global config instance
_config: RBLConfig | None = None


def get_config() -> RBLConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        load_env_file()
        _config = RBLConfig.from_env()
    return _config


def set_config(config: RBLConfig | None) -> None:
    """Set (or reset, with None) the global configuration instance."""
    global _config
    _config = config
