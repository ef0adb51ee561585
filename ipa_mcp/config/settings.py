"""Process settings from environment variables.

Centralized environment variable parsing for the server process itself
(transport, logging, SSH host keys). FreeIPA/SSH/SSSD settings live in
``Config``.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Server process settings from environment."""

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    # Configuration file
    config_path: str = field(default="config.yaml")

    # SSH host keys
    known_hosts: str | None = field(default=None)
    strict_host_key_checking: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from IPA_MCP_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            transport=cls._get_transport(),
            http_host=os.getenv("IPA_MCP_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("IPA_MCP_HTTP_PORT", 8000),
            log_level=os.getenv("IPA_MCP_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("IPA_MCP_LOG_COLORS", True),
            log_payloads=cls._get_bool("IPA_MCP_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("IPA_MCP_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("IPA_MCP_INCLUDE_TRACEBACK", False),
            config_path=os.getenv("IPA_MCP_CONFIG", "config.yaml"),
            known_hosts=os.getenv("IPA_MCP_KNOWN_HOSTS") or None,
            strict_host_key_checking=cls._get_bool("IPA_MCP_STRICT_HOST_KEY_CHECKING", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment, falling back on bad values."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport ("stdio" or "http"), defaulting to stdio."""
        transport = os.getenv("IPA_MCP_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
