"""Global state management for ipa_mcp."""

from ipa_mcp.config import Config
from ipa_mcp.exceptions import SSHError
from ipa_mcp.services.fleet import SSHFleet
from ipa_mcp.services.rpc_client import FreeIPAClient

# Global state (initialized on first access)
_config: Config | None = None
_client: FreeIPAClient | None = None
_fleet: SSHFleet | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_client() -> FreeIPAClient:
    """Get or create the shared FreeIPA client.

    The client is created unauthenticated. Tools authenticate it lazily.
    """
    global _client
    if _client is None:
        config = get_config()
        _client = FreeIPAClient(
            server=config.freeipa.server,
            username=config.freeipa.username,
            password=config.freeipa.password,
            verify_ssl=config.freeipa.verify_ssl,
            timeout=config.freeipa.timeout,
        )
    return _client


def get_fleet() -> SSHFleet:
    """Get or create the SSH fleet.

    Raises:
        SSHError: If strict host key checking is on and known_hosts is missing
    """
    global _fleet
    if _fleet is None:
        config = get_config()
        try:
            known_hosts = config.known_hosts_path
        except FileNotFoundError as e:
            raise SSHError(str(e)) from e
        _fleet = SSHFleet(
            username=config.ssh.username,
            password=config.ssh.password,
            port=config.ssh.port,
            timeout=config.ssh.timeout,
            domain=config.sssd.domain,
            known_hosts=known_hosts,
        )
    return _fleet


def peek_client() -> FreeIPAClient | None:
    """Return the client if one was created, without creating it."""
    return _client


def reset_state() -> None:
    """Reset global state for testing.

    This function clears the singleton instances, allowing tests
    to start with fresh state. Should only be used in test fixtures.
    """
    global _config, _client, _fleet
    _config = None
    _client = None
    _fleet = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config


def set_client(client: FreeIPAClient) -> None:
    """Set the global FreeIPA client instance."""
    global _client
    _client = client


def set_fleet(fleet: SSHFleet) -> None:
    """Set the global SSH fleet instance."""
    global _fleet
    _fleet = fleet
