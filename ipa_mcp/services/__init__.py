"""Services for ipa_mcp."""

from ipa_mcp.services.fleet import SSHFleet
from ipa_mcp.services.rpc_client import FreeIPAClient, join_session_cookies
from ipa_mcp.services.state import (
    get_client,
    get_config,
    get_fleet,
    peek_client,
    reset_state,
    set_client,
    set_config,
    set_fleet,
)

__all__ = [
    "FreeIPAClient",
    "SSHFleet",
    "get_client",
    "get_config",
    "get_fleet",
    "join_session_cookies",
    "peek_client",
    "reset_state",
    "set_client",
    "set_config",
    "set_fleet",
]
