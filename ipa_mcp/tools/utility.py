"""Connectivity and server information tools."""

from typing import Any

from ipa_mcp.services import get_config
from ipa_mcp.tools.session import ipa_session


async def freeipa_ping() -> dict[str, Any]:
    """Test connectivity to the FreeIPA server."""
    async with ipa_session() as client:
        response = await client.ping()
    return {
        "status": "connected",
        "server": get_config().freeipa.server,
        "response": response,
    }


async def freeipa_get_server_info() -> dict[str, Any]:
    """Get FreeIPA server environment information."""
    async with ipa_session() as client:
        info = await client.get_server_info()
    return {"server": get_config().freeipa.server, "info": info}
