"""Shared tool plumbing: lazy FreeIPA login and error conversion.

Tools never let library exceptions escape. Every ``IPAMCPError`` is turned
into a ``ToolError`` whose text reads ``Error: <message>``, which FastMCP
returns to the client as an error result.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp.exceptions import ToolError

from ipa_mcp.exceptions import (
    APIError,
    AuthenticationError,
    IPAMCPError,
    NotAuthenticatedError,
)
from ipa_mcp.services import get_client
from ipa_mcp.services.rpc_client import FreeIPAClient

logger = logging.getLogger(__name__)


def is_session_failure(error: Exception) -> bool:
    """True if the error means the FreeIPA session is no longer usable."""
    if isinstance(error, (NotAuthenticatedError, AuthenticationError)):
        return True
    if isinstance(error, APIError) and 401 in (error.status, error.code):
        return True
    text = str(error).lower()
    return "unauthorized" in text or "session" in text


@asynccontextmanager
async def ipa_session() -> AsyncIterator[FreeIPAClient]:
    """Yield an authenticated FreeIPA client.

    Logs in on first use. When a call fails with an authorization error the
    session is dropped, so the next tool call logs in again.

    Raises:
        ToolError: For any ipa_mcp error raised inside the block
    """
    client = get_client()
    try:
        if not client.is_authenticated:
            await client.authenticate()
        yield client
    except IPAMCPError as e:
        if is_session_failure(e):
            logger.info("FreeIPA session rejected, will re-authenticate: %s", e)
            client.invalidate_session()
        raise ToolError(f"Error: {e}") from e


@asynccontextmanager
async def fleet_errors() -> AsyncIterator[None]:
    """Convert SSH and validation errors into ToolError."""
    try:
        yield
    except IPAMCPError as e:
        raise ToolError(f"Error: {e}") from e
