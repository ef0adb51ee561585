"""Entry point for ipa_mcp server."""

import logging

from ipa_mcp.server import mcp  # This import also configures logging
from ipa_mcp.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()
    settings = config.settings

    if settings.transport == "stdio":
        logger.info("Starting ipa_mcp server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting ipa_mcp server (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        mcp.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


if __name__ == "__main__":
    run_server()
