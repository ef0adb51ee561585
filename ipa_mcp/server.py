"""ipa_mcp FastMCP server.

This is a thin wrapper that wires together the MCP server with its tools.
All business logic is delegated to the tools/ and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ipa_mcp.config import Settings
from ipa_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from ipa_mcp.services import get_config, peek_client
from ipa_mcp.tools import TOOLS
from ipa_mcp.utils.console import ColorfulFormatter

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncssh",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure colorful logging for the ipa_mcp package.

    Called at module load time so logging is configured before any logger
    is used, regardless of how the server is started.
    """
    settings = Settings.from_env()
    use_colors = settings.log_colors and sys.stderr.isatty()

    ipa_logger = logging.getLogger("ipa_mcp")
    ipa_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not ipa_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        ipa_logger.addHandler(handler)
        ipa_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        lg = logging.getLogger(noisy_logger)
        lg.setLevel(logging.WARNING)
        lg.handlers = []
        lg.propagate = False

    # stdout carries the stdio transport, keep the root logger quiet
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log configuration at startup and close the FreeIPA client on shutdown.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the configured FreeIPA server and SSSD domain
    """
    config = get_config()
    logger.info("ipa_mcp server starting up")
    logger.info(
        "FreeIPA server %s as %s (verify_ssl=%s), SSSD domain %s",
        config.freeipa.server,
        config.freeipa.username,
        config.freeipa.verify_ssl,
        config.sssd.domain,
    )
    logger.info("ipa_mcp server ready with %d tool(s)", len(TOOLS))

    try:
        yield {"server": config.freeipa.server, "domain": config.sssd.domain}
    finally:
        logger.info("ipa_mcp server shutting down")
        client = peek_client()
        if client is not None:
            await client.close()
        logger.info("ipa_mcp server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging (with integrated timing)

    Args:
        server: The FastMCP server to configure.
        settings: Process settings controlling payload logging, slow-call
            threshold and tracebacks.
    """
    # First added = innermost
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=settings.include_traceback))
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware and tools.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("ipa_mcp", lifespan=app_lifespan)

    configure_middleware(server, Settings.from_env())

    for tool in TOOLS:
        server.tool()(tool)

    # Health check endpoint for HTTP transport
    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
