"""ipa_mcp middleware components."""

from ipa_mcp.middleware.base import IPAMiddleware
from ipa_mcp.middleware.errors import ErrorHandlingMiddleware
from ipa_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "IPAMiddleware",
    "LoggingMiddleware",
]
