"""Error logging middleware.

Tools raise ``ToolError`` with the ``Error: ...`` text already attached and
the ipa_mcp exception chained as ``__cause__``. This middleware logs the
underlying failure with its FreeIPA fault or SSH host, counts failures by
root cause, and re-raises unchanged.
"""

import logging
import traceback
from collections import Counter
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from ipa_mcp.exceptions import APIError, AuthenticationError, CommandChannelError
from ipa_mcp.middleware.base import IPAMiddleware


def root_cause(error: BaseException) -> BaseException:
    """Unwrap a ToolError to the exception it was raised from."""
    if isinstance(error, ToolError) and error.__cause__ is not None:
        return error.__cause__
    return error


def describe(error: BaseException) -> str:
    """Domain details worth logging alongside the message."""
    if isinstance(error, APIError):
        details = f"fault={error.name} code={error.code}"
        if error.status is not None:
            details += f" status={error.status}"
        return details
    if isinstance(error, AuthenticationError) and error.status is not None:
        return f"status={error.status}"
    if isinstance(error, CommandChannelError):
        return f"host={error.host}"
    return ""


class ErrorHandlingMiddleware(IPAMiddleware):
    """Logs tool failures by root cause and re-raises.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self._error_counts: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Error counts keyed by root-cause exception type."""
        return dict(self._error_counts)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)
        except Exception as e:
            cause = root_cause(e)
            error_type = type(cause).__name__
            self._error_counts[error_type] += 1

            tool = getattr(context.message, "name", None) if context.method == "tools/call" else None
            where = f"{context.method} {tool}" if tool else context.method
            details = describe(cause)

            message = f"Error in {where}: {error_type}: {cause}"
            if details:
                message = f"{message} [{details}]"
            if self.include_traceback:
                message = f"{message}\n{traceback.format_exc()}"

            self.logger.error("%s", message)
            raise
