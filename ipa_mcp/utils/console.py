"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime, timezone

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

COMPONENT_COLORS = {
    "ipa_mcp.server": COLORS["bright_cyan"],
    "ipa_mcp.services.rpc_client": COLORS["bright_blue"],
    "ipa_mcp.services.fleet": COLORS["bright_magenta"],
    "ipa_mcp.tools": COLORS["cyan"],
    "ipa_mcp.middleware": COLORS["yellow"],
    "ipa_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

_DURATION = re.compile(r"(\d+\.?\d*ms)")
_RPC_METHOD = re.compile(r"(method=[\w]+)")
_HOST = re.compile(r"(host=[\w.\-]+)")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with UTC timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d}Z"

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name.removeprefix("ipa_mcp.")
        return self._colorize(f"{name:<22}", self._component_color(record.name))

    def _highlight(self, message: str) -> str:
        if not self.use_colors:
            return message
        message = _DURATION.sub(f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message)
        message = _RPC_METHOD.sub(f"{COLORS['bright_blue']}\\1{COLORS['reset']}", message)
        return _HOST.sub(f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message)

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as ``time | LEVEL | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._colorize(
            f"{record.levelname:<8}",
            LEVEL_COLORS.get(record.levelname, COLORS["white"]),
        )
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
