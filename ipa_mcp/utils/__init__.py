"""Utilities for ipa_mcp."""

from ipa_mcp.utils.console import ColorfulFormatter
from ipa_mcp.utils.validation import (
    validate_hostname,
    validate_hostnames,
    validate_identifier,
    validate_timeout,
)

__all__ = [
    "ColorfulFormatter",
    "validate_hostname",
    "validate_hostnames",
    "validate_identifier",
    "validate_timeout",
]
