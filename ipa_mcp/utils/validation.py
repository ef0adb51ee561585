"""Input validation for values that reach remote shell commands."""

import re
from typing import Any, Final

from ipa_mcp.exceptions import ValidationError

# Letters, digits, dot, hyphen, underscore and @ only
SAFE_IDENTIFIER: Final = re.compile(r"^[a-zA-Z0-9._@-]+$")

# Same as identifiers, without @
SAFE_HOSTNAME: Final = re.compile(r"^[a-zA-Z0-9._-]+$")

MAX_HOSTNAME_LENGTH: Final = 253


def validate_identifier(value: Any, name: str) -> str:
    """Validate a user or group name before shell interpolation.

    Args:
        value: Candidate identifier
        name: Parameter name used in the error message

    Returns:
        The identifier, unchanged

    Raises:
        ValidationError: If value is empty, not a string, or contains
            characters outside the allow-list
    """
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{name} is required")
    if not SAFE_IDENTIFIER.fullmatch(value):
        raise ValidationError(f"{name} contains unsafe characters: {value!r}")
    return value


def validate_hostname(value: Any, name: str = "host") -> str:
    """Validate a single hostname.

    Raises:
        ValidationError: If hostname is empty, too long or has invalid characters
    """
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{name} is required")
    if len(value) > MAX_HOSTNAME_LENGTH:
        raise ValidationError(f"{name} too long: {len(value)} chars")
    if not SAFE_HOSTNAME.fullmatch(value):
        raise ValidationError(f"{name} contains invalid hostname: {value!r}")
    return value


def validate_hostnames(value: Any, name: str = "hosts") -> list[str]:
    """Validate a non-empty list of hostnames.

    Raises:
        ValidationError: If value is not a non-empty list or any entry is invalid
    """
    if not isinstance(value, (list, tuple)) or not value:
        raise ValidationError(f"{name} must be a non-empty array")
    return [validate_hostname(h, name) for h in value]


def validate_timeout(value: Any, name: str) -> int:
    """Validate a non-negative integer timeout in seconds.

    Booleans and floats are rejected even when integral.

    Raises:
        ValidationError: If value is not a non-negative int
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{name} must be a non-negative integer")
    return value
