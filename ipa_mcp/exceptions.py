"""Exception hierarchy for ipa_mcp.

FreeIPA RPC failures derive from FreeIPAError, SSH failures from SSHError.
ValidationError is raised for bad input before any network action.
"""


class IPAMCPError(Exception):
    """Base exception for all ipa_mcp errors."""


# ── FreeIPA JSON-RPC ────────────────────────────────────────────


class FreeIPAError(IPAMCPError):
    """FreeIPA API failure."""


class NotAuthenticatedError(FreeIPAError):
    """API call attempted before a successful authenticate()."""

    def __init__(self, message: str = "Not authenticated. Call authenticate() first.") -> None:
        super().__init__(message)


class AuthenticationError(FreeIPAError):
    """Login was rejected by the server."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class APIError(FreeIPAError):
    """Remote method rejected the request.

    Attributes:
        code: FreeIPA fault code (e.g. 4001), None for plain HTTP failures
        name: FreeIPA fault name (e.g. "DuplicateEntry")
        status: HTTP status of the response, if it was not 200
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        name: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.name = name or "APIError"
        self.status = status


class NetworkError(FreeIPAError):
    """Transport failure, no response obtained from the server."""


# ── SSH ─────────────────────────────────────────────────────────


class SSHError(IPAMCPError):
    """SSH command execution failure."""


class CommandChannelError(SSHError):
    """SSH connection or channel could not be established."""

    def __init__(self, host: str, message: str) -> None:
        super().__init__(message)
        self.host = host


# ── Input ───────────────────────────────────────────────────────


class ValidationError(IPAMCPError, ValueError):
    """Malformed identifier, hostname or timeout value."""


__all__ = [
    "APIError",
    "AuthenticationError",
    "CommandChannelError",
    "FreeIPAError",
    "IPAMCPError",
    "NetworkError",
    "NotAuthenticatedError",
    "SSHError",
    "ValidationError",
]
