"""FreeIPA session state."""

from dataclasses import dataclass, field


@dataclass
class Session:
    """Authenticated session against one FreeIPA server.

    Owned by exactly one FreeIPAClient. ``password`` is excluded from repr
    so it never ends up in logs.
    """

    server: str
    username: str
    password: str = field(default="", repr=False)
    authenticated: bool = False
    cookie: str = field(default="", repr=False)
    last_request_id: int = 0

    def next_request_id(self) -> int:
        """Pre-increment and return the request id (first id is 1)."""
        self.last_request_id += 1
        return self.last_request_id

    def establish(self, cookie: str) -> None:
        """Mark the session authenticated with a fresh cookie."""
        self.cookie = cookie
        self.authenticated = True

    def invalidate(self) -> None:
        """Drop the cookie so the next call re-authenticates."""
        self.authenticated = False
        self.cookie = ""
