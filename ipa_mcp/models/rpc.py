"""FreeIPA JSON-RPC envelope models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RPCRequest:
    """A single JSON-RPC request.

    FreeIPA expects ``params`` to always be ``[args, options]``, even when
    both are empty.
    """

    method: str
    id: int
    args: list[Any] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body sent to ``/ipa/json``."""
        params: list[Any] = [list(self.args), dict(self.options)]
        return {"method": self.method, "params": params, "id": self.id}


@dataclass
class RPCFault:
    """Structured error returned in-band by FreeIPA."""

    code: int | None
    message: str
    name: str | None = None

    @classmethod
    def from_response(cls, body: Any) -> "RPCFault | None":
        """Extract the fault from a response body, if any.

        Args:
            body: Decoded JSON response body

        Returns:
            RPCFault if the body carries an ``error`` object, None otherwise
        """
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        if not error:
            return None
        if not isinstance(error, dict):
            return cls(code=None, message=str(error))
        return cls(
            code=error.get("code"),
            message=str(error.get("message", "Unknown FreeIPA error")),
            name=error.get("name"),
        )
