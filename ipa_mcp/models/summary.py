"""Per-host summary rows for multi-host tool results."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class HostSummary:
    """Outcome for a single host in a fan-out operation."""

    host: str
    success: bool
    message: str
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra")
        data.update(extra)
        return data
