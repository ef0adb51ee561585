"""Command execution data models."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class CommandResult:
    """Result of a remote command execution.

    ``exit_code`` is the remote process exit status. A result built with
    ``channel_failure()`` carries ``exit_code == -1`` and
    ``channel_failed == True``: the command never ran.
    """

    stdout: str
    stderr: str
    exit_code: int
    channel_failed: bool = False

    FAILED_EXIT_CODE: ClassVar[int] = -1

    @classmethod
    def channel_failure(cls, message: str) -> "CommandResult":
        """Record for a host whose connection or channel failed."""
        return cls(
            stdout="",
            stderr=message,
            exit_code=cls.FAILED_EXIT_CODE,
            channel_failed=True,
        )

    @property
    def succeeded(self) -> bool:
        """True if the command ran and exited 0."""
        return not self.channel_failed and self.exit_code == 0

    @property
    def message(self) -> str:
        """stderr if present, otherwise stdout."""
        return self.stderr or self.stdout

    def to_dict(self) -> dict[str, str | int]:
        return {
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exitCode": self.exit_code,
        }


# One entry per requested host
HostBatchResult = dict[str, CommandResult]
