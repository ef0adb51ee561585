"""SSH command execution for SSSD cache management.

Each command opens a fresh SSH connection, authenticated with the
configured username/password. Multi-host operations fan out concurrently
and never fail as a whole: a host whose connection fails is reported as a
``CommandResult.channel_failure``.
"""

import asyncio
import logging

import asyncssh

from ipa_mcp.exceptions import CommandChannelError
from ipa_mcp.models import CommandResult, HostBatchResult
from ipa_mcp.services import commands

logger = logging.getLogger(__name__)


def _decode(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class SSHFleet:
    """Runs SSSD maintenance commands on remote hosts over SSH."""

    def __init__(
        self,
        username: str,
        password: str,
        *,
        port: int = 22,
        timeout: float = 20.0,
        domain: str = "example.com",
        known_hosts: str | None = None,
    ) -> None:
        """Initialize fleet.

        Args:
            username: SSH login user
            password: SSH password
            port: Default SSH port
            timeout: Connection timeout in seconds
            domain: SSSD domain whose config section is edited
            known_hosts: Path to known_hosts file, or None to disable verification
        """
        self.username = username
        self._password = password
        self.port = port
        self.timeout = timeout
        self.domain = domain
        self.known_hosts = known_hosts

    async def execute_command(
        self, host: str, command: str, port: int | None = None
    ) -> CommandResult:
        """Execute a command on a remote host.

        The command string is sent as-is. Values interpolated into it must
        already be validated (see ``ipa_mcp.services.commands``).

        Returns:
            CommandResult with trimmed stdout/stderr and the remote exit status

        Raises:
            CommandChannelError: If the connection or channel could not be opened,
                whatever the underlying error
        """
        target_port = port or self.port
        logger.debug("Opening SSH connection host=%s port=%d", host, target_port)

        try:
            conn = await asyncssh.connect(
                host,
                port=target_port,
                username=self.username,
                password=self._password,
                known_hosts=self.known_hosts,
                client_keys=None,
                connect_timeout=self.timeout,
            )
        except Exception as e:
            logger.warning("SSH connection failed host=%s: %s", host, e)
            raise CommandChannelError(host, f"SSH connection failed: {e}") from e

        try:
            result = await conn.run(command, check=False)
        except Exception as e:
            logger.warning("Command channel failed host=%s: %s", host, e)
            raise CommandChannelError(host, f"Failed to execute command: {e}") from e
        finally:
            conn.close()

        exit_code = result.returncode
        if exit_code is None:
            exit_code = CommandResult.FAILED_EXIT_CODE

        logger.info("Command finished host=%s exit=%d", host, exit_code)
        return CommandResult(
            stdout=_decode(result.stdout).strip(),
            stderr=_decode(result.stderr).strip(),
            exit_code=exit_code,
        )

    async def execute_on_multiple_hosts(
        self, hosts: list[str], command: str
    ) -> HostBatchResult:
        """Execute a command on every host concurrently.

        Never raises for per-host failures: a failed host maps to
        ``CommandResult.channel_failure(<error message>)``.

        Returns:
            Dict with exactly one entry per host
        """

        async def execute_single(host: str) -> tuple[str, CommandResult]:
            try:
                return host, await self.execute_command(host, command)
            except Exception as e:
                return host, CommandResult.channel_failure(str(e))

        pairs = await asyncio.gather(*(execute_single(h) for h in hosts))
        results = dict(pairs)

        failed = sum(1 for r in results.values() if r.channel_failed)
        logger.info(
            "Fan-out complete: %d host(s), %d unreachable",
            len(results),
            failed,
        )
        return results

    # ============= Cache clear =============

    async def clear_sssd_cache(self, host: str, force: bool = False) -> CommandResult:
        return await self.execute_command(host, commands.clear_cache(force))

    async def clear_sssd_cache_multiple(
        self, hosts: list[str], force: bool = False
    ) -> HostBatchResult:
        return await self.execute_on_multiple_hosts(hosts, commands.clear_cache(force))

    # ============= Timeouts =============

    async def update_sssd_timeout(
        self, host: str, entry_cache_timeout: int = 300, sudo_timeout: int = 300
    ) -> CommandResult:
        """Set entry_cache_timeout and entry_cache_sudo_timeout on a host.

        Raises:
            ValidationError: Before connecting, if a timeout is invalid
        """
        command = commands.update_timeouts(self.domain, entry_cache_timeout, sudo_timeout)
        return await self.execute_command(host, command)

    async def update_sssd_timeout_multiple(
        self, hosts: list[str], entry_cache_timeout: int = 300, sudo_timeout: int = 300
    ) -> HostBatchResult:
        """Set cache timeouts on many hosts.

        Raises:
            ValidationError: Before connecting to any host, if a timeout is invalid
        """
        command = commands.update_timeouts(self.domain, entry_cache_timeout, sudo_timeout)
        return await self.execute_on_multiple_hosts(hosts, command)

    # ============= Status =============

    async def check_sssd_status(self, host: str) -> CommandResult:
        return await self.execute_command(host, commands.STATUS_COMMAND)

    async def check_sssd_status_multiple(self, hosts: list[str]) -> HostBatchResult:
        return await self.execute_on_multiple_hosts(hosts, commands.STATUS_COMMAND)

    async def get_sssd_cache_stats(self, host: str) -> CommandResult:
        return await self.execute_command(host, commands.CACHE_STATS_COMMAND)

    async def get_sssd_cache_stats_multiple(self, hosts: list[str]) -> HostBatchResult:
        return await self.execute_on_multiple_hosts(hosts, commands.CACHE_STATS_COMMAND)

    # ============= Targeted invalidation =============

    async def invalidate_user(self, host: str, username: str) -> CommandResult:
        """Expire a single user's cache entry.

        Raises:
            ValidationError: If username has unsafe characters
        """
        return await self.execute_command(host, commands.invalidate_user(username))

    async def invalidate_user_multiple(
        self, hosts: list[str], username: str
    ) -> HostBatchResult:
        return await self.execute_on_multiple_hosts(hosts, commands.invalidate_user(username))

    async def invalidate_group(self, host: str, groupname: str) -> CommandResult:
        """Expire a single group's cache entry.

        Raises:
            ValidationError: If groupname has unsafe characters
        """
        return await self.execute_command(host, commands.invalidate_group(groupname))

    async def invalidate_group_multiple(
        self, hosts: list[str], groupname: str
    ) -> HostBatchResult:
        return await self.execute_on_multiple_hosts(hosts, commands.invalidate_group(groupname))

    # ============= Connectivity =============

    async def test_connectivity(self, host: str) -> bool:
        """True if the host runs ``echo`` and returns the expected marker."""
        try:
            result = await self.execute_command(host, commands.CONNECTIVITY_COMMAND)
        except Exception as e:
            logger.debug("Connectivity check failed host=%s: %s", host, e)
            return False
        return result.exit_code == 0 and result.stdout == commands.CONNECTIVITY_MARKER

    async def test_connectivity_multiple(self, hosts: list[str]) -> dict[str, bool]:
        results = await asyncio.gather(*(self.test_connectivity(h) for h in hosts))
        return dict(zip(hosts, results))
