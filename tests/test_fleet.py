"""Tests for SSHFleet command execution and fan-out."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import asyncssh
import pytest

from ipa_mcp.exceptions import CommandChannelError, ValidationError
from ipa_mcp.models import CommandResult
from ipa_mcp.services.fleet import SSHFleet


@pytest.fixture
def fleet() -> SSHFleet:
    return SSHFleet("automation", "sshpass", port=2222, timeout=5.0, domain="example.com")


def _connection(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    conn = MagicMock()
    conn.run = AsyncMock(
        return_value=MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)
    )
    return conn


class TestExecuteCommand:
    @pytest.mark.asyncio
    async def test_returns_trimmed_output(self, fleet: SSHFleet) -> None:
        conn = _connection(stdout="  hello\n", stderr="\nwarn \n", returncode=3)

        with patch("ipa_mcp.services.fleet.asyncssh.connect", AsyncMock(return_value=conn)) as connect:
            result = await fleet.execute_command("h1", "echo hello")

        assert result == CommandResult(stdout="hello", stderr="warn", exit_code=3)
        conn.run.assert_awaited_once_with("echo hello", check=False)
        conn.close.assert_called_once()

        _, kwargs = connect.call_args
        assert connect.call_args.args == ("h1",)
        assert kwargs["port"] == 2222
        assert kwargs["username"] == "automation"
        assert kwargs["password"] == "sshpass"
        assert kwargs["connect_timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_port_override(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect", AsyncMock(return_value=_connection())
        ) as connect:
            await fleet.execute_command("h1", "true", port=22)

        assert connect.call_args.kwargs["port"] == 22

    @pytest.mark.asyncio
    async def test_decodes_bytes(self, fleet: SSHFleet) -> None:
        conn = _connection()
        conn.run.return_value = MagicMock(stdout=b"ok\n", stderr=None, returncode=0)

        with patch("ipa_mcp.services.fleet.asyncssh.connect", AsyncMock(return_value=conn)):
            result = await fleet.execute_command("h1", "true")

        assert result.stdout == "ok"
        assert result.stderr == ""

    @pytest.mark.asyncio
    async def test_connection_failure_raises_channel_error(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(side_effect=OSError("Connection refused")),
        ):
            with pytest.raises(CommandChannelError, match="SSH connection failed") as exc_info:
                await fleet.execute_command("h1", "true")

        assert exc_info.value.host == "h1"

    @pytest.mark.asyncio
    async def test_timeout_raises_channel_error(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(side_effect=asyncio.TimeoutError()),
        ):
            with pytest.raises(CommandChannelError):
                await fleet.execute_command("h1", "true")

    @pytest.mark.asyncio
    async def test_channel_open_failure(self, fleet: SSHFleet) -> None:
        conn = _connection()
        conn.run.side_effect = asyncssh.ChannelOpenError(2, "open failed")

        with patch("ipa_mcp.services.fleet.asyncssh.connect", AsyncMock(return_value=conn)):
            with pytest.raises(CommandChannelError, match="Failed to execute command"):
                await fleet.execute_command("h1", "true")

        conn.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_unexpected_connect_error_is_wrapped(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(side_effect=ValueError("Invalid known_hosts entry")),
        ):
            with pytest.raises(CommandChannelError, match="known_hosts") as exc_info:
                await fleet.execute_command("h1", "true")

        assert exc_info.value.host == "h1"
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestExecuteOnMultipleHosts:
    @pytest.mark.asyncio
    async def test_partial_failure_is_captured(self, fleet: SSHFleet) -> None:
        async def fake_execute(host: str, command: str) -> CommandResult:
            if host == "h2":
                raise CommandChannelError(host, "refused")
            return CommandResult(stdout="done", stderr="", exit_code=0)

        with patch.object(fleet, "execute_command", side_effect=fake_execute):
            results = await fleet.execute_on_multiple_hosts(["h1", "h2"], "true")

        assert set(results) == {"h1", "h2"}
        assert results["h1"].exit_code == 0
        assert results["h2"].to_dict() == {"stdout": "", "stderr": "refused", "exitCode": -1}
        assert results["h2"].channel_failed

    @pytest.mark.asyncio
    async def test_runs_hosts_concurrently(self, fleet: SSHFleet) -> None:
        started: list[str] = []
        release = asyncio.Event()

        async def fake_execute(host: str, command: str) -> CommandResult:
            started.append(host)
            await release.wait()
            return CommandResult("", "", 0)

        async def release_when_all_started() -> None:
            while len(started) < 3:
                await asyncio.sleep(0)
            release.set()

        with patch.object(fleet, "execute_command", side_effect=fake_execute):
            results, _ = await asyncio.gather(
                fleet.execute_on_multiple_hosts(["a", "b", "c"], "true"),
                release_when_all_started(),
            )

        assert sorted(started) == ["a", "b", "c"]
        assert len(results) == 3


class TestSSSDOperations:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("entry, sudo", [(-1, 300), (300, 1.5)])
    async def test_update_timeout_validates_before_connecting(
        self, fleet: SSHFleet, entry: object, sudo: object
    ) -> None:
        connect = AsyncMock()
        with patch("ipa_mcp.services.fleet.asyncssh.connect", connect):
            with pytest.raises(ValidationError):
                await fleet.update_sssd_timeout("h1", entry, sudo)
            with pytest.raises(ValidationError):
                await fleet.update_sssd_timeout_multiple(["h1", "h2"], entry, sudo)

        connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_timeout_uses_domain(self, fleet: SSHFleet) -> None:
        with patch.object(
            fleet, "execute_command", AsyncMock(return_value=CommandResult("", "", 0))
        ) as execute:
            await fleet.update_sssd_timeout("h1", 60, 120)

        command = execute.call_args.args[1]
        assert "\\[domain\\/example\\.com\\]" in command
        assert "entry_cache_timeout = 60" in command
        assert "entry_cache_sudo_timeout = 120" in command

    @pytest.mark.asyncio
    async def test_invalidate_user_rejects_unsafe_name(self, fleet: SSHFleet) -> None:
        connect = AsyncMock()
        with patch("ipa_mcp.services.fleet.asyncssh.connect", connect):
            with pytest.raises(ValidationError):
                await fleet.invalidate_user("h1", "alice; rm -rf /")

        connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_clear_cache_multiple(self, fleet: SSHFleet) -> None:
        with patch.object(
            fleet, "execute_on_multiple_hosts", AsyncMock(return_value={})
        ) as fan_out:
            await fleet.clear_sssd_cache_multiple(["h1"], force=True)

        hosts, command = fan_out.call_args.args
        assert hosts == ["h1"]
        assert command.endswith("sudo sss_cache -E")


class TestConnectivity:
    @pytest.mark.asyncio
    async def test_marker_echoed(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(return_value=_connection(stdout="test\n")),
        ):
            assert await fleet.test_connectivity("h1") is True

    @pytest.mark.asyncio
    async def test_unexpected_output(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(return_value=_connection(stdout="nope")),
        ):
            assert await fleet.test_connectivity("h1") is False

    @pytest.mark.asyncio
    async def test_connection_failure_is_false(self, fleet: SSHFleet) -> None:
        with patch(
            "ipa_mcp.services.fleet.asyncssh.connect",
            AsyncMock(side_effect=OSError("unreachable")),
        ):
            assert await fleet.test_connectivity_multiple(["h1", "h2"]) == {
                "h1": False,
                "h2": False,
            }

    @pytest.mark.asyncio
    async def test_unexpected_error_on_one_host_does_not_sink_batch(self, fleet: SSHFleet) -> None:
        def connect(host: str, **kwargs: object) -> MagicMock:
            if host == "up":
                return _connection(stdout="test")
            if host == "down":
                raise OSError("unreachable")
            raise ValueError("Invalid known_hosts entry")

        with patch("ipa_mcp.services.fleet.asyncssh.connect", AsyncMock(side_effect=connect)):
            assert await fleet.test_connectivity_multiple(["up", "down", "badkey"]) == {
                "up": True,
                "down": False,
                "badkey": False,
            }
