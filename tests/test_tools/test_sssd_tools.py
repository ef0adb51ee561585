"""Tests for SSSD cache management tools."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastmcp.exceptions import ToolError

from ipa_mcp.config import Config, Settings
from ipa_mcp.models import CommandResult
from ipa_mcp.services import set_client, set_config, set_fleet
from ipa_mcp.services.fleet import SSHFleet
from ipa_mcp.services.rpc_client import FreeIPAClient
from ipa_mcp.tools import sssd

STATUS_OUTPUT = """\
● sssd.service - System Security Services Daemon
     Loaded: loaded (/usr/lib/systemd/system/sssd.service; enabled)
     Active: active (running) since Mon 2024-01-01 10:00:00 UTC
   Main PID: 1234 (sssd)
      Tasks: 4
     Memory: 40.0M
        CPU: 1.2s"""


@pytest.fixture
def fleet(config: Config) -> MagicMock:
    mock_fleet = MagicMock(spec=SSHFleet)
    set_fleet(mock_fleet)
    return mock_fleet


class TestHostValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("hosts", [[], ["h1", "bad host"], ["h1;reboot"]])
    async def test_rejects_before_any_connection(self, fleet: MagicMock, hosts: list[str]) -> None:
        with pytest.raises(ToolError, match="^Error: hosts"):
            await sssd.freeipa_clear_sssd_cache(hosts)

        fleet.clear_sssd_cache_multiple.assert_not_called()

    @pytest.mark.asyncio
    async def test_does_not_touch_freeipa(self, fleet: MagicMock) -> None:
        client = MagicMock(spec=FreeIPAClient)
        client.is_authenticated = False
        set_client(client)
        fleet.test_connectivity_multiple.return_value = {"h1": True}

        await sssd.freeipa_test_ssh_connectivity(["h1"])

        client.authenticate.assert_not_called()


class TestClearCache:
    @pytest.mark.asyncio
    async def test_summarizes_each_host(self, fleet: MagicMock) -> None:
        fleet.clear_sssd_cache_multiple.return_value = {
            "h1": CommandResult("", "", 0),
            "h2": CommandResult.channel_failure("SSH connection failed: refused"),
        }

        result = await sssd.freeipa_clear_sssd_cache(["h1", "h2"], force=True)

        fleet.clear_sssd_cache_multiple.assert_awaited_once_with(["h1", "h2"], True)
        assert result == {
            "results": [
                {"host": "h1", "success": True, "message": "Cache cleared successfully"},
                {"host": "h2", "success": False, "message": "SSH connection failed: refused"},
            ],
            "totalHosts": 2,
        }

    @pytest.mark.asyncio
    async def test_remote_failure_reports_output(self, fleet: MagicMock) -> None:
        fleet.clear_sssd_cache_multiple.return_value = {
            "h1": CommandResult("", "sudo: a password is required", 1),
        }

        result = await sssd.freeipa_clear_sssd_cache(["h1"])

        assert result["results"][0]["success"] is False
        assert result["results"][0]["message"] == "sudo: a password is required"


class TestUpdateTimeout:
    @pytest.mark.asyncio
    async def test_uses_mode_profile(self, fleet: MagicMock) -> None:
        fleet.update_sssd_timeout_multiple.return_value = {"h1": CommandResult("", "", 0)}

        result = await sssd.freeipa_update_sssd_timeout(["h1"], mode="testing")

        fleet.update_sssd_timeout_multiple.assert_awaited_once_with(["h1"], 60, 120)
        assert result["results"] == [
            {
                "host": "h1",
                "success": True,
                "message": "Timeouts updated successfully",
                "mode": "testing",
                "entryCacheTimeout": 60,
                "sudoTimeout": 120,
            }
        ]

    @pytest.mark.asyncio
    async def test_explicit_overrides(self, fleet: MagicMock) -> None:
        fleet.update_sssd_timeout_multiple.return_value = {"h1": CommandResult("", "", 0)}

        await sssd.freeipa_update_sssd_timeout(["h1"], mode="production", sudo_timeout=30)

        fleet.update_sssd_timeout_multiple.assert_awaited_once_with(["h1"], 300, 30)

    @pytest.mark.asyncio
    async def test_invalid_override_rejected_before_connect(self, config: Config) -> None:
        set_fleet(SSHFleet("automation", "sshpass"))
        connect = AsyncMock()

        with patch("ipa_mcp.services.fleet.asyncssh.connect", connect):
            with pytest.raises(ToolError, match="non-negative integer"):
                await sssd.freeipa_update_sssd_timeout(["h1"], mode="testing", entry_cache_timeout=-1)

        connect.assert_not_called()


class TestStatus:
    @pytest.mark.asyncio
    async def test_active_and_inactive(self, fleet: MagicMock) -> None:
        fleet.check_sssd_status_multiple.return_value = {
            "h1": CommandResult(STATUS_OUTPUT, "", 0),
            "h2": CommandResult("     Active: inactive (dead)", "", 3),
            "h3": CommandResult.channel_failure("SSH connection failed: timeout"),
        }

        result = await sssd.freeipa_check_sssd_status(["h1", "h2", "h3"])
        rows = {row["host"]: row for row in result["results"]}

        assert rows["h1"]["status"] == "active"
        assert rows["h1"]["message"] == "\n".join(STATUS_OUTPUT.split("\n")[:5])
        assert rows["h2"]["status"] == "inactive"
        assert rows["h3"]["status"] == "inactive"
        assert rows["h3"]["message"] == "SSH connection failed: timeout"
        assert result["totalHosts"] == 3


class TestCacheStats:
    @pytest.mark.asyncio
    async def test_reports_output(self, fleet: MagicMock) -> None:
        fleet.get_sssd_cache_stats_multiple.return_value = {
            "h1": CommandResult("cache_example.com.ldb 1.2M", "", 0),
        }

        result = await sssd.freeipa_sssd_cache_stats(["h1"])

        assert result["results"] == [
            {"host": "h1", "success": True, "message": "cache_example.com.ldb 1.2M"}
        ]


class TestInvalidate:
    @pytest.mark.asyncio
    async def test_user(self, fleet: MagicMock) -> None:
        fleet.invalidate_user_multiple.return_value = {"h1": CommandResult("", "", 0)}

        result = await sssd.freeipa_invalidate_user_cache(["h1"], "alice.smith@EXAMPLE.COM")

        assert result == {
            "results": [
                {
                    "host": "h1",
                    "success": True,
                    "message": "Cache invalidated for alice.smith@EXAMPLE.COM",
                }
            ],
            "username": "alice.smith@EXAMPLE.COM",
            "totalHosts": 1,
        }

    @pytest.mark.asyncio
    async def test_user_rejects_injection(self, fleet: MagicMock) -> None:
        with pytest.raises(ToolError, match="username contains unsafe characters"):
            await sssd.freeipa_invalidate_user_cache(["h1"], "alice; rm -rf /")

        fleet.invalidate_user_multiple.assert_not_called()

    @pytest.mark.asyncio
    async def test_group(self, fleet: MagicMock) -> None:
        fleet.invalidate_group_multiple.return_value = {"h1": CommandResult("", "", 0)}

        result = await sssd.freeipa_invalidate_group_cache(["h1"], "admins")

        assert result["groupname"] == "admins"
        fleet.invalidate_group_multiple.assert_awaited_once_with(["h1"], "admins")


class TestConnectivity:
    @pytest.mark.asyncio
    async def test_rows(self, fleet: MagicMock) -> None:
        fleet.test_connectivity_multiple.return_value = {"h1": True, "h2": False}

        result = await sssd.freeipa_test_ssh_connectivity(["h1", "h2"])

        assert result["results"] == [
            {"host": "h1", "success": True, "message": "SSH connection successful", "connected": True},
            {"host": "h2", "success": False, "message": "SSH connection failed", "connected": False},
        ]


@pytest.mark.asyncio
async def test_missing_known_hosts_is_reported(tmp_path: Path) -> None:
    set_config(Config(settings=Settings(known_hosts=str(tmp_path / "missing"))))

    with pytest.raises(ToolError, match="known_hosts"):
        await sssd.freeipa_check_sssd_status(["h1"])
