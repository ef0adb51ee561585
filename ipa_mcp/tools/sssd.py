"""SSSD cache management tools.

These tools run commands on client hosts over SSH and never talk to the
FreeIPA API. Host lists are validated before any connection is opened.
Each tool returns ``{"results": [...], "totalHosts": n}`` with one row
per host.
"""

from collections.abc import Callable
from typing import Any, Literal

from ipa_mcp.models import CommandResult, HostBatchResult, HostSummary
from ipa_mcp.services import get_config, get_fleet
from ipa_mcp.tools.session import fleet_errors
from ipa_mcp.utils.validation import validate_hostnames, validate_identifier

STATUS_PREVIEW_LINES = 5


def _summarize(
    results: HostBatchResult,
    ok_message: str,
    extra: Callable[[CommandResult], dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    rows = []
    for host, res in results.items():
        rows.append(
            HostSummary(
                host=host,
                success=res.succeeded,
                message=ok_message if res.succeeded else res.message,
                extra=extra(res) if extra else {},
            ).to_dict()
        )
    return rows


async def freeipa_clear_sssd_cache(hosts: list[str], force: bool = False) -> dict[str, Any]:
    """Clear the SSSD cache on one or more hosts.

    Stops sssd, removes its cache database and starts it again.

    Args:
        hosts: Hostnames or FQDNs.
        force: Also expire every remaining cache entry with ``sss_cache -E``.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        results = await get_fleet().clear_sssd_cache_multiple(hosts, force)
    return {
        "results": _summarize(results, "Cache cleared successfully"),
        "totalHosts": len(hosts),
    }


async def freeipa_update_sssd_timeout(
    hosts: list[str],
    mode: Literal["testing", "production"],
    entry_cache_timeout: int | None = None,
    sudo_timeout: int | None = None,
) -> dict[str, Any]:
    """Update SSSD cache timeouts on one or more hosts.

    Timeouts come from the configured profile for ``mode`` unless given
    explicitly. sssd is restarted afterwards.

    Args:
        hosts: Hostnames or FQDNs.
        mode: "testing" (short timeouts) or "production".
        entry_cache_timeout: Override for entry_cache_timeout, in seconds.
        sudo_timeout: Override for entry_cache_sudo_timeout, in seconds.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        profile = get_config().sssd.profile(mode)
        entry = profile.entry_cache_timeout if entry_cache_timeout is None else entry_cache_timeout
        sudo = profile.sudo_timeout if sudo_timeout is None else sudo_timeout
        results = await get_fleet().update_sssd_timeout_multiple(hosts, entry, sudo)

    settings = {"mode": mode, "entryCacheTimeout": entry, "sudoTimeout": sudo}
    return {
        "results": _summarize(results, "Timeouts updated successfully", lambda _: settings),
        "totalHosts": len(hosts),
    }


async def freeipa_check_sssd_status(hosts: list[str]) -> dict[str, Any]:
    """Check whether sssd is running on one or more hosts.

    Args:
        hosts: Hostnames or FQDNs.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        results = await get_fleet().check_sssd_status_multiple(hosts)

    rows = []
    for host, res in results.items():
        active = "Active: active" in res.stdout
        preview = "\n".join(res.stdout.split("\n")[:STATUS_PREVIEW_LINES])
        rows.append(
            HostSummary(
                host=host,
                success=active,
                message=preview if res.stdout else res.message,
                extra={"status": "active" if active else "inactive"},
            ).to_dict()
        )
    return {"results": rows, "totalHosts": len(hosts)}


async def freeipa_sssd_cache_stats(hosts: list[str]) -> dict[str, Any]:
    """Show SSSD cache information on one or more hosts.

    Args:
        hosts: Hostnames or FQDNs.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        results = await get_fleet().get_sssd_cache_stats_multiple(hosts)

    rows = [
        HostSummary(host=host, success=res.succeeded, message=res.message).to_dict()
        for host, res in results.items()
    ]
    return {"results": rows, "totalHosts": len(hosts)}


async def freeipa_invalidate_user_cache(hosts: list[str], username: str) -> dict[str, Any]:
    """Invalidate the SSSD cache entry of a single user on one or more hosts.

    Args:
        hosts: Hostnames or FQDNs.
        username: User whose cache entry is expired.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        validate_identifier(username, "username")
        results = await get_fleet().invalidate_user_multiple(hosts, username)
    return {
        "results": _summarize(results, f"Cache invalidated for {username}"),
        "username": username,
        "totalHosts": len(hosts),
    }


async def freeipa_invalidate_group_cache(hosts: list[str], groupname: str) -> dict[str, Any]:
    """Invalidate the SSSD cache entry of a single group on one or more hosts.

    Args:
        hosts: Hostnames or FQDNs.
        groupname: Group whose cache entry is expired.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        validate_identifier(groupname, "groupname")
        results = await get_fleet().invalidate_group_multiple(hosts, groupname)
    return {
        "results": _summarize(results, f"Cache invalidated for group {groupname}"),
        "groupname": groupname,
        "totalHosts": len(hosts),
    }


async def freeipa_test_ssh_connectivity(hosts: list[str]) -> dict[str, Any]:
    """Test SSH connectivity to one or more hosts.

    Args:
        hosts: Hostnames or FQDNs.
    """
    async with fleet_errors():
        validate_hostnames(hosts)
        results = await get_fleet().test_connectivity_multiple(hosts)

    rows = [
        HostSummary(
            host=host,
            success=connected,
            message="SSH connection successful" if connected else "SSH connection failed",
            extra={"connected": connected},
        ).to_dict()
        for host, connected in results.items()
    ]
    return {"results": rows, "totalHosts": len(hosts)}
