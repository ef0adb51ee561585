"""HBAC (host-based access control) rule tools."""

from typing import Any

from ipa_mcp.tools.session import ipa_session


async def freeipa_hbacrule_find(pattern: str = "") -> dict[str, Any]:
    """Search for HBAC rules.

    Args:
        pattern: Search pattern. Empty lists all rules.
    """
    async with ipa_session() as client:
        rules = await client.hbacrule_find(pattern) or []
    return {"rules": rules, "count": len(rules)}


async def freeipa_hbacrule_show(rule: str) -> dict[str, Any]:
    """Get detailed information about an HBAC rule."""
    async with ipa_session() as client:
        entry = await client.hbacrule_show(rule)
    return {"rule": entry}


async def freeipa_hbacrule_add(rule: str, description: str = "") -> dict[str, Any]:
    """Create a new HBAC rule."""
    async with ipa_session() as client:
        entry = await client.hbacrule_add(rule, description)
    return {"rule": entry, "message": f"HBAC rule {rule} created successfully"}


async def freeipa_hbacrule_del(rule: str) -> dict[str, Any]:
    async with ipa_session() as client:
        await client.hbacrule_del(rule)
    return {"message": f"HBAC rule {rule} deleted"}


async def freeipa_hbacrule_enable(rule: str) -> dict[str, Any]:
    async with ipa_session() as client:
        await client.hbacrule_enable(rule)
    return {"message": f"HBAC rule {rule} enabled"}


async def freeipa_hbacrule_disable(rule: str) -> dict[str, Any]:
    async with ipa_session() as client:
        await client.hbacrule_disable(rule)
    return {"message": f"HBAC rule {rule} disabled"}


async def freeipa_hbacrule_add_user(
    rule: str,
    users: list[str] | None = None,
    groups: list[str] | None = None,
) -> dict[str, Any]:
    """Add users and/or groups to an HBAC rule."""
    async with ipa_session() as client:
        entry = await client.hbacrule_add_user(rule, users, groups)
    return {"rule": entry, "message": f"Added users/groups to HBAC rule {rule}"}


async def freeipa_hbacrule_add_host(
    rule: str,
    hosts: list[str] | None = None,
    hostgroups: list[str] | None = None,
) -> dict[str, Any]:
    """Add hosts and/or hostgroups to an HBAC rule."""
    async with ipa_session() as client:
        entry = await client.hbacrule_add_host(rule, hosts, hostgroups)
    return {"rule": entry, "message": f"Added hosts/hostgroups to HBAC rule {rule}"}


async def freeipa_hbacrule_add_service(
    rule: str,
    services: list[str],
    servicegroups: list[str] | None = None,
) -> dict[str, Any]:
    """Add HBAC services (e.g. sshd, login) to an HBAC rule.

    Args:
        rule: HBAC rule name.
        services: HBAC service names.
        servicegroups: HBAC service group names.
    """
    async with ipa_session() as client:
        entry = await client.hbacrule_add_service(rule, services, servicegroups)
    return {"rule": entry, "message": f"Added services to HBAC rule {rule}"}
