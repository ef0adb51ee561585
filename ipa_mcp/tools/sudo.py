"""Sudo rule, sudo command and sudo command group tools."""

from typing import Any

from ipa_mcp.tools.session import ipa_session

# ============= Sudo rules =============


async def freeipa_sudorule_find(pattern: str = "") -> dict[str, Any]:
    """Search for sudo rules.

    Args:
        pattern: Search pattern. Empty lists all rules.
    """
    async with ipa_session() as client:
        rules = await client.sudorule_find(pattern) or []
    return {"rules": rules, "count": len(rules)}


async def freeipa_sudorule_show(rule: str) -> dict[str, Any]:
    """Get detailed information about a sudo rule."""
    async with ipa_session() as client:
        entry = await client.sudorule_show(rule)
    return {"rule": entry}


async def freeipa_sudorule_add(rule: str, description: str = "") -> dict[str, Any]:
    """Create a new sudo rule.

    Args:
        rule: Sudo rule name.
        description: Rule description.
    """
    async with ipa_session() as client:
        entry = await client.sudorule_add(rule, description)
    return {"rule": entry, "message": f"Sudo rule {rule} created successfully"}


async def freeipa_sudorule_del(rule: str) -> dict[str, Any]:
    """Delete a sudo rule."""
    async with ipa_session() as client:
        await client.sudorule_del(rule)
    return {"message": f"Sudo rule {rule} deleted"}


async def freeipa_sudorule_enable(rule: str) -> dict[str, Any]:
    """Enable a sudo rule."""
    async with ipa_session() as client:
        await client.sudorule_enable(rule)
    return {"message": f"Sudo rule {rule} enabled"}


async def freeipa_sudorule_disable(rule: str) -> dict[str, Any]:
    """Disable a sudo rule."""
    async with ipa_session() as client:
        await client.sudorule_disable(rule)
    return {"message": f"Sudo rule {rule} disabled"}


async def freeipa_sudorule_add_user(
    rule: str,
    users: list[str] | None = None,
    groups: list[str] | None = None,
) -> dict[str, Any]:
    """Add users and/or groups to a sudo rule.

    Args:
        rule: Sudo rule name.
        users: Usernames to add.
        groups: Group names to add.
    """
    async with ipa_session() as client:
        entry = await client.sudorule_add_user(rule, users, groups)
    return {"rule": entry, "message": f"Added users/groups to sudo rule {rule}"}


async def freeipa_sudorule_add_host(
    rule: str,
    hosts: list[str] | None = None,
    hostgroups: list[str] | None = None,
) -> dict[str, Any]:
    """Add hosts and/or hostgroups to a sudo rule.

    Args:
        rule: Sudo rule name.
        hosts: Host FQDNs to add.
        hostgroups: Hostgroup names to add.
    """
    async with ipa_session() as client:
        entry = await client.sudorule_add_host(rule, hosts, hostgroups)
    return {"rule": entry, "message": f"Added hosts/hostgroups to sudo rule {rule}"}


async def freeipa_sudorule_add_command(
    rule: str,
    commands: list[str] | None = None,
    commandgroups: list[str] | None = None,
) -> dict[str, Any]:
    """Add allowed commands and/or command groups to a sudo rule.

    Args:
        rule: Sudo rule name.
        commands: Full command paths (e.g. /usr/bin/systemctl).
        commandgroups: Sudo command group names.
    """
    async with ipa_session() as client:
        entry = await client.sudorule_add_allow_command(rule, commands, commandgroups)
    return {"rule": entry, "message": f"Added commands to sudo rule {rule}"}


async def freeipa_sudorule_add_deny_command(
    rule: str,
    commands: list[str] | None = None,
    commandgroups: list[str] | None = None,
) -> dict[str, Any]:
    """Add denied commands and/or command groups to a sudo rule."""
    async with ipa_session() as client:
        entry = await client.sudorule_add_deny_command(rule, commands, commandgroups)
    return {"rule": entry, "message": f"Added denied commands to sudo rule {rule}"}


async def freeipa_sudorule_add_runasuser(
    rule: str,
    users: list[str] | None = None,
    groups: list[str] | None = None,
) -> dict[str, Any]:
    """Add run-as users and/or groups to a sudo rule."""
    async with ipa_session() as client:
        entry = await client.sudorule_add_runasuser(rule, users, groups)
    return {"rule": entry, "message": f"Added run-as users/groups to sudo rule {rule}"}


# ============= Sudo commands =============


async def freeipa_sudocmd_find(pattern: str = "") -> dict[str, Any]:
    """Search for sudo commands."""
    async with ipa_session() as client:
        commands = await client.sudocmd_find(pattern) or []
    return {"commands": commands, "count": len(commands)}


async def freeipa_sudocmd_add(command: str, description: str = "") -> dict[str, Any]:
    """Register a sudo command.

    Args:
        command: Full command path (e.g. /usr/bin/systemctl).
        description: Command description.
    """
    async with ipa_session() as client:
        entry = await client.sudocmd_add(command, description)
    return {"command": entry, "message": f"Sudo command {command} created successfully"}


# ============= Sudo command groups =============


async def freeipa_sudocmdgroup_add(group: str, description: str = "") -> dict[str, Any]:
    """Create a sudo command group.

    Args:
        group: Command group name.
        description: Group description.
    """
    async with ipa_session() as client:
        entry = await client.sudocmdgroup_add(group, description)
    return {"group": entry, "message": f"Sudo command group {group} created successfully"}


async def freeipa_sudocmdgroup_add_member(group: str, commands: list[str]) -> dict[str, Any]:
    """Add sudo commands to a command group.

    Args:
        group: Command group name.
        commands: Full command paths to add.
    """
    async with ipa_session() as client:
        entry = await client.sudocmdgroup_add_member(group, commands)
    return {"group": entry, "message": f"Added {len(commands)} commands to group {group}"}
