"""Group tools."""

from typing import Any

from ipa_mcp.tools.session import ipa_session


async def freeipa_group_find(pattern: str = "") -> dict[str, Any]:
    """Search for groups in FreeIPA.

    Args:
        pattern: Search pattern. Empty lists all groups.
    """
    async with ipa_session() as client:
        groups = await client.group_find(pattern) or []
    return {"groups": groups, "count": len(groups)}


async def freeipa_group_show(group: str) -> dict[str, Any]:
    """Get detailed information about a group, including its members."""
    async with ipa_session() as client:
        entry = await client.group_show(group)
    return {"group": entry}


async def freeipa_group_add_member(group: str, users: list[str]) -> dict[str, Any]:
    """Add users to a group.

    Args:
        group: Group name.
        users: Usernames to add.
    """
    async with ipa_session() as client:
        entry = await client.group_add_member(group, users)
    return {"group": entry, "message": f"Added {len(users)} users to group {group}"}


async def freeipa_group_remove_member(group: str, users: list[str]) -> dict[str, Any]:
    """Remove users from a group.

    Args:
        group: Group name.
        users: Usernames to remove.
    """
    async with ipa_session() as client:
        entry = await client.group_remove_member(group, users)
    return {"group": entry, "message": f"Removed {len(users)} users from group {group}"}
