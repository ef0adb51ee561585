"""User and group membership tools."""

from typing import Any

from ipa_mcp.tools.session import ipa_session


async def freeipa_user_find(
    pattern: str = "",
    all: bool = False,  # noqa: A002  tool argument named after the FreeIPA --all option
) -> dict[str, Any]:
    """Search for users in FreeIPA.

    Args:
        pattern: Search pattern (username, email, ...). Empty lists all users.
        all: Return all user attributes.
    """
    all_attributes = all
    async with ipa_session() as client:
        options = {"all": True} if all_attributes else None
        users = await client.user_find(pattern, options) or []
    return {"users": users, "count": len(users)}


async def freeipa_user_show(uid: str) -> dict[str, Any]:
    """Get detailed information about a specific user.

    Args:
        uid: Username of the user to retrieve.
    """
    async with ipa_session() as client:
        user = await client.user_show(uid)
    return {"user": user}


async def freeipa_user_add(
    uid: str,
    givenname: str,
    sn: str,
    mail: str | None = None,
    userpassword: str | None = None,
) -> dict[str, Any]:
    """Create a new user in FreeIPA.

    Args:
        uid: Username for the new user.
        givenname: First name.
        sn: Last name (surname).
        mail: Email address.
        userpassword: Initial password.
    """
    options: dict[str, Any] = {}
    if mail:
        options["mail"] = mail
    if userpassword:
        options["userpassword"] = userpassword

    async with ipa_session() as client:
        user = await client.user_add(uid, givenname, sn, **options)
    return {"user": user, "message": f"User {uid} created successfully"}


async def freeipa_user_mod(
    uid: str,
    givenname: str | None = None,
    sn: str | None = None,
    mail: str | None = None,
    title: str | None = None,
    loginshell: str | None = None,
) -> dict[str, Any]:
    """Modify attributes of an existing user.

    Only the attributes given are changed.

    Args:
        uid: Username of the user to modify.
        givenname: New first name.
        sn: New last name.
        mail: New email address.
        title: New job title.
        loginshell: New login shell.
    """
    changes = {
        key: value
        for key, value in {
            "givenname": givenname,
            "sn": sn,
            "mail": mail,
            "title": title,
            "loginshell": loginshell,
        }.items()
        if value is not None
    }

    async with ipa_session() as client:
        user = await client.user_mod(uid, **changes)
    return {"user": user, "message": f"User {uid} updated successfully"}


async def freeipa_user_del(uid: str) -> dict[str, Any]:
    """Delete a user.

    Args:
        uid: Username of the user to delete.
    """
    async with ipa_session() as client:
        await client.user_del(uid)
    return {"message": f"User {uid} deleted"}


async def freeipa_check_user_groups(uid: str) -> dict[str, Any]:
    """Check which groups a user belongs to.

    Args:
        uid: Username to check.
    """
    async with ipa_session() as client:
        user = await client.user_show(uid)
    groups = user.get("memberof_group", []) if isinstance(user, dict) else []
    return {"username": uid, "groups": groups, "count": len(groups)}
