"""Host and DNS record tools."""

import re
from typing import Any

from fastmcp.exceptions import ToolError

from ipa_mcp.tools.session import ipa_session

# FreeIPA names record options <type>record, e.g. arecord, cnamerecord
_RECORD_TYPE = re.compile(r"^[A-Za-z0-9]+$")

# ============= Hosts =============


async def freeipa_host_find(pattern: str = "") -> dict[str, Any]:
    """Search for hosts enrolled in FreeIPA."""
    async with ipa_session() as client:
        hosts = await client.host_find(pattern) or []
    return {"hosts": hosts, "count": len(hosts)}


async def freeipa_host_show(fqdn: str) -> dict[str, Any]:
    """Get detailed information about a host."""
    async with ipa_session() as client:
        host = await client.host_show(fqdn)
    return {"host": host}


async def freeipa_host_add(
    fqdn: str,
    description: str | None = None,
    force: bool = False,
) -> dict[str, Any]:
    """Add a host to FreeIPA.

    Args:
        fqdn: Fully qualified domain name.
        description: Host description.
        force: Add even if the name does not resolve in DNS.
    """
    options: dict[str, Any] = {}
    if description:
        options["description"] = description
    if force:
        options["force"] = True

    async with ipa_session() as client:
        host = await client.host_add(fqdn, options)
    return {"host": host, "message": f"Host {fqdn} added successfully"}


async def freeipa_host_del(fqdn: str, updatedns: bool = False) -> dict[str, Any]:
    """Remove a host from FreeIPA.

    Args:
        fqdn: Fully qualified domain name.
        updatedns: Also remove the host's DNS entries.
    """
    async with ipa_session() as client:
        await client.host_del(fqdn, {"updatedns": True} if updatedns else None)
    return {"message": f"Host {fqdn} deleted"}


# ============= DNS records =============


def _record_option(record_type: str) -> str:
    if not _RECORD_TYPE.match(record_type):
        raise ToolError(f"Error: invalid DNS record type: {record_type}")
    return f"{record_type.lower()}record"


async def freeipa_dnsrecord_add(
    zone: str,
    name: str,
    value: str,
    record_type: str = "A",
) -> dict[str, Any]:
    """Add a DNS record.

    Args:
        zone: DNS zone (e.g. example.com).
        name: Record name inside the zone (e.g. www).
        value: Record data (e.g. 192.0.2.10).
        record_type: Record type (A, AAAA, CNAME, TXT, ...).
    """
    option = _record_option(record_type)
    async with ipa_session() as client:
        record = await client.dnsrecord_add(zone, name, {option: [value]})
    return {"record": record, "message": f"DNS record {name}.{zone} added"}


async def freeipa_dnsrecord_show(zone: str, name: str) -> dict[str, Any]:
    """Show the DNS records stored under a name."""
    async with ipa_session() as client:
        record = await client.dnsrecord_show(zone, name)
    return {"record": record}


async def freeipa_dnsrecord_del(
    zone: str,
    name: str,
    value: str | None = None,
    record_type: str = "A",
) -> dict[str, Any]:
    """Delete DNS records.

    Args:
        zone: DNS zone.
        name: Record name inside the zone.
        value: Delete only this record value. Omit to delete all records.
        record_type: Record type of ``value``.
    """
    options = {_record_option(record_type): [value]} if value else {"del_all": True}
    async with ipa_session() as client:
        await client.dnsrecord_del(zone, name, options)
    return {"message": f"DNS record {name}.{zone} deleted"}
