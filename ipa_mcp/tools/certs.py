"""Service principal and certificate tools."""

from typing import Any

from ipa_mcp.tools.session import ipa_session

# ============= Service principals =============


async def freeipa_service_find(pattern: str = "") -> dict[str, Any]:
    """Search for service principals."""
    async with ipa_session() as client:
        services = await client.service_find(pattern) or []
    return {"services": services, "count": len(services)}


async def freeipa_service_show(principal: str) -> dict[str, Any]:
    """Get detailed information about a service principal.

    Args:
        principal: Service principal (e.g. HTTP/web.example.com).
    """
    async with ipa_session() as client:
        service = await client.service_show(principal)
    return {"service": service}


async def freeipa_service_add(principal: str, force: bool = False) -> dict[str, Any]:
    """Create a service principal.

    Args:
        principal: Service principal (e.g. HTTP/web.example.com).
        force: Create even if the host has no DNS A/AAAA record.
    """
    async with ipa_session() as client:
        service = await client.service_add(principal, {"force": True} if force else None)
    return {"service": service, "message": f"Service principal {principal} created successfully"}


# ============= Certificates =============


async def freeipa_cert_request(
    csr: str,
    principal: str,
    profile: str = "caIPAserviceCert",
) -> dict[str, Any]:
    """Request a certificate for a principal from the FreeIPA CA.

    Args:
        csr: PEM-encoded certificate signing request.
        principal: Principal the certificate is issued to.
        profile: Certificate profile ID.
    """
    async with ipa_session() as client:
        cert = await client.cert_request(csr, principal, profile_id=profile)
    return {"certificate": cert, "message": "Certificate issued successfully"}


async def freeipa_cert_show(serial_number: str) -> dict[str, Any]:
    """Get a certificate by serial number."""
    async with ipa_session() as client:
        cert = await client.cert_show(serial_number)
    return {"certificate": cert}


async def freeipa_cert_find(
    subject: str | None = None,
    principal: str | None = None,
    sizelimit: int | None = None,
) -> dict[str, Any]:
    """Search for certificates.

    Args:
        subject: Subject common name to match.
        principal: Only certificates issued to this service principal.
        sizelimit: Maximum number of certificates to return.
    """
    options: dict[str, Any] = {}
    if subject:
        options["subject"] = subject
    if principal:
        options["services"] = [principal]
    if sizelimit is not None:
        options["sizelimit"] = sizelimit

    async with ipa_session() as client:
        certs = await client.cert_find(options) or []
    return {"certificates": certs, "count": len(certs)}


async def freeipa_cert_revoke(serial_number: str, reason: int = 0) -> dict[str, Any]:
    """Revoke a certificate.

    Args:
        serial_number: Certificate serial number.
        reason: RFC 5280 revocation reason code (0 = unspecified).
    """
    async with ipa_session() as client:
        result = await client.cert_revoke(serial_number, reason)
    return {"result": result, "message": f"Certificate {serial_number} revoked"}
