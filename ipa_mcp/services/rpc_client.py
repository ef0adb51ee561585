"""FreeIPA JSON-RPC client with cookie-based session authentication.

Every typed method funnels through ``call()``, which wraps arguments in the
FreeIPA envelope ``{"method", "params": [args, options], "id"}`` and unwraps
the doubly-nested ``result.result`` payload.
"""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from ipa_mcp.exceptions import (
    APIError,
    AuthenticationError,
    NetworkError,
    NotAuthenticatedError,
)
from ipa_mcp.models import RPCFault, RPCRequest, Session

logger = logging.getLogger(__name__)

Entry = dict[str, Any]


def join_session_cookies(set_cookie_headers: Iterable[str]) -> str:
    """Reduce Set-Cookie headers to a single Cookie header value.

    Attributes (Path, HttpOnly, ...) are stripped, keeping only ``name=value``.

    Example:
        >>> join_session_cookies(["a=1; Path=/", "b=2; HttpOnly"])
        'a=1; b=2'
    """
    pairs = [h.split(";", 1)[0].strip() for h in set_cookie_headers]
    return "; ".join(p for p in pairs if p)


def _with_members(options: dict[str, Any] | None, **relations: list[str] | None) -> Entry:
    """Merge relation lists into options, omitting relations left as None."""
    params = dict(options or {})
    for key, members in relations.items():
        if members is not None:
            params[key] = list(members)
    return params


def _fault_error(fault: RPCFault, status: int | None = None) -> APIError:
    return APIError(fault.message, code=fault.code, name=fault.name, status=status)


class FreeIPAClient:
    """Client for the FreeIPA JSON-RPC API.

    Holds a single session (cookie + request counter). Never retries:
    callers decide when to re-authenticate after a failure.
    """

    def __init__(
        self,
        server: str,
        username: str,
        password: str,
        *,
        verify_ssl: bool = True,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            server: FreeIPA server hostname
            username: Principal to log in as
            password: Password for the principal
            verify_ssl: Verify the server TLS certificate
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used instead of the network
        """
        self.session = Session(server=server, username=username, password=password)
        self.base_url = f"https://{server}/ipa"
        self._http = httpx.AsyncClient(
            verify=verify_ssl,
            timeout=timeout,
            follow_redirects=True,
            max_redirects=5,
            transport=transport,
        )

    @property
    def server(self) -> str:
        return self.session.server

    @property
    def is_authenticated(self) -> bool:
        return self.session.authenticated

    def invalidate_session(self) -> None:
        """Forget the session so the next call must re-authenticate."""
        if self.session.authenticated:
            logger.info("Invalidating FreeIPA session for %s", self.session.username)
        self.session.invalidate()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def authenticate(self) -> bool:
        """Log in with form-based password authentication.

        Returns:
            True on success

        Raises:
            AuthenticationError: Server answered with a non-200 status
            NetworkError: Server could not be reached
        """
        login_url = f"{self.base_url}/session/login_password"

        try:
            response = await self._http.post(
                login_url,
                data={"user": self.session.username, "password": self.session.password},
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "text/plain",
                    "Referer": self.base_url,
                },
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Network error during authentication: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(
                f"Authentication failed: HTTP {response.status_code}",
                status=response.status_code,
            )

        cookie = join_session_cookies(response.headers.get_list("set-cookie"))
        # The explicit Cookie header is the only session carrier
        self._http.cookies.clear()
        self.session.establish(cookie or self.session.cookie)

        logger.info(
            "Authenticated to FreeIPA %s as %s",
            self.session.server,
            self.session.username,
        )
        return True

    async def call(
        self,
        method: str,
        args: list[Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Invoke a FreeIPA API method.

        Args:
            method: API method name (e.g. "user_show")
            args: Positional arguments
            options: Named options

        Returns:
            The ``result.result`` member of the response

        Raises:
            NotAuthenticatedError: authenticate() has not succeeded yet
            APIError: Non-200 response or in-band fault
            NetworkError: No response obtained
        """
        if not self.session.authenticated:
            raise NotAuthenticatedError()

        request = RPCRequest(
            method=method,
            id=self.session.next_request_id(),
            args=list(args or []),
            options=dict(options or {}),
        )
        logger.debug("RPC call method=%s id=%d", method, request.id)

        try:
            response = await self._http.post(
                f"{self.base_url}/json",
                json=request.to_payload(),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "Referer": self.base_url,
                    "Cookie": self.session.cookie,
                },
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Network error during API call: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None
        fault = RPCFault.from_response(body)

        if response.status_code != 200:
            if fault is not None:
                raise _fault_error(fault, status=response.status_code)
            raise APIError(
                f"API call failed: HTTP {response.status_code}",
                status=response.status_code,
            )

        if fault is not None:
            logger.debug("RPC fault method=%s code=%s name=%s", method, fault.code, fault.name)
            raise _fault_error(fault)

        if not isinstance(body, dict):
            raise APIError(f"Invalid response from FreeIPA for {method}: not a JSON object")

        result = body.get("result")
        if not isinstance(result, dict):
            return None
        return result.get("result")

    # ============= Users =============

    async def user_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("user_find", [pattern], options)

    async def user_show(self, uid: str, options: Entry | None = None) -> Entry:
        return await self.call("user_show", [uid], options)

    async def user_add(self, uid: str, givenname: str, sn: str, **options: Any) -> Entry:
        """Create a user. Extra keyword arguments become named options."""
        return await self.call("user_add", [uid], {"givenname": givenname, "sn": sn, **options})

    async def user_mod(self, uid: str, **options: Any) -> Entry:
        return await self.call("user_mod", [uid], options)

    async def user_del(self, uid: str) -> bool:
        await self.call("user_del", [uid])
        return True

    # ============= Groups =============

    async def group_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("group_find", [pattern], options)

    async def group_show(self, cn: str, options: Entry | None = None) -> Entry:
        return await self.call("group_show", [cn], options)

    async def group_add_member(
        self,
        cn: str,
        users: list[str] | None = None,
        groups: list[str] | None = None,
        options: Entry | None = None,
    ) -> Entry:
        """Add users and/or groups to a group.

        Relations left as None are omitted from the request entirely.
        """
        return await self.call(
            "group_add_member", [cn], _with_members(options, user=users, group=groups)
        )

    async def group_remove_member(
        self,
        cn: str,
        users: list[str] | None = None,
        groups: list[str] | None = None,
        options: Entry | None = None,
    ) -> Entry:
        return await self.call(
            "group_remove_member", [cn], _with_members(options, user=users, group=groups)
        )

    # ============= Sudo rules =============

    async def sudorule_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("sudorule_find", [pattern], options)

    async def sudorule_show(self, cn: str, options: Entry | None = None) -> Entry:
        return await self.call("sudorule_show", [cn], options)

    async def sudorule_add(self, cn: str, description: str = "", **options: Any) -> Entry:
        return await self.call("sudorule_add", [cn], {"description": description, **options})

    async def sudorule_del(self, cn: str) -> bool:
        await self.call("sudorule_del", [cn])
        return True

    async def sudorule_enable(self, cn: str) -> bool:
        await self.call("sudorule_enable", [cn])
        return True

    async def sudorule_disable(self, cn: str) -> bool:
        await self.call("sudorule_disable", [cn])
        return True

    async def sudorule_add_user(
        self, cn: str, users: list[str] | None = None, groups: list[str] | None = None
    ) -> Entry:
        return await self.call(
            "sudorule_add_user", [cn], _with_members(None, user=users, group=groups)
        )

    async def sudorule_add_host(
        self, cn: str, hosts: list[str] | None = None, hostgroups: list[str] | None = None
    ) -> Entry:
        return await self.call(
            "sudorule_add_host", [cn], _with_members(None, host=hosts, hostgroup=hostgroups)
        )

    async def sudorule_add_allow_command(
        self,
        cn: str,
        commands: list[str] | None = None,
        commandgroups: list[str] | None = None,
    ) -> Entry:
        return await self.call(
            "sudorule_add_allow_command",
            [cn],
            _with_members(None, sudocmd=commands, sudocmdgroup=commandgroups),
        )

    async def sudorule_add_deny_command(
        self,
        cn: str,
        commands: list[str] | None = None,
        commandgroups: list[str] | None = None,
    ) -> Entry:
        return await self.call(
            "sudorule_add_deny_command",
            [cn],
            _with_members(None, sudocmd=commands, sudocmdgroup=commandgroups),
        )

    async def sudorule_add_runasuser(
        self, cn: str, users: list[str] | None = None, groups: list[str] | None = None
    ) -> Entry:
        return await self.call(
            "sudorule_add_runasuser", [cn], _with_members(None, user=users, group=groups)
        )

    # ============= Sudo commands =============

    async def sudocmd_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("sudocmd_find", [pattern], options)

    async def sudocmd_add(self, command: str, description: str = "", **options: Any) -> Entry:
        return await self.call("sudocmd_add", [command], {"description": description, **options})

    async def sudocmd_show(self, command: str, options: Entry | None = None) -> Entry:
        return await self.call("sudocmd_show", [command], options)

    # ============= Sudo command groups =============

    async def sudocmdgroup_find(
        self, pattern: str = "", options: Entry | None = None
    ) -> list[Entry]:
        return await self.call("sudocmdgroup_find", [pattern], options)

    async def sudocmdgroup_add(self, cn: str, description: str = "", **options: Any) -> Entry:
        return await self.call("sudocmdgroup_add", [cn], {"description": description, **options})

    async def sudocmdgroup_add_member(self, cn: str, commands: list[str]) -> Entry:
        return await self.call("sudocmdgroup_add_member", [cn], {"sudocmd": list(commands)})

    # ============= HBAC rules =============

    async def hbacrule_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("hbacrule_find", [pattern], options)

    async def hbacrule_show(self, cn: str, options: Entry | None = None) -> Entry:
        return await self.call("hbacrule_show", [cn], options)

    async def hbacrule_add(self, cn: str, description: str = "", **options: Any) -> Entry:
        return await self.call("hbacrule_add", [cn], {"description": description, **options})

    async def hbacrule_del(self, cn: str) -> bool:
        await self.call("hbacrule_del", [cn])
        return True

    async def hbacrule_enable(self, cn: str) -> bool:
        await self.call("hbacrule_enable", [cn])
        return True

    async def hbacrule_disable(self, cn: str) -> bool:
        await self.call("hbacrule_disable", [cn])
        return True

    async def hbacrule_add_user(
        self, cn: str, users: list[str] | None = None, groups: list[str] | None = None
    ) -> Entry:
        return await self.call(
            "hbacrule_add_user", [cn], _with_members(None, user=users, group=groups)
        )

    async def hbacrule_add_host(
        self, cn: str, hosts: list[str] | None = None, hostgroups: list[str] | None = None
    ) -> Entry:
        return await self.call(
            "hbacrule_add_host", [cn], _with_members(None, host=hosts, hostgroup=hostgroups)
        )

    async def hbacrule_add_service(
        self,
        cn: str,
        services: list[str] | None = None,
        servicegroups: list[str] | None = None,
    ) -> Entry:
        return await self.call(
            "hbacrule_add_service",
            [cn],
            _with_members(None, hbacsvc=services, hbacsvcgroup=servicegroups),
        )

    # ============= Certificates =============

    async def cert_request(
        self,
        csr: str,
        principal: str,
        profile_id: str = "caIPAserviceCert",
        **options: Any,
    ) -> Entry:
        return await self.call(
            "cert_request", [csr], {"principal": principal, "profile_id": profile_id, **options}
        )

    async def cert_show(self, serial_number: str, options: Entry | None = None) -> Entry:
        return await self.call("cert_show", [serial_number], options)

    async def cert_find(self, options: Entry | None = None) -> list[Entry]:
        return await self.call("cert_find", [], options)

    async def cert_revoke(self, serial_number: str, reason: int = 0, **options: Any) -> Entry:
        return await self.call(
            "cert_revoke", [serial_number], {"revocation_reason": reason, **options}
        )

    # ============= Services =============

    async def service_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("service_find", [pattern], options)

    async def service_add(self, principal: str, options: Entry | None = None) -> Entry:
        return await self.call("service_add", [principal], options)

    async def service_show(self, principal: str, options: Entry | None = None) -> Entry:
        return await self.call("service_show", [principal], options)

    async def service_allow_create_keytab(
        self,
        principal: str,
        users: list[str] | None = None,
        groups: list[str] | None = None,
        hosts: list[str] | None = None,
        hostgroups: list[str] | None = None,
    ) -> Entry:
        return await self.call(
            "service_allow_create_keytab",
            [principal],
            _with_members(None, user=users, group=groups, host=hosts, hostgroup=hostgroups),
        )

    async def service_allow_retrieve_keytab(
        self,
        principal: str,
        users: list[str] | None = None,
        groups: list[str] | None = None,
        hosts: list[str] | None = None,
        hostgroups: list[str] | None = None,
    ) -> Entry:
        return await self.call(
            "service_allow_retrieve_keytab",
            [principal],
            _with_members(None, user=users, group=groups, host=hosts, hostgroup=hostgroups),
        )

    # ============= Hosts =============

    async def host_find(self, pattern: str = "", options: Entry | None = None) -> list[Entry]:
        return await self.call("host_find", [pattern], options)

    async def host_add(self, fqdn: str, options: Entry | None = None) -> Entry:
        return await self.call("host_add", [fqdn], options)

    async def host_show(self, fqdn: str, options: Entry | None = None) -> Entry:
        return await self.call("host_show", [fqdn], options)

    async def host_del(self, fqdn: str, options: Entry | None = None) -> bool:
        await self.call("host_del", [fqdn], options)
        return True

    # ============= DNS records =============

    async def dnsrecord_add(
        self, dnszonename: str, idnsname: str, options: Entry | None = None
    ) -> Entry:
        return await self.call("dnsrecord_add", [dnszonename, idnsname], options)

    async def dnsrecord_show(
        self, dnszonename: str, idnsname: str, options: Entry | None = None
    ) -> Entry:
        return await self.call("dnsrecord_show", [dnszonename, idnsname], options)

    async def dnsrecord_del(
        self, dnszonename: str, idnsname: str, options: Entry | None = None
    ) -> bool:
        await self.call("dnsrecord_del", [dnszonename, idnsname], options)
        return True

    # ============= Utility =============

    async def ping(self) -> Any:
        return await self.call("ping")

    async def get_server_info(self) -> Any:
        """Server environment, via the ``env`` method."""
        return await self.call("env")
