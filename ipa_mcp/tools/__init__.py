"""MCP tools for ipa_mcp."""

from ipa_mcp.tools.certs import (
    freeipa_cert_find,
    freeipa_cert_request,
    freeipa_cert_revoke,
    freeipa_cert_show,
    freeipa_service_add,
    freeipa_service_find,
    freeipa_service_show,
)
from ipa_mcp.tools.groups import (
    freeipa_group_add_member,
    freeipa_group_find,
    freeipa_group_remove_member,
    freeipa_group_show,
)
from ipa_mcp.tools.hbac import (
    freeipa_hbacrule_add,
    freeipa_hbacrule_add_host,
    freeipa_hbacrule_add_service,
    freeipa_hbacrule_add_user,
    freeipa_hbacrule_del,
    freeipa_hbacrule_disable,
    freeipa_hbacrule_enable,
    freeipa_hbacrule_find,
    freeipa_hbacrule_show,
)
from ipa_mcp.tools.hosts import (
    freeipa_dnsrecord_add,
    freeipa_dnsrecord_del,
    freeipa_dnsrecord_show,
    freeipa_host_add,
    freeipa_host_del,
    freeipa_host_find,
    freeipa_host_show,
)
from ipa_mcp.tools.sssd import (
    freeipa_check_sssd_status,
    freeipa_clear_sssd_cache,
    freeipa_invalidate_group_cache,
    freeipa_invalidate_user_cache,
    freeipa_sssd_cache_stats,
    freeipa_test_ssh_connectivity,
    freeipa_update_sssd_timeout,
)
from ipa_mcp.tools.sudo import (
    freeipa_sudocmd_add,
    freeipa_sudocmd_find,
    freeipa_sudocmdgroup_add,
    freeipa_sudocmdgroup_add_member,
    freeipa_sudorule_add,
    freeipa_sudorule_add_command,
    freeipa_sudorule_add_deny_command,
    freeipa_sudorule_add_host,
    freeipa_sudorule_add_runasuser,
    freeipa_sudorule_add_user,
    freeipa_sudorule_del,
    freeipa_sudorule_disable,
    freeipa_sudorule_enable,
    freeipa_sudorule_find,
    freeipa_sudorule_show,
)
from ipa_mcp.tools.users import (
    freeipa_check_user_groups,
    freeipa_user_add,
    freeipa_user_del,
    freeipa_user_find,
    freeipa_user_mod,
    freeipa_user_show,
)
from ipa_mcp.tools.utility import (
    freeipa_get_server_info,
    freeipa_ping,
)

TOOLS = [
    freeipa_user_find,
    freeipa_user_show,
    freeipa_user_add,
    freeipa_user_mod,
    freeipa_user_del,
    freeipa_check_user_groups,
    freeipa_group_find,
    freeipa_group_show,
    freeipa_group_add_member,
    freeipa_group_remove_member,
    freeipa_sudorule_find,
    freeipa_sudorule_show,
    freeipa_sudorule_add,
    freeipa_sudorule_del,
    freeipa_sudorule_enable,
    freeipa_sudorule_disable,
    freeipa_sudorule_add_user,
    freeipa_sudorule_add_host,
    freeipa_sudorule_add_command,
    freeipa_sudorule_add_deny_command,
    freeipa_sudorule_add_runasuser,
    freeipa_sudocmd_find,
    freeipa_sudocmd_add,
    freeipa_sudocmdgroup_add,
    freeipa_sudocmdgroup_add_member,
    freeipa_hbacrule_find,
    freeipa_hbacrule_show,
    freeipa_hbacrule_add,
    freeipa_hbacrule_del,
    freeipa_hbacrule_enable,
    freeipa_hbacrule_disable,
    freeipa_hbacrule_add_user,
    freeipa_hbacrule_add_host,
    freeipa_hbacrule_add_service,
    freeipa_service_find,
    freeipa_service_show,
    freeipa_service_add,
    freeipa_cert_request,
    freeipa_cert_show,
    freeipa_cert_find,
    freeipa_cert_revoke,
    freeipa_host_find,
    freeipa_host_show,
    freeipa_host_add,
    freeipa_host_del,
    freeipa_dnsrecord_add,
    freeipa_dnsrecord_show,
    freeipa_dnsrecord_del,
    freeipa_clear_sssd_cache,
    freeipa_update_sssd_timeout,
    freeipa_check_sssd_status,
    freeipa_sssd_cache_stats,
    freeipa_invalidate_user_cache,
    freeipa_invalidate_group_cache,
    freeipa_test_ssh_connectivity,
    freeipa_ping,
    freeipa_get_server_info,
]

__all__ = ["TOOLS"]
