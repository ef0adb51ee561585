"""Remote SSSD command templates.

Every value spliced into a command string passes through a validator in
this module. Call sites never format command text themselves.
"""

from typing import Final

from ipa_mcp.utils.validation import (
    validate_hostname,
    validate_identifier,
    validate_timeout,
)

SSSD_CONF: Final = "/etc/sssd/sssd.conf"
SSSD_DB_GLOB: Final = "/var/lib/sss/db/*"

CONNECTIVITY_MARKER: Final = "test"

STATUS_COMMAND: Final = "sudo systemctl status sssd --no-pager"
CACHE_STATS_COMMAND: Final = "sudo sssctl cache-expire -h || sudo ls -lh /var/lib/sss/db/"
CONNECTIVITY_COMMAND: Final = f'echo "{CONNECTIVITY_MARKER}"'


def chain(*steps: str) -> str:
    """Join steps with ``&&`` so the first failure short-circuits the rest."""
    return " && ".join(step for step in steps if step)


def escape_sed_literal(value: str) -> str:
    """Escape dots so sed matches them literally."""
    return value.replace(".", "\\.")


def clear_cache(force: bool = False) -> str:
    """Stop sssd, wipe its cache database, start it again."""
    return chain(
        "sudo systemctl stop sssd",
        f"sudo rm -rf {SSSD_DB_GLOB}",
        "sudo systemctl start sssd",
        "sudo sss_cache -E" if force else "",
    )


def update_timeouts(domain: str, entry_cache_timeout: int, sudo_timeout: int) -> str:
    """Rewrite cache timeouts in the ``[domain/<domain>]`` section.

    Existing lines are deleted, fresh ones appended after the section
    marker, then sssd is restarted.

    Raises:
        ValidationError: If a timeout is not a non-negative int or the
            domain contains characters outside the hostname allow-list
    """
    entry = validate_timeout(entry_cache_timeout, "entry_cache_timeout")
    sudo = validate_timeout(sudo_timeout, "sudo_timeout")
    marker = f"\\[domain\\/{escape_sed_literal(validate_hostname(domain, 'domain'))}\\]"

    return chain(
        f"sudo sed -i '/^entry_cache_timeout/d' {SSSD_CONF}",
        f"sudo sed -i '/^entry_cache_sudo_timeout/d' {SSSD_CONF}",
        f"sudo sed -i '/{marker}/a entry_cache_timeout = {entry}' {SSSD_CONF}",
        f"sudo sed -i '/{marker}/a entry_cache_sudo_timeout = {sudo}' {SSSD_CONF}",
        "sudo systemctl restart sssd",
    )


def invalidate_user(username: str) -> str:
    """Expire one user's cache entry.

    Raises:
        ValidationError: If username has unsafe characters
    """
    return f"sudo sss_cache -u {validate_identifier(username, 'username')}"


def invalidate_group(groupname: str) -> str:
    """Expire one group's cache entry.

    Raises:
        ValidationError: If groupname has unsafe characters
    """
    return f"sudo sss_cache -g {validate_identifier(groupname, 'groupname')}"
