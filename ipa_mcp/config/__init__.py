"""Configuration module for ipa_mcp.

- Config: FreeIPA, SSH and SSSD settings (defaults, YAML, environment)
- HostKeyVerifier: known_hosts resolution for SSH
- Settings: process settings from IPA_MCP_* environment variables
"""

from ipa_mcp.config.host_keys import HostKeyVerifier
from ipa_mcp.config.main import (
    Config,
    FreeIPASettings,
    SSHSettings,
    SSSDSettings,
    TimeoutProfile,
)
from ipa_mcp.config.settings import Settings

__all__ = [
    "Config",
    "FreeIPASettings",
    "HostKeyVerifier",
    "Settings",
    "SSHSettings",
    "SSSDSettings",
    "TimeoutProfile",
]
