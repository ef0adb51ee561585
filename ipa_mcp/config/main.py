"""Application configuration.

Merges three layers, later layers winning:
- Built-in defaults
- YAML file (``config.yaml`` by default)
- Environment variables

Passwords are only ever read from the environment. A password found in the
YAML file is ignored with a warning.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from ipa_mcp.config.host_keys import HostKeyVerifier
from ipa_mcp.config.settings import Settings

logger = logging.getLogger(__name__)

# camelCase keys accepted from existing config.yaml files
_KEY_ALIASES = {
    "verifySSL": "verify_ssl",
    "entryCacheTimeout": "entry_cache_timeout",
    "sudoTimeout": "sudo_timeout",
}


@dataclass
class FreeIPASettings:
    """FreeIPA JSON-RPC connection settings."""

    server: str = "ipa.example.com"
    username: str = "admin@EXAMPLE.COM"
    password: str = field(default="", repr=False)
    verify_ssl: bool = True
    timeout: float = 30.0  # seconds


@dataclass
class SSHSettings:
    """SSH credentials for SSSD cache management."""

    username: str = "automation"
    password: str = field(default="", repr=False)
    port: int = 22
    timeout: float = 20.0  # seconds


@dataclass
class TimeoutProfile:
    """SSSD cache timeouts in seconds."""

    entry_cache_timeout: int
    sudo_timeout: int


@dataclass
class SSSDSettings:
    """SSSD domain and timeout profiles."""

    domain: str = "example.com"
    testing: TimeoutProfile = field(default_factory=lambda: TimeoutProfile(60, 120))
    production: TimeoutProfile = field(default_factory=lambda: TimeoutProfile(300, 600))

    def profile(self, mode: str) -> TimeoutProfile:
        """Get the timeout profile for 'testing' or 'production'."""
        return self.testing if mode == "testing" else self.production


@dataclass
class Config:
    """ipa_mcp configuration.

    Aggregates FreeIPA, SSH and SSSD settings plus process settings.
    """

    freeipa: FreeIPASettings = field(default_factory=FreeIPASettings)
    ssh: SSHSettings = field(default_factory=SSHSettings)
    sssd: SSSDSettings = field(default_factory=SSSDSettings)
    debug: bool = False
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment and the configured YAML file."""
        settings = Settings.from_env()
        return cls.load(settings.config_path, settings=settings)

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        settings: Settings | None = None,
    ) -> "Config":
        """Load configuration: defaults, then YAML, then environment.

        Args:
            path: YAML config file. Missing files are skipped.
            settings: Process settings (defaults to Settings())

        Returns:
            Merged configuration
        """
        config = cls(settings=settings or Settings())
        if path is not None:
            config._apply_yaml(_load_yaml(Path(path)))
        config._apply_env()

        for problem in config.problems():
            logger.error("Configuration error: %s", problem)

        return config

    def _apply_yaml(self, data: dict[str, Any]) -> None:
        freeipa = _section(data, "freeipa")
        if freeipa:
            _warn_password(freeipa, "FreeIPA", "FREEIPA_PASSWORD")
            _merge(self.freeipa, freeipa, skip={"password"})

        ssh = _section(data, "ssh")
        if ssh:
            _warn_password(ssh, "SSH", "SSH_PASSWORD")
            _merge(self.ssh, ssh, skip={"password"})

        sssd = _section(data, "sssd")
        if sssd.get("domain"):
            self.sssd.domain = str(sssd["domain"])
        for mode in ("testing", "production"):
            if isinstance(sssd.get(mode), dict):
                _merge(self.sssd.profile(mode), sssd[mode])

        if data.get("debug") is not None:
            self.debug = bool(data["debug"])

    def _apply_env(self) -> None:
        # Credentials come ONLY from the environment
        if password := os.getenv("FREEIPA_PASSWORD"):
            self.freeipa.password = password
        if password := os.getenv("SSH_PASSWORD"):
            self.ssh.password = password

        if server := os.getenv("FREEIPA_SERVER"):
            self.freeipa.server = server
        if username := os.getenv("FREEIPA_USERNAME"):
            self.freeipa.username = username
        if verify := os.getenv("FREEIPA_VERIFY_SSL"):
            self.freeipa.verify_ssl = verify.lower() not in ("0", "false", "no", "off")
        if username := os.getenv("SSH_USERNAME"):
            self.ssh.username = username
        if port := os.getenv("SSH_PORT"):
            try:
                self.ssh.port = int(port)
            except ValueError:
                logger.warning("Invalid int for SSH_PORT: %s, using %d", port, self.ssh.port)
        if domain := os.getenv("SSSD_DOMAIN"):
            self.sssd.domain = domain
        if debug := os.getenv("DEBUG"):
            self.debug = debug.lower() == "true"

    def problems(self) -> list[str]:
        """List missing credentials and settings."""
        errors = []
        if not self.freeipa.password:
            errors.append("FREEIPA_PASSWORD environment variable is required")
        if not self.ssh.password:
            errors.append("SSH_PASSWORD environment variable is required")
        if not self.freeipa.server:
            errors.append("FreeIPA server is not configured")
        if not self.freeipa.username:
            errors.append("FreeIPA username is not configured")
        if not self.ssh.username:
            errors.append("SSH username is not configured")
        return errors

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts for SSH, or None if verification is disabled.

        Raises:
            FileNotFoundError: If strict checking is on and the file is missing
        """
        verifier = HostKeyVerifier(
            known_hosts_path=self.settings.known_hosts,
            strict_checking=self.settings.strict_host_key_checking,
        )
        return verifier.get_known_hosts_path()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML config file, returning {} if missing or invalid."""
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
        return {}

    logger.info("Loaded configuration from %s", path)
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Ignoring config section %s: not a mapping", name)
        return {}
    return section


def _merge(target: Any, values: dict[str, Any], skip: frozenset[str] | set[str] = frozenset()) -> None:
    """Copy known keys from a YAML section onto a settings dataclass."""
    known = {f.name: f for f in fields(target)}
    for key, value in values.items():
        attr = _KEY_ALIASES.get(key, key)
        if attr in skip:
            continue
        if attr not in known:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        current = getattr(target, attr)
        try:
            if isinstance(current, bool):
                value = bool(value)
            elif isinstance(current, (int, float)) and not isinstance(value, bool):
                value = type(current)(value)
            elif isinstance(current, str):
                value = str(value)
        except (TypeError, ValueError):
            logger.warning("Invalid value for %s: %r, keeping %r", key, value, current)
            continue
        setattr(target, attr, value)


def _warn_password(section: dict[str, Any], label: str, env_var: str) -> None:
    if section.get("password") not in (None, ""):
        logger.warning(
            "%s password found in config file - this is a security risk! "
            "It will be ignored. Set %s in the environment instead.",
            label,
            env_var,
        )
