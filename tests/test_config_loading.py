"""Tests for layered configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ipa_mcp.config import Config, Settings

ENV_VARS = (
    "FREEIPA_PASSWORD",
    "SSH_PASSWORD",
    "FREEIPA_SERVER",
    "FREEIPA_USERNAME",
    "FREEIPA_VERIFY_SSL",
    "SSH_USERNAME",
    "SSH_PORT",
    "SSSD_DOMAIN",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults_without_file(tmp_path: Path) -> None:
    config = Config.load(tmp_path / "missing.yaml")

    assert config.freeipa.server == "ipa.example.com"
    assert config.freeipa.username == "admin@EXAMPLE.COM"
    assert config.freeipa.verify_ssl is True
    assert config.freeipa.timeout == 30.0
    assert config.ssh.username == "automation"
    assert config.ssh.port == 22
    assert config.ssh.timeout == 20.0
    assert config.sssd.domain == "example.com"
    assert config.sssd.profile("testing").entry_cache_timeout == 60
    assert config.sssd.profile("testing").sudo_timeout == 120
    assert config.sssd.profile("production").entry_cache_timeout == 300
    assert config.sssd.profile("production").sudo_timeout == 600


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
freeipa:
  server: ipa.corp.test
  verify_ssl: false
ssh:
  port: 2222
sssd:
  domain: corp.test
  testing:
    entry_cache_timeout: 30
debug: true
"""
    )

    config = Config.load(config_file)

    assert config.freeipa.server == "ipa.corp.test"
    assert config.freeipa.verify_ssl is False
    assert config.ssh.port == 2222
    assert config.sssd.domain == "corp.test"
    assert config.sssd.testing.entry_cache_timeout == 30
    assert config.sssd.testing.sudo_timeout == 120
    assert config.debug is True


def test_yaml_accepts_camel_case_keys(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
freeipa:
  verifySSL: false
sssd:
  production:
    entryCacheTimeout: 900
    sudoTimeout: 1200
"""
    )

    config = Config.load(config_file)

    assert config.freeipa.verify_ssl is False
    assert config.sssd.production.entry_cache_timeout == 900
    assert config.sssd.production.sudo_timeout == 1200


def test_yaml_password_is_ignored(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        """
freeipa:
  password: from-file
ssh:
  password: from-file
"""
    )

    with patch("ipa_mcp.config.main.logger") as mock_logger:
        config = Config.load(config_file)

    assert config.freeipa.password == ""
    assert config.ssh.password == ""
    warnings = " ".join(str(c) for c in mock_logger.warning.call_args_list)
    assert "FREEIPA_PASSWORD" in warnings
    assert "SSH_PASSWORD" in warnings


def test_environment_wins_over_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("freeipa:\n  server: from-file\nssh:\n  port: 2200\n")
    monkeypatch.setenv("FREEIPA_SERVER", "from-env")
    monkeypatch.setenv("FREEIPA_PASSWORD", "ipa-secret")
    monkeypatch.setenv("SSH_PASSWORD", "ssh-secret")
    monkeypatch.setenv("SSH_PORT", "2201")
    monkeypatch.setenv("SSSD_DOMAIN", "env.test")
    monkeypatch.setenv("FREEIPA_VERIFY_SSL", "false")

    config = Config.load(config_file)

    assert config.freeipa.server == "from-env"
    assert config.freeipa.password == "ipa-secret"
    assert config.ssh.password == "ssh-secret"
    assert config.ssh.port == 2201
    assert config.sssd.domain == "env.test"
    assert config.freeipa.verify_ssl is False
    assert config.problems() == []


def test_invalid_ssh_port_keeps_previous(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSH_PORT", "not-a-port")
    config = Config.load(None)
    assert config.ssh.port == 22


def test_problems_lists_missing_passwords() -> None:
    config = Config.load(None)
    problems = config.problems()
    assert "FREEIPA_PASSWORD environment variable is required" in problems
    assert "SSH_PASSWORD environment variable is required" in problems


@pytest.mark.parametrize("content", ["- a\n- b\n", "freeipa: [unclosed\n", ""])
def test_unusable_yaml_falls_back_to_defaults(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(content)

    config = Config.load(config_file)

    assert config.freeipa.server == "ipa.example.com"


def test_non_mapping_section_ignored(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("freeipa: just-a-string\n")

    config = Config.load(config_file)

    assert config.freeipa.server == "ipa.example.com"


def test_from_env_reads_configured_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("sssd:\n  domain: custom.test\n")
    monkeypatch.setenv("IPA_MCP_CONFIG", str(config_file))

    config = Config.from_env()

    assert config.sssd.domain == "custom.test"
    assert config.settings.config_path == str(config_file)


def test_repr_hides_passwords(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FREEIPA_PASSWORD", "ipa-secret")
    monkeypatch.setenv("SSH_PASSWORD", "ssh-secret")

    text = repr(Config.load(None))

    assert "ipa-secret" not in text
    assert "ssh-secret" not in text


def test_known_hosts_disabled() -> None:
    config = Config(settings=Settings(known_hosts="none"))
    assert config.known_hosts_path is None
