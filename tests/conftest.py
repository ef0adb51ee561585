"""Shared pytest fixtures for the ipa_mcp test suite."""

from collections.abc import AsyncIterator, Iterator

import pytest

from ipa_mcp.config import Config, FreeIPASettings, Settings, SSHSettings
from ipa_mcp.services import reset_state, set_config
from ipa_mcp.services.rpc_client import FreeIPAClient

IPA_SERVER = "ipa.test"


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset global singletons around every test."""
    reset_state()
    yield
    reset_state()


@pytest.fixture
def config() -> Config:
    """Config with test credentials, installed as the global config."""
    cfg = Config(
        freeipa=FreeIPASettings(server=IPA_SERVER, username="admin", password="secret"),
        ssh=SSHSettings(username="automation", password="sshpass"),
        settings=Settings(known_hosts="none"),
    )
    set_config(cfg)
    return cfg


@pytest.fixture
async def client() -> AsyncIterator[FreeIPAClient]:
    """Unauthenticated FreeIPA client for ipa.test."""
    ipa = FreeIPAClient(IPA_SERVER, "admin", "secret")
    yield ipa
    await ipa.close()


@pytest.fixture
async def authed_client(client: FreeIPAClient) -> FreeIPAClient:
    """FreeIPA client with an established session."""
    client.session.establish("ipa_session=abc")
    return client
