from __future__ import annotations

import httpx
import pytest

from llm_dispatch import create
from llm_dispatch.base.errors import ConfigurationError, UnknownProviderError
from llm_dispatch.base.interfaces import ChatProvider
from llm_dispatch.base.repositories.credentials import Credential
from llm_dispatch.cli.cli_parser import RESERVED_COMMANDS
from llm_dispatch.di import DEFAULT_PROVIDERS, build_container, build_default_registry


def test_default_registry_is_frozen_and_complete():
    registry = build_default_registry()
    assert registry.frozen
    assert list(registry.ids()) == [pid for pid, _, _ in DEFAULT_PROVIDERS]
    assert not RESERVED_COMMANDS & set(registry.ids())
    with pytest.raises(RuntimeError):
        registry.register("late", lambda cred: None)


def test_every_default_provider_has_a_catalog_default():
    container = build_container()
    for pid in container.registry.ids():
        assert container.catalog.default_for(pid) is not None, pid


@pytest.mark.parametrize("provider_id", [pid for pid, _, _ in DEFAULT_PROVIDERS])
def test_factories_build_contract_instances(provider_id):
    registry = build_default_registry(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    provider = registry.create(provider_id, Credential(provider_id, "sk-x"))
    try:
        assert isinstance(provider, ChatProvider)
        assert provider.provider_name == provider_id
    finally:
        close = getattr(provider, "close", None)
        if close is not None:
            close()


def test_create_checks_provider_before_credential():
    with pytest.raises(UnknownProviderError):
        create("nope")
    with pytest.raises(ConfigurationError):
        create("mock")


def test_create_uses_resolved_credential(monkeypatch):
    monkeypatch.setenv("MOCK_API_KEY", "k")
    assert create("mock").provider_name == "mock"
