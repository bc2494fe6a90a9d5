from __future__ import annotations

import pytest

from llm_dispatch.base.errors import (
    ConfigurationError,
    DuplicateProviderError,
    ErrorKind,
    UnknownProviderError,
)
from llm_dispatch.base.registry import ProviderRegistry
from llm_dispatch.base.repositories.credentials import Credential


class _Built:
    def __init__(self, credential: Credential) -> None:
        self.credential = credential

    @property
    def provider_name(self) -> str:
        return self.credential.provider_id


def _registry(*ids: str) -> ProviderRegistry:
    reg = ProviderRegistry()
    for pid in ids:
        reg.register(pid, _Built, display_name=pid.title())
    return reg


def test_distinct_ids_register_in_order():
    reg = _registry("alpha", "beta", "gamma")
    assert reg.ids() == ("alpha", "beta", "gamma")  # nosec B101 - assert is appropriate in unit tests
    assert "beta" in reg  # nosec B101
    assert len(reg) == 3  # nosec B101
    assert [d.display_name for d in reg] == ["Alpha", "Beta", "Gamma"]  # nosec B101


def test_duplicate_id_raises_and_keeps_first():
    reg = _registry("alpha")
    first = reg.descriptor("alpha")
    with pytest.raises(DuplicateProviderError):
        reg.register("alpha", lambda cred: None)
    assert reg.descriptor("alpha") is first  # nosec B101


def test_ids_are_case_insensitive():
    reg = _registry("alpha")
    with pytest.raises(DuplicateProviderError):
        reg.register("ALPHA", _Built)
    assert "Alpha" in reg  # nosec B101


def test_blank_id_rejected():
    with pytest.raises(ValueError):
        ProviderRegistry().register("  ", _Built)


def test_frozen_registry_rejects_registration():
    reg = _registry("alpha").freeze()
    assert reg.frozen  # nosec B101
    with pytest.raises(RuntimeError):
        reg.register("beta", _Built)


def test_descriptors_view_is_read_only():
    reg = _registry("alpha")
    with pytest.raises(TypeError):
        reg.descriptors["beta"] = reg.descriptor("alpha")  # type: ignore[index]


def test_create_returns_new_instance_bound_to_credential():
    reg = _registry("alpha")
    cred = Credential(provider_id="alpha", secret="sk-1")
    a = reg.create("alpha", cred)
    b = reg.create("alpha", cred)
    assert a is not b  # nosec B101
    assert a.credential is cred  # nosec B101


@pytest.mark.parametrize(
    "credential",
    [
        Credential(provider_id="alpha", secret="sk-1"),
        Credential(provider_id="nonexistent-id", secret=""),
        None,
    ],
)
def test_unknown_id_raises_regardless_of_credential(credential):
    reg = _registry("alpha")
    with pytest.raises(UnknownProviderError) as ei:
        reg.create("nonexistent-id", credential)
    assert ei.value.kind is ErrorKind.UNKNOWN_PROVIDER  # nosec B101
    assert ei.value.retryable is False  # nosec B101


def test_empty_credential_is_configuration_error():
    reg = _registry("alpha")
    with pytest.raises(ConfigurationError):
        reg.create("alpha", Credential(provider_id="alpha", secret="   "))


def test_credential_for_other_provider_is_rejected():
    reg = _registry("alpha", "beta")
    with pytest.raises(ConfigurationError) as ei:
        reg.create("alpha", Credential(provider_id="beta", secret="sk-1"))
    assert "beta" in ei.value.message  # nosec B101
