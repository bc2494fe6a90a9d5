"""Credential store: precedence, persistence and atomic writes."""
from __future__ import annotations

import json
import os
import stat
import sys

import pytest

from llm_dispatch.base.errors import ConfigurationError, ErrorKind
from llm_dispatch.base.repositories.credentials import CredentialStore, default_credentials_path


def test_missing_file_loads_empty(store):
    assert store.load() == {}


def test_no_credential_is_configuration_error(store):
    with pytest.raises(ConfigurationError) as ei:
        store.resolve("cerebras")
    assert ei.value.kind is ErrorKind.CONFIGURATION
    assert "CEREBRAS_API_KEY" in ei.value.message
    assert ei.value.retryable is False


def test_save_then_resolve_from_file(store):
    store.save({"cerebras": "sk-test"})
    cred = store.resolve("cerebras")
    assert cred.secret == "sk-test"
    assert cred.source == "file"
    assert cred.provider_id == "cerebras"


def test_environment_overrides_file(store, monkeypatch):
    store.save({"cerebras": "sk-file"})
    monkeypatch.setenv("CEREBRAS_API_KEY", "sk-env")
    cred = store.resolve("cerebras")
    assert cred.secret == "sk-env"
    assert cred.source == "env"


def test_blank_environment_value_falls_back_to_file(store, monkeypatch):
    store.save({"groq": "sk-file"})
    monkeypatch.setenv("GROQ_API_KEY", "   ")
    assert store.resolve("groq").secret == "sk-file"


def test_gemini_accepts_google_alias(store, monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    assert store.resolve("gemini").secret == "g-key"


def test_injected_environ_mapping(credentials_path):
    store = CredentialStore(credentials_path, environ={"XAI_API_KEY": "x-1"})
    assert store.resolve("xai").secret == "x-1"


def test_save_merges_with_existing_record(store):
    store.save({"cerebras": "a"})
    store.save({"groq": "b"})
    assert store.load() == {"cerebras": "a", "groq": "b"}


def test_save_none_removes_entry(store):
    store.save({"cerebras": "a", "groq": "b"})
    record = store.save({"cerebras": None})
    assert record == {"groq": "b"}
    assert json.loads(store.path.read_text()) == {"groq": "b"}


def test_save_leaves_no_temp_files(store):
    store.save({"cerebras": "a"})
    leftovers = [p.name for p in store.path.parent.iterdir() if p.name != store.path.name]
    assert leftovers == []


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_saved_file_is_owner_only(store):
    store.save({"cerebras": "a"})
    mode = stat.S_IMODE(os.stat(store.path).st_mode)
    assert mode == 0o600


def test_corrupt_file_is_configuration_error(store):
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        store.load()


def test_non_object_file_is_configuration_error(store):
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        store.resolve("cerebras")


def test_configured_providers_reports_any_source(store, monkeypatch):
    store.save({"cerebras": "a"})
    monkeypatch.setenv("OPENAI_API_KEY", "o")
    assert store.configured_providers(["cerebras", "groq", "openai"]) == ["cerebras", "openai"]


def test_credential_repr_hides_secret(store):
    store.save({"cerebras": "sk-very-secret-value"})
    cred = store.resolve("cerebras")
    assert "sk-very-secret-value" not in repr(cred)
    assert cred.masked().endswith("alue")


def test_default_path_honours_env(credentials_path):
    assert default_credentials_path() == credentials_path


def test_default_path_uses_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv("LLM_DISPATCH_CREDENTIALS_FILE")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert default_credentials_path() == tmp_path / "xdg" / "llm_dispatch" / "credentials.json"
