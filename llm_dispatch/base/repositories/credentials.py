"""
Credential Store

Purpose
- Centralize API key resolution for providers.
- Merge the persisted credential record with environment overrides.
- Own the only write path for the persisted record (``save``).

Design
- Priority: environment variable (``<PROVIDER_ID>_API_KEY`` and aliases)
  first, then the persisted file. Environment wins so that CI and one-off
  shells can override a stored key without touching local state.
- The file is re-read on every ``resolve``; secrets are never cached on the
  store instance.
- ``save`` performs read-existing → merge-in-memory → write-back. The write
  goes to a temp file in the same directory and is moved into place with
  ``os.replace`` so readers never observe a partial file. Two concurrent
  ``save`` calls still race: the last writer wins and the other writer's
  change is lost. No locking is attempted.

File format
- A single JSON object keyed by provider id; each value is an opaque secret
  string. Example: ``{"cerebras": "csk-..."}``.

Usage
- store = CredentialStore()
- cred = store.resolve("cerebras")
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ...config.defaults import (
    APP_NAME,
    CREDENTIALS_FILE_ENV,
    CREDENTIALS_FILE_MODE,
    CREDENTIALS_FILE_NAME,
)
from ...config.env import get_env_var_name, resolve_provider_key
from ..errors import ConfigurationError
from ..logging import get_logger, log_event


def _xdg_config_dir() -> Path:
    """Return the XDG-compliant configuration directory for this app.

    Uses ``XDG_CONFIG_HOME`` when set and non-empty, otherwise ``~/.config``.
    """
    root = os.environ.get("XDG_CONFIG_HOME")
    base = Path(root).expanduser() if root else Path.home() / ".config"
    return base / APP_NAME


def default_credentials_path() -> Path:
    """Compute the credential file path, honoring ``LLM_DISPATCH_CREDENTIALS_FILE``."""
    explicit = os.environ.get(CREDENTIALS_FILE_ENV)
    if explicit:
        return Path(explicit).expanduser()
    return _xdg_config_dir() / CREDENTIALS_FILE_NAME


@dataclass(frozen=True)
class Credential:
    """An effective secret for one provider.

    ``source`` is ``"env"`` or ``"file"``. The secret is excluded from
    ``repr`` so credentials can appear in logs and tracebacks safely.
    """

    provider_id: str
    secret: str = field(repr=False)
    source: str = "file"

    def masked(self) -> str:
        """Return a short masked form such as ``sk-…1234``."""
        if len(self.secret) <= 8:
            return "*" * len(self.secret)
        return f"{self.secret[:3]}…{self.secret[-4:]}"


class CredentialStore:
    """Process-wide merged view of persisted and environment-supplied secrets.

    Parameters
    ----------
    path:
        Credential file location; defaults to :func:`default_credentials_path`
        evaluated at construction time.
    environ:
        Mapping consulted for overrides; defaults to ``os.environ`` (read
        live on each call).
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._path = Path(path) if path is not None else default_credentials_path()
        self._environ = environ
        self._logger = get_logger("llm_dispatch.credentials")

    @property
    def path(self) -> Path:
        return self._path

    # -------------------- read side --------------------

    def load(self) -> Dict[str, str]:
        """Return the persisted record (empty when the file does not exist).

        Raises
        ------
        ConfigurationError
            When the file exists but is unreadable or not a JSON object of
            string values.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read credential file {self._path}: {exc.strerror or exc}"
            ) from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Credential file {self._path} is not valid JSON (line {exc.lineno})"
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Credential file {self._path} must contain a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def resolve(self, provider_id: str) -> Credential:
        """Return the effective credential for ``provider_id``.

        Raises
        ------
        ConfigurationError
            When neither the environment nor the persisted record supplies a
            non-empty secret.
        """
        pid = (provider_id or "").strip().lower()
        val, env_name = resolve_provider_key(pid, self._environ)
        if val:
            log_event(self._logger, "credentials.resolve", provider=pid, source="env", env_var=env_name)
            return Credential(provider_id=pid, secret=val, source="env")

        stored = (self.load().get(pid) or "").strip()
        if stored:
            log_event(self._logger, "credentials.resolve", provider=pid, source="file")
            return Credential(provider_id=pid, secret=stored, source="file")

        log_event(self._logger, "credentials.missing", provider=pid)
        raise ConfigurationError(
            f"No API key configured for '{pid}'. Run 'configure' or set {self.env_hint(pid)}.",
            provider=pid,
        )

    def configured_providers(self, provider_ids: List[str]) -> List[str]:
        """Return the subset of ``provider_ids`` that currently resolve."""
        stored = self.load()
        out: List[str] = []
        for pid in provider_ids:
            val, _ = resolve_provider_key(pid, self._environ)
            if val or (stored.get(pid) or "").strip():
                out.append(pid)
        return out

    @staticmethod
    def env_hint(provider_id: str) -> str:
        """Return the canonical env var name a user can set for ``provider_id``."""
        return get_env_var_name(provider_id)

    # -------------------- write side --------------------

    def save(self, partial: Mapping[str, Optional[str]]) -> Dict[str, str]:
        """Merge ``partial`` into the persisted record and write it back.

        ``None`` or blank values remove the provider's entry. Returns the
        record as written.

        Not transactional across concurrent writers (last writer wins).
        """
        record = self.load()
        for provider_id, secret in partial.items():
            pid = provider_id.strip().lower()
            if secret is None or not secret.strip():
                record.pop(pid, None)
            else:
                record[pid] = secret.strip()
        self._write_atomic(record)
        log_event(
            self._logger,
            "credentials.save",
            providers=sorted(p.strip().lower() for p in partial),
            path=str(self._path),
        )
        return record

    def _write_atomic(self, record: Mapping[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(dict(sorted(record.items())), fh, indent=2)
                fh.write("\n")
            os.chmod(tmp_name, CREDENTIALS_FILE_MODE)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = ["Credential", "CredentialStore", "default_credentials_path"]
