"""Repositories: credential persistence and resolution."""

from .credentials import Credential, CredentialStore, default_credentials_path

__all__ = ["Credential", "CredentialStore", "default_credentials_path"]
