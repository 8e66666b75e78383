"""Credential store backends."""

from __future__ import annotations

from enum import Enum

from sekret.keychain.base import (
    CredentialStore,
    KeychainError,
    KeychainUnavailableError,
    SecretNotFoundError,
)
from sekret.keychain.memory import MemoryStore


class StoreBackend(Enum):
    """Supported credential store backends."""

    KEYRING = "keyring"
    MEMORY = "memory"


def get_credential_store(backend: StoreBackend | str, **config) -> CredentialStore:
    """Factory to create a credential store.

    Args:
        backend: The backend to use
        **config: Backend-specific configuration (``service_name`` for keyring)

    Returns:
        Configured CredentialStore instance

    Raises:
        ValueError: If backend is not supported
    """
    if isinstance(backend, str):
        backend = StoreBackend(backend)

    if backend == StoreBackend.KEYRING:
        from sekret.keychain.os_store import DEFAULT_SERVICE_NAME, OSKeychainStore

        return OSKeychainStore(service_name=config.get("service_name", DEFAULT_SERVICE_NAME))

    elif backend == StoreBackend.MEMORY:
        return MemoryStore()

    raise ValueError(f"Unsupported credential store backend: {backend}")


__all__ = [
    "CredentialStore",
    "KeychainError",
    "KeychainUnavailableError",
    "MemoryStore",
    "SecretNotFoundError",
    "StoreBackend",
    "get_credential_store",
]
