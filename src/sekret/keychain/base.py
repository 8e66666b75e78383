"""Abstract base class for credential stores."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeychainError(Exception):
    """Base exception for credential store operations."""

    pass


class SecretNotFoundError(KeychainError):
    """Secret not found in the credential store."""

    pass


class KeychainUnavailableError(KeychainError):
    """No usable credential store backend."""

    pass


class CredentialStore(ABC):
    """Abstract interface for secret storage backends.

    Keys and values are opaque strings, scoped by the implementation to a
    fixed service namespace.

    Implementations must provide:
    - set: Store or replace a secret
    - get: Retrieve a secret
    - delete: Remove a secret
    """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a secret, replacing any existing value.

        Raises:
            KeychainError: If the secret cannot be stored
        """
        ...

    @abstractmethod
    def get(self, key: str) -> str:
        """Retrieve a secret.

        Raises:
            SecretNotFoundError: If the secret doesn't exist
            KeychainError: For other backend errors
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a secret.

        Raises:
            SecretNotFoundError: If the secret doesn't exist
            KeychainError: For other backend errors
        """
        ...

    def get_or_none(self, key: str) -> str | None:
        """Convenience method returning None instead of raising."""
        try:
            return self.get(key)
        except KeychainError:
            return None
