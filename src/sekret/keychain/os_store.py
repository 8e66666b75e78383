"""OS keychain store backed by the ``keyring`` library.

``keyring`` picks the platform backend:
  macOS: Keychain
  Windows: Credential Manager
  Linux: Secret Service (GNOME Keyring, KWallet, KeePassXC)
"""

from __future__ import annotations

import logging
from typing import Any

import keyring
from keyring.errors import KeyringError, NoKeyringError, PasswordDeleteError

from sekret.keychain.base import (
    CredentialStore,
    KeychainError,
    KeychainUnavailableError,
    SecretNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "sekret"


class OSKeychainStore(CredentialStore):
    """Credential store using the system keyring.

    Attributes:
        service_name: Keyring service all keys are stored under.
    """

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME, backend: Any | None = None) -> None:
        """Initialize the store.

        Args:
            service_name: Keyring service namespace.
            backend: Optional keyring backend instance, used instead of the
                default one (e.g., in tests).
        """
        self.service_name = service_name
        self._backend = backend

    @property
    def _keyring(self) -> Any:
        return self._backend if self._backend is not None else keyring

    def set(self, key: str, value: str) -> None:
        try:
            self._keyring.set_password(self.service_name, key, value)
        except NoKeyringError as e:
            raise KeychainUnavailableError(f"no OS keychain available: {e}") from e
        except KeyringError as e:
            raise KeychainError(f"failed to save key {key!r} to keychain: {e}") from e
        logger.debug("Stored %s in keychain service %s", key, self.service_name)

    def get(self, key: str) -> str:
        try:
            value = self._keyring.get_password(self.service_name, key)
        except NoKeyringError as e:
            raise KeychainUnavailableError(f"no OS keychain available: {e}") from e
        except KeyringError as e:
            raise KeychainError(f"failed to get key {key!r} from keychain: {e}") from e

        if value is None:
            raise SecretNotFoundError(f"failed to get key {key!r} from keychain: not found")
        return value

    def delete(self, key: str) -> None:
        try:
            self._keyring.delete_password(self.service_name, key)
        except PasswordDeleteError as e:
            raise SecretNotFoundError(
                f"failed to delete key {key!r} from keychain: not found"
            ) from e
        except NoKeyringError as e:
            raise KeychainUnavailableError(f"no OS keychain available: {e}") from e
        except KeyringError as e:
            raise KeychainError(f"failed to delete key {key!r} from keychain: {e}") from e
        logger.debug("Deleted %s from keychain service %s", key, self.service_name)
