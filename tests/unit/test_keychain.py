"""Tests for sekret.keychain - credential store backends."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from keyring.errors import KeyringError, NoKeyringError, PasswordDeleteError

from sekret.keychain import (
    KeychainError,
    KeychainUnavailableError,
    MemoryStore,
    SecretNotFoundError,
    StoreBackend,
    get_credential_store,
)
from sekret.keychain.os_store import DEFAULT_SERVICE_NAME, OSKeychainStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_set_get_replace(self):
        store = MemoryStore()
        store.set("A_KEY", "one")
        store.set("A_KEY", "two")

        assert store.get("A_KEY") == "two"

    def test_get_missing(self):
        with pytest.raises(SecretNotFoundError):
            MemoryStore().get("A_KEY")

    def test_get_or_none(self):
        store = MemoryStore({"A_KEY": "one"})

        assert store.get_or_none("A_KEY") == "one"
        assert store.get_or_none("B_KEY") is None

    def test_delete(self):
        store = MemoryStore({"A_KEY": "one"})
        store.delete("A_KEY")

        assert "A_KEY" not in store
        with pytest.raises(SecretNotFoundError):
            store.delete("A_KEY")


class TestOSKeychainStore:
    """Tests for OSKeychainStore with a mocked keyring backend."""

    def _make_backend(self, stored: dict | None = None) -> MagicMock:
        backend = MagicMock()
        _store: dict = stored if stored is not None else {}
        backend.get_password.side_effect = lambda svc, key: _store.get((svc, key))
        backend.set_password.side_effect = lambda svc, key, value: _store.__setitem__(
            (svc, key), value
        )

        def _delete(svc, key):
            if (svc, key) not in _store:
                raise PasswordDeleteError("Password not found")
            del _store[(svc, key)]

        backend.delete_password.side_effect = _delete
        return backend

    def test_keys_scoped_to_service(self):
        stored: dict = {}
        store = OSKeychainStore(backend=self._make_backend(stored))

        store.set("OPENAI_API_KEY", "sk-1")

        assert stored == {(DEFAULT_SERVICE_NAME, "OPENAI_API_KEY"): "sk-1"}
        assert store.get("OPENAI_API_KEY") == "sk-1"

    def test_custom_service_name(self):
        stored: dict = {}
        store = OSKeychainStore(service_name="sekret-test", backend=self._make_backend(stored))

        store.set("A_KEY", "v")

        assert ("sekret-test", "A_KEY") in stored

    def test_get_missing(self):
        store = OSKeychainStore(backend=self._make_backend())

        with pytest.raises(SecretNotFoundError, match="not found"):
            store.get("A_KEY")

    def test_delete(self):
        stored = {(DEFAULT_SERVICE_NAME, "A_KEY"): "v"}
        store = OSKeychainStore(backend=self._make_backend(stored))

        store.delete("A_KEY")

        assert stored == {}
        with pytest.raises(SecretNotFoundError):
            store.delete("A_KEY")

    def test_backend_error_on_set(self):
        backend = MagicMock()
        backend.set_password.side_effect = KeyringError("locked")
        store = OSKeychainStore(backend=backend)

        with pytest.raises(KeychainError, match="failed to save key 'A_KEY'"):
            store.set("A_KEY", "v")

    def test_backend_error_on_get(self):
        backend = MagicMock()
        backend.get_password.side_effect = KeyringError("locked")
        store = OSKeychainStore(backend=backend)

        with pytest.raises(KeychainError) as exc_info:
            store.get("A_KEY")
        assert not isinstance(exc_info.value, SecretNotFoundError)

    def test_no_keyring(self):
        backend = MagicMock()
        backend.get_password.side_effect = NoKeyringError("no backend")
        store = OSKeychainStore(backend=backend)

        with pytest.raises(KeychainUnavailableError):
            store.get("A_KEY")


class TestGetCredentialStore:
    """Tests for the credential store factory."""

    def test_memory(self):
        assert isinstance(get_credential_store("memory"), MemoryStore)

    def test_keyring(self):
        store = get_credential_store(StoreBackend.KEYRING, service_name="custom")

        assert isinstance(store, OSKeychainStore)
        assert store.service_name == "custom"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_credential_store("vault")
