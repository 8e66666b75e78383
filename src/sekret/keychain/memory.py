"""In-memory credential store for tests and dry runs."""

from __future__ import annotations

from sekret.keychain.base import CredentialStore, SecretNotFoundError


class MemoryStore(CredentialStore):
    """Credential store that keeps secrets in a dict. Nothing is persisted."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def get(self, key: str) -> str:
        try:
            return self.data[key]
        except KeyError:
            raise SecretNotFoundError(
                f"failed to get key {key!r} from keychain: not found"
            ) from None

    def delete(self, key: str) -> None:
        if key not in self.data:
            raise SecretNotFoundError(f"failed to delete key {key!r} from keychain: not found")
        del self.data[key]

    def __contains__(self, key: str) -> bool:
        return key in self.data
