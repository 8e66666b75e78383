"""Test doubles shared across test modules."""

from __future__ import annotations

from sekret.core.config import Config, MetadataStore
from sekret.core.errors import ConfigError
from sekret.keychain import KeychainError, MemoryStore


class FailingStore(MemoryStore):
    """MemoryStore whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise KeychainError(f"failed to save key {key!r} to keychain: backend locked")


class FailingMetadataStore(MetadataStore):
    """MetadataStore that loads normally but cannot save."""

    def save(self, config: Config) -> None:
        raise ConfigError("failed to write config file: disk full")
