"""Registered key metadata and its JSON file store.

Only metadata lives here (which env vars are registered and when). The key
material itself is kept in the OS keychain.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sekret.core.errors import ConfigError, DuplicateKeyError, KeyNotRegisteredError

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"
CURRENT_VERSION = 1

# Fractional seconds beyond microseconds (nanosecond timestamps)
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


class KeyEntry(BaseModel):
    """Metadata for a single registered key.

    ``legacy_name`` is only set for entries created before keys were stored
    under their env var. Such entries keep using the old name as their
    keychain key.
    """

    model_config = ConfigDict(populate_by_name=True)

    legacy_name: str = Field(default="", alias="name")
    env_var: str
    added_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("legacy_name", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("added_at", mode="before")
    @classmethod
    def _truncate_fraction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _EXTRA_FRACTION.sub(r"\1", value)
        return value

    @property
    def keychain_key(self) -> str:
        """Key under which the secret is stored in the keychain."""
        return self.legacy_name or self.env_var

    @property
    def is_legacy(self) -> bool:
        return bool(self.legacy_name)


class Config(BaseModel):
    """Contents of the metadata file. Key order is listing order."""

    version: int = CURRENT_VERSION
    keys: list[KeyEntry] = Field(default_factory=list)

    @field_validator("keys", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def add_key(
        self,
        env_var: str,
        legacy_name: str = "",
        added_at: datetime | None = None,
    ) -> KeyEntry:
        """Register a new key.

        Empty legacy names never collide with each other; only non-empty
        ones are checked for uniqueness.

        Raises:
            DuplicateKeyError: If the env var, legacy name or keychain key is
                already used. The config is left unchanged.
        """
        self.check_available(env_var, legacy_name)

        entry = KeyEntry(
            legacy_name=legacy_name,
            env_var=env_var,
            added_at=added_at or datetime.now(timezone.utc),
        )
        self.keys.append(entry)
        return entry

    def check_available(self, env_var: str, legacy_name: str = "") -> None:
        """Check a new entry would not collide with an existing one.

        Besides env vars and legacy names, the keychain key must be free: a
        legacy entry stored under ``mykey`` blocks registering ``mykey`` as
        an env var, since both would share one keychain slot.

        Raises:
            DuplicateKeyError: On any collision.
        """
        keychain_key = legacy_name or env_var
        for existing in self.keys:
            if legacy_name and existing.legacy_name == legacy_name:
                raise DuplicateKeyError(f"key {legacy_name!r} already exists")
            if existing.env_var == env_var:
                owner = existing.legacy_name or existing.env_var
                raise DuplicateKeyError(
                    f"environment variable {env_var!r} is already used by key {owner!r}"
                )
            if existing.keychain_key == keychain_key:
                raise DuplicateKeyError(
                    f"keychain key {keychain_key!r} is already used by {existing.env_var}"
                )

    def remove_key(self, env_var: str) -> KeyEntry:
        """Remove the entry for an env var.

        Raises:
            KeyNotRegisteredError: If no entry has this env var.
        """
        for index, entry in enumerate(self.keys):
            if entry.env_var == env_var:
                return self.keys.pop(index)
        raise KeyNotRegisteredError(env_var)

    def find_key_by_env_var(self, env_var: str) -> KeyEntry | None:
        return next((k for k in self.keys if k.env_var == env_var), None)

    def find_key_by_legacy_name(self, name: str) -> KeyEntry | None:
        if not name:
            return None
        return next((k for k in self.keys if k.legacy_name == name), None)


class MetadataStore:
    """Load and save the metadata file.

    The whole file is rewritten on every save through a temporary file and
    ``os.replace``. There is no locking: two concurrent invocations race and
    the last writer wins.
    """

    def __init__(self, config_dir: Path | str) -> None:
        self.config_dir = Path(config_dir)

    @property
    def path(self) -> Path:
        return self.config_dir / CONFIG_FILE

    def load(self) -> Config:
        """Read the config file.

        Returns a fresh empty config when the file does not exist.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Config(version=CURRENT_VERSION, keys=[])
        except OSError as e:
            raise ConfigError(f"failed to read config file: {e}") from e

        try:
            return Config.model_validate_json(data)
        except ValidationError as e:
            raise ConfigError(f"failed to parse config file {self.path}: {e}") from e

    def save(self, config: Config) -> None:
        """Write the config to disk, creating directories as needed.

        Raises:
            ConfigError: If the directory or file cannot be written.
        """
        payload = config.model_dump(mode="json", by_alias=True)
        data = json.dumps(payload, indent=2) + "\n"

        try:
            self.config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"failed to create config directory: {e}") from e

        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.config_dir, prefix=".config-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise ConfigError(f"failed to write config file: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug("Saved %d key(s) to %s", len(config.keys), self.path)
