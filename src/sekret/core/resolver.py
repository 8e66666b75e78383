"""Resolve command-line arguments to env vars and registered keys.

Users refer to keys three ways: by shorthand (``openai``), by env var
(``OPENAI_API_KEY``), or, for entries created before keys were stored under
their env var, by the old free-form name. The two entry points apply those
interpretations in different orders:

- ``resolve_env_var`` (registering a new key): shorthand first, since that is
  what people type.
- ``resolve_key`` (finding an existing key): literal env var first, since an
  exact match is unambiguous.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sekret.core.config import Config, KeyEntry
from sekret.core.errors import InvalidEnvVarNameError, KeyNotRegisteredError
from sekret.core.registry import DEFAULT_REGISTRY, Registry, RegistryEntry

ENV_VAR_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ResolvedEnvVar:
    """Result of resolving an argument for registration.

    Attributes:
        env_var: Canonical environment variable name.
        entry: Matching registry entry, used for value format checks.
        shorthand: True if the argument was a registry shorthand.
    """

    env_var: str
    entry: RegistryEntry | None = None
    shorthand: bool = False


def is_valid_env_var(name: str) -> bool:
    """Check whether a string is a legal environment variable name."""
    return bool(ENV_VAR_PATTERN.match(name))


class KeyResolver:
    """Map CLI arguments to env vars and registered key entries."""

    def __init__(self, registry: Registry | None = None) -> None:
        self.registry = registry or DEFAULT_REGISTRY

    def resolve_env_var(self, arg: str) -> ResolvedEnvVar:
        """Resolve an argument to the env var a new key should use.

        Raises:
            InvalidEnvVarNameError: If ``arg`` is neither a shorthand nor a
                valid env var name.
        """
        entry = self.registry.lookup_by_shorthand(arg)
        if entry is not None:
            return ResolvedEnvVar(env_var=entry.env_var, entry=entry, shorthand=True)

        if not is_valid_env_var(arg):
            raise InvalidEnvVarNameError(arg)

        return ResolvedEnvVar(env_var=arg, entry=self.registry.lookup_by_env_var(arg))

    def resolve_key(self, config: Config, arg: str) -> KeyEntry:
        """Find the registered entry an argument refers to.

        Tried in order: literal env var, shorthand expansion, legacy name.

        Raises:
            KeyNotRegisteredError: If nothing matches.
        """
        entry = config.find_key_by_env_var(arg)
        if entry is not None:
            return entry

        registry_entry = self.registry.lookup_by_shorthand(arg)
        if registry_entry is not None:
            entry = config.find_key_by_env_var(registry_entry.env_var)
            if entry is not None:
                return entry

        entry = config.find_key_by_legacy_name(arg)
        if entry is not None:
            return entry

        raise KeyNotRegisteredError(arg)

    def find_registered(self, config: Config, env_var: str) -> KeyEntry | None:
        """Return the entry registered under exactly this env var."""
        return config.find_key_by_env_var(env_var)

    def registry_entry_for(self, entry: KeyEntry) -> RegistryEntry | None:
        """Registry entry used to validate new values for a key."""
        return self.registry.lookup_by_env_var(entry.env_var) or (
            self.registry.lookup_by_shorthand(entry.legacy_name) if entry.legacy_name else None
        )
