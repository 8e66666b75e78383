"""Built-in registry of well-known API keys.

Each entry maps a short, memorable name (``openai``) to the environment
variable the provider's SDKs read (``OPENAI_API_KEY``) and the prefixes a
genuine key is expected to start with. The prefixes are only used to warn
about a likely typo; a value that does not match is still accepted.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class RegistryEntry:
    """A known key definition.

    Attributes:
        shorthand: Lower-case short name (e.g., "openai").
        env_var: Canonical environment variable name.
        prefixes: Expected value prefixes. Empty means any value.
    """

    shorthand: str
    env_var: str
    prefixes: tuple[str, ...] = ()


BUILTIN_ENTRIES: tuple[RegistryEntry, ...] = (
    RegistryEntry(shorthand="openai", env_var="OPENAI_API_KEY", prefixes=("sk-", "sk-proj-")),
    RegistryEntry(shorthand="anthropic", env_var="ANTHROPIC_API_KEY", prefixes=("sk-ant-",)),
    RegistryEntry(shorthand="gemini", env_var="GEMINI_API_KEY", prefixes=("AIza",)),
    RegistryEntry(shorthand="github", env_var="GITHUB_TOKEN", prefixes=("ghp_", "github_pat_")),
    RegistryEntry(shorthand="groq", env_var="GROQ_API_KEY", prefixes=("gsk_",)),
)


class Registry:
    """Read-only lookup table over registry entries.

    Example:
        registry = Registry()
        entry = registry.lookup_by_shorthand("OpenAI")
        assert entry.env_var == "OPENAI_API_KEY"
    """

    def __init__(self, entries: Iterable[RegistryEntry] = BUILTIN_ENTRIES) -> None:
        self._by_shorthand: dict[str, RegistryEntry] = {}
        self._by_env_var: dict[str, RegistryEntry] = {}

        for entry in entries:
            if entry.shorthand != entry.shorthand.lower():
                raise ValueError(f"Registry shorthand must be lower-case: {entry.shorthand!r}")
            if entry.shorthand in self._by_shorthand:
                raise ValueError(f"Duplicate registry shorthand: {entry.shorthand!r}")
            if entry.env_var in self._by_env_var:
                raise ValueError(f"Duplicate registry env var: {entry.env_var!r}")
            self._by_shorthand[entry.shorthand] = entry
            self._by_env_var[entry.env_var] = entry

    def lookup_by_shorthand(self, name: str) -> RegistryEntry | None:
        """Return the entry for a shorthand name, ignoring case."""
        return self._by_shorthand.get(name.lower())

    def lookup_by_env_var(self, env_var: str) -> RegistryEntry | None:
        """Return the entry whose env var matches exactly."""
        return self._by_env_var.get(env_var)


def validate_value_format(entry: RegistryEntry | None, value: str) -> bool:
    """Check whether a value looks like a key for the given entry.

    Returns True if there is no entry, the entry has no prefixes, or the value
    starts with at least one of them.
    """
    if entry is None or not entry.prefixes:
        return True
    return any(value.startswith(prefix) for prefix in entry.prefixes)


DEFAULT_REGISTRY = Registry()
