"""Tests for sekret.core.registry module."""

from __future__ import annotations

import pytest

from sekret.core.registry import (
    BUILTIN_ENTRIES,
    DEFAULT_REGISTRY,
    Registry,
    RegistryEntry,
    validate_value_format,
)


class TestRegistryLookup:
    """Tests for shorthand and env var lookups."""

    def test_lookup_by_shorthand(self):
        """Test known shorthand resolves to its env var."""
        entry = DEFAULT_REGISTRY.lookup_by_shorthand("openai")
        assert entry is not None
        assert entry.env_var == "OPENAI_API_KEY"

    def test_lookup_by_shorthand_is_case_insensitive(self):
        """Test shorthand lookup ignores case."""
        assert DEFAULT_REGISTRY.lookup_by_shorthand("GitHub").env_var == "GITHUB_TOKEN"

    def test_lookup_by_shorthand_unknown(self):
        """Test unknown shorthand returns None."""
        assert DEFAULT_REGISTRY.lookup_by_shorthand("unknown") is None

    def test_lookup_by_env_var_is_exact(self):
        """Test env var lookup requires an exact match."""
        assert DEFAULT_REGISTRY.lookup_by_env_var("GROQ_API_KEY").shorthand == "groq"
        assert DEFAULT_REGISTRY.lookup_by_env_var("groq_api_key") is None

    def test_builtin_table_is_unique(self):
        """Test builtin env vars and shorthands are unique."""
        env_vars = [e.env_var for e in BUILTIN_ENTRIES]
        shorthands = [e.shorthand for e in BUILTIN_ENTRIES]
        assert len(set(env_vars)) == len(env_vars)
        assert len(set(shorthands)) == len(shorthands)
        assert all(DEFAULT_REGISTRY.lookup_by_shorthand(s) is not None for s in shorthands)

    def test_duplicate_env_var_rejected(self):
        """Test a table with duplicate env vars is refused."""
        with pytest.raises(ValueError, match="Duplicate registry env var"):
            Registry(
                [
                    RegistryEntry(shorthand="a", env_var="SAME_KEY"),
                    RegistryEntry(shorthand="b", env_var="SAME_KEY"),
                ]
            )

    def test_upper_case_shorthand_rejected(self):
        """Test shorthands must be lower-case."""
        with pytest.raises(ValueError, match="lower-case"):
            Registry([RegistryEntry(shorthand="Foo", env_var="FOO_KEY")])


class TestValidateValueFormat:
    """Tests for value prefix validation."""

    def test_matching_prefix(self):
        entry = DEFAULT_REGISTRY.lookup_by_shorthand("anthropic")
        assert validate_value_format(entry, "sk-ant-api03-xyz") is True

    def test_any_prefix_matches(self):
        entry = DEFAULT_REGISTRY.lookup_by_shorthand("github")
        assert validate_value_format(entry, "github_pat_123") is True
        assert validate_value_format(entry, "ghp_123") is True

    def test_mismatched_prefix(self):
        entry = DEFAULT_REGISTRY.lookup_by_shorthand("gemini")
        assert validate_value_format(entry, "sk-wrong") is False

    def test_no_entry_or_no_prefixes(self):
        """Test missing entry or prefix-less entry accepts anything."""
        assert validate_value_format(None, "anything") is True
        assert validate_value_format(RegistryEntry("custom", "CUSTOM_KEY"), "anything") is True
