"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from sekret.context import AppContext
from sekret.core.config import MetadataStore
from sekret.keychain import MemoryStore
from sekret.prompts import ScriptedPrompter


@pytest.fixture
def zshrc_content():
    """Shell config with a mix of secret and non-secret exports."""
    return """# Shell setup
export PATH="/usr/local/bin:$PATH"
export EDITOR=vim

# API keys
export OPENAI_API_KEY="sk-proj-abcdef1234"
# export ANTHROPIC_API_KEY="sk-ant-commented"
  export GITHUB_TOKEN='ghp_abcdefghijklmnop'
export MY_CUSTOM_TOKEN=plain-token-value
alias ll="ls -la"
"""


@pytest.fixture
def store():
    """In-memory credential store."""
    return MemoryStore()


@pytest.fixture
def metadata(tmp_path):
    """Metadata store in a temporary config directory."""
    return MetadataStore(tmp_path / "config")


@pytest.fixture
def prompter():
    """Prompter with no scripted answers; tests append what they need."""
    return ScriptedPrompter()


@pytest.fixture
def app_ctx(store, metadata, prompter):
    """Application context wired to in-memory collaborators."""
    return AppContext(store=store, metadata=metadata, prompter=prompter)


@pytest.fixture
def fixed_time():
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seed_key(store, metadata):
    """Register a new-style key (stored under its env var)."""

    def _seed(env_var: str, value: str) -> None:
        config = metadata.load()
        config.add_key(env_var)
        metadata.save(config)
        store.set(env_var, value)

    return _seed


@pytest.fixture
def seed_legacy_key(store, metadata):
    """Register a legacy key (stored under its old name)."""

    def _seed(name: str, env_var: str, value: str) -> None:
        config = metadata.load()
        config.add_key(env_var, legacy_name=name)
        metadata.save(config)
        store.set(name, value)

    return _seed


@pytest.fixture
def write_file(tmp_path):
    """Write a file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
