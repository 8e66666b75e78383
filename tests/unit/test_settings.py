"""Tests for settings, logging and shell helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from sekret.context import build_context
from sekret.keychain import MemoryStore
from sekret.settings import SekretSettings
from sekret.utils import setup_logging, shell_escape, shell_export


class TestSekretSettings:
    """Tests for SekretSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("SEKRET_CONFIG_DIR", "SEKRET_SERVICE_NAME", "SEKRET_BACKEND", "SEKRET_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = SekretSettings()

        assert settings.service_name == "sekret"
        assert settings.backend == "keyring"
        assert settings.config_path.name == "config.json"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SEKRET_CONFIG_DIR", str(tmp_path / "cfg"))
        monkeypatch.setenv("SEKRET_BACKEND", "memory")

        settings = SekretSettings()

        assert settings.config_dir == tmp_path / "cfg"
        assert settings.config_path == tmp_path / "cfg" / "config.json"
        assert settings.backend == "memory"

    def test_invalid_backend(self, monkeypatch):
        monkeypatch.setenv("SEKRET_BACKEND", "vault")

        with pytest.raises(ValidationError):
            SekretSettings()

    def test_build_context(self, tmp_path):
        settings = SekretSettings(config_dir=tmp_path, backend="memory")

        app_ctx = build_context(settings)

        assert isinstance(app_ctx.store, MemoryStore)
        assert app_ctx.metadata.path == Path(tmp_path) / "config.json"
        assert app_ctx.settings is settings


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_single_handler(self):
        setup_logging("DEBUG")
        setup_logging("INFO")

        logger = logging.getLogger("sekret")
        assert logger.level == logging.INFO
        assert len([h for h in logger.handlers if h.get_name() == "sekret-rich"]) == 1
        assert logger.propagate is False

    def test_unknown_level_falls_back(self):
        setup_logging("chatty")
        assert logging.getLogger("sekret").level == logging.WARNING


class TestShellHelpers:
    """Tests for shell quoting."""

    def test_escape_special_characters(self):
        assert shell_escape('a"b') == 'a\\"b'
        assert shell_escape("$HOME") == "\\$HOME"
        assert shell_escape("`id`") == "\\`id\\`"
        assert shell_escape("back\\slash") == "back\\\\slash"

    def test_export(self):
        assert shell_export("A_KEY", "it's") == "export A_KEY=\"it's\""
