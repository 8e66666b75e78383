"""Runtime settings, read from ``SEKRET_*`` environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import typer
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sekret.core.config import CONFIG_FILE

APP_NAME = "sekret"


def default_config_dir() -> Path:
    """Per-user config directory (e.g., ``~/.config/sekret`` on Linux)."""
    return Path(typer.get_app_dir(APP_NAME))


class SekretSettings(BaseSettings):
    """Settings for a sekret invocation.

    Environment variables:
        SEKRET_CONFIG_DIR: Directory holding config.json
        SEKRET_SERVICE_NAME: Keychain service the keys are stored under
        SEKRET_BACKEND: Credential store backend (keyring or memory)
        SEKRET_LOG_LEVEL: Log level for diagnostics on stderr
    """

    model_config = SettingsConfigDict(env_prefix="SEKRET_", extra="ignore")

    config_dir: Path = Field(default_factory=default_config_dir)
    service_name: str = APP_NAME
    backend: Literal["keyring", "memory"] = "keyring"
    log_level: str = "WARNING"

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE
