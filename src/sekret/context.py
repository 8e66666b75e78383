"""Collaborators shared by the commands of one invocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sekret.core.config import MetadataStore
from sekret.core.registry import DEFAULT_REGISTRY, Registry
from sekret.core.resolver import KeyResolver
from sekret.core.scanner import ExportScanner
from sekret.keychain import CredentialStore, get_credential_store
from sekret.prompts import Prompter, TerminalPrompter
from sekret.settings import SekretSettings

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a command needs, passed explicitly instead of via globals.

    The CLI builds one from settings; tests construct their own with an
    in-memory store and scripted prompter.
    """

    store: CredentialStore
    metadata: MetadataStore
    prompter: Prompter
    registry: Registry = DEFAULT_REGISTRY
    settings: SekretSettings | None = None
    resolver: KeyResolver = field(init=False)
    scanner: ExportScanner = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = KeyResolver(self.registry)
        self.scanner = ExportScanner(self.registry)


def build_context(settings: SekretSettings | None = None) -> AppContext:
    """Create the context used by a real invocation."""
    settings = settings or SekretSettings()
    logger.debug(
        "Using %s keychain service %r, config %s",
        settings.backend,
        settings.service_name,
        settings.config_path,
    )
    return AppContext(
        store=get_credential_store(settings.backend, service_name=settings.service_name),
        metadata=MetadataStore(settings.config_dir),
        prompter=TerminalPrompter(),
        settings=settings,
    )
