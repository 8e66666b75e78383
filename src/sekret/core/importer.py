"""Interactive import of plaintext findings into the keychain.

For every finding the operator decides what happens:

- env var not registered yet: ``Import? [Y/s/q]`` (Enter imports). Importing
  stores the value under the env var and registers it; quitting cancels this
  finding and every one after it.
- env var already registered: ``Overwrite? [y/N]`` (Enter skips). Overwriting
  replaces the stored value under the entry's existing keychain key.

Keychain failures, and new keys whose keychain slot is already taken by a
legacy entry, only fail the finding at hand. Failing to save the
metadata file aborts the whole run, since the keychain and the metadata
could otherwise disagree. The metadata is saved after each import, so an
interrupted run keeps what was already imported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from rich.console import Console
from rich.markup import escape

from sekret.core.config import Config, KeyEntry, MetadataStore
from sekret.core.errors import DuplicateKeyError
from sekret.core.resolver import KeyResolver
from sekret.core.scanner import Finding, display_masked_value
from sekret.keychain.base import CredentialStore, KeychainError
from sekret.prompts import Prompter

logger = logging.getLogger(__name__)

NEW_KEY_PROMPT = "         Import? [Y/s/q]"
OVERWRITE_PROMPT = "         Overwrite? [y/N]"

_INDENT = "         "


class ImportStatus(Enum):
    """Outcome of a single finding."""

    IMPORTED = "imported"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one finding. ``error`` is set only for FAILED."""

    finding: Finding
    status: ImportStatus
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.status is ImportStatus.FAILED) != (self.error is not None):
            raise ValueError("error must be set exactly when status is FAILED")


@dataclass
class ImportReport:
    """All results of one import run, in finding order."""

    results: list[ImportResult] = field(default_factory=list)

    def by_status(self, status: ImportStatus) -> list[ImportResult]:
        return [r for r in self.results if r.status is status]

    @property
    def counts(self) -> dict[ImportStatus, int]:
        return {status: len(self.by_status(status)) for status in ImportStatus}

    @property
    def imported_count(self) -> int:
        """Imported plus overwritten."""
        return len(self.by_status(ImportStatus.IMPORTED)) + len(
            self.by_status(ImportStatus.OVERWRITTEN)
        )

    @property
    def has_imports(self) -> bool:
        return self.imported_count > 0

    def __len__(self) -> int:
        return len(self.results)


class _Decision(Enum):
    ACCEPT = "accept"
    SKIP = "skip"
    QUIT = "quit"


_NEW_KEY_CHOICES = {
    "": _Decision.ACCEPT,
    "y": _Decision.ACCEPT,
    "yes": _Decision.ACCEPT,
    "s": _Decision.SKIP,
    "skip": _Decision.SKIP,
    "q": _Decision.QUIT,
    "quit": _Decision.QUIT,
}

_OVERWRITE_CHOICES = {
    "y": _Decision.ACCEPT,
    "yes": _Decision.ACCEPT,
    "": _Decision.SKIP,
    "n": _Decision.SKIP,
    "no": _Decision.SKIP,
}


class ImportReconciler:
    """Drive the import loop over scanner findings.

    Example:
        reconciler = ImportReconciler(store, MetadataStore(path), TerminalPrompter())
        report = reconciler.run(config, findings)
    """

    def __init__(
        self,
        store: CredentialStore,
        metadata: MetadataStore,
        prompter: Prompter,
        resolver: KeyResolver | None = None,
        console: Console | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            store: Keychain the values are written to.
            metadata: Store used to persist the config after each import.
            prompter: Source of operator decisions.
            resolver: Resolver used to find already-registered keys.
            console: Diagnostic output (stderr by default).
            clock: Returns the ``added_at`` timestamp for new entries.
        """
        self.store = store
        self.metadata = metadata
        self.prompter = prompter
        self.resolver = resolver or KeyResolver()
        self.console = console or Console(stderr=True, soft_wrap=True, highlight=False)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def run(self, config: Config, findings: Sequence[Finding]) -> ImportReport:
        """Process each finding in order.

        Args:
            config: Loaded config; mutated and saved as keys are imported.
            findings: Findings in scanner order.

        Returns:
            ImportReport with exactly one result per finding.

        Raises:
            ConfigError: If saving the config fails.
            PromptError: If operator input cannot be read.
        """
        report = ImportReport()
        total = len(findings)

        for index, finding in enumerate(findings):
            result = self.process(config, finding, index, total)
            report.results.append(result)

            if result.status is ImportStatus.CANCELLED:
                report.results.extend(
                    ImportResult(finding=remaining, status=ImportStatus.CANCELLED)
                    for remaining in findings[index + 1 :]
                )
                break

        logger.debug(
            "Import finished: %s",
            {status.value: count for status, count in report.counts.items() if count},
        )
        return report

    def process(self, config: Config, finding: Finding, index: int, total: int) -> ImportResult:
        """Decide and apply the action for one finding."""
        self._say(
            f"\n  [{index + 1}/{total}] {finding.env_var} ({display_masked_value(finding.value)})"
        )
        self._say(f"{_INDENT}{finding.location}")

        existing = self.resolver.find_registered(config, finding.env_var)
        if existing is not None:
            self._say(f"{_INDENT}Already registered in sekret.")
            return self._handle_overwrite(finding, existing)

        return self._handle_new_key(config, finding)

    def _handle_overwrite(self, finding: Finding, existing: KeyEntry) -> ImportResult:
        decision = self._ask(OVERWRITE_PROMPT, _OVERWRITE_CHOICES, "Use y or n.")

        if decision is _Decision.ACCEPT:
            try:
                self.store.set(existing.keychain_key, finding.value)
            except KeychainError as e:
                return self._failed(finding, e)
            self._say(f"{_INDENT}Overwritten {finding.env_var}")
            return ImportResult(finding=finding, status=ImportStatus.OVERWRITTEN)

        self._say(f"{_INDENT}Skipped")
        return ImportResult(finding=finding, status=ImportStatus.SKIPPED)

    def _handle_new_key(self, config: Config, finding: Finding) -> ImportResult:
        decision = self._ask(NEW_KEY_PROMPT, _NEW_KEY_CHOICES, "Use y, s, or q.")

        if decision is _Decision.SKIP:
            self._say(f"{_INDENT}Skipped")
            return ImportResult(finding=finding, status=ImportStatus.SKIPPED)

        if decision is _Decision.QUIT:
            self._say(f"{_INDENT}Cancelled")
            return ImportResult(finding=finding, status=ImportStatus.CANCELLED)

        try:
            config.check_available(finding.env_var)
            self.store.set(finding.env_var, finding.value)
        except (DuplicateKeyError, KeychainError) as e:
            return self._failed(finding, e)

        config.add_key(finding.env_var, added_at=self.clock())
        self.metadata.save(config)

        self._say(f"{_INDENT}Imported {finding.env_var}")
        return ImportResult(finding=finding, status=ImportStatus.IMPORTED)

    def _ask(self, prompt: str, choices: dict[str, _Decision], hint: str) -> _Decision:
        while True:
            answer = self.prompter.read_choice(prompt).strip().lower()
            decision = choices.get(answer)
            if decision is not None:
                return decision
            self._say(f"{_INDENT}Invalid choice. {hint}")

    def _failed(self, finding: Finding, error: Exception) -> ImportResult:
        logger.debug("Import failed for %s: %s", finding.env_var, error)
        self._say(f"{_INDENT}Failed - {error}")
        return ImportResult(finding=finding, status=ImportStatus.FAILED, error=error)

    def _say(self, message: str) -> None:
        self.console.print(escape(message), highlight=False)
