"""Scan and import commands for plaintext keys in shell config files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from sekret.context import AppContext
from sekret.core.config import Config
from sekret.core.errors import SekretError
from sekret.core.importer import ImportReconciler
from sekret.core.scanner import Finding, default_targets, resolve_path
from sekret.keychain import KeychainError
from sekret.output.rich import (
    console,
    err_console,
    pluralize,
    print_error,
    print_import_summary,
    print_scan_findings,
    print_scan_summary,
)


def _resolve_targets(path: Path | None) -> list[Path]:
    """Files to scan: the given file or directory, else the default shell configs."""
    if path is None:
        try:
            return default_targets()
        except RuntimeError as e:
            raise SekretError("could not determine home directory") from e
    return resolve_path(path)


def annotate(app: AppContext, config: Config, finding: Finding) -> str:
    """Describe how a finding relates to what is already stored."""
    entry = app.resolver.find_registered(config, finding.env_var)
    if entry is None:
        return ""

    stored = app.store.get_or_none(entry.keychain_key)
    if stored is None:
        return "already in sekret"
    if stored == finding.value:
        return "already in sekret, safe to remove"
    return "already in sekret, value differs!"


def scan(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Scan a specific file or directory"),
    ] = None,
) -> None:
    """Detect plaintext API keys in shell config files.

    By default scans ~/.zshrc, ~/.zshenv, ~/.zprofile, ~/.bashrc,
    ~/.bash_profile and ~/.profile.

    \b
    Exit codes:
      0 - No plaintext keys found
      1 - Plaintext keys found (or an error occurred)
    """
    app: AppContext = ctx.obj

    try:
        targets = _resolve_targets(path)
        scans = app.scanner.scan_targets(targets)
    except (SekretError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_scan_summary(scans)

    findings = [finding for result in scans for finding in result.findings]
    if not findings:
        console.print("\nNo plaintext keys found.")
        return

    try:
        config = app.metadata.load()
    except SekretError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_scan_findings([(finding, annotate(app, config, finding)) for finding in findings])
    raise typer.Exit(code=1)


def import_keys(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Import from a specific file or directory"),
    ] = None,
) -> None:
    """Import plaintext API keys from shell config files into the keychain.

    Each key found is offered for import one at a time:

    \b
      y / Enter  import the key
      s          skip it
      q          quit (remaining keys are left alone)

    Keys already registered ask before overwriting (default: no).
    """
    app: AppContext = ctx.obj

    try:
        findings = app.scanner.scan_files(_resolve_targets(file))
    except (SekretError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if not findings:
        err_console.print("No exportable keys found.")
        return

    reconciler = ImportReconciler(
        store=app.store,
        metadata=app.metadata,
        prompter=app.prompter,
        resolver=app.resolver,
        console=err_console,
    )

    try:
        config = app.metadata.load()

        count = len(findings)
        err_console.print(f"\nFound {count} exportable {pluralize(count, 'key', 'keys')}:\n")
        err_console.print("Import each key? (y: import / s: skip / q: quit)", markup=False)

        report = reconciler.run(config, findings)
    except (SekretError, KeychainError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_import_summary(report)
