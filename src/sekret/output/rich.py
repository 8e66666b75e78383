"""Rich console output for sekret commands.

Results go to stdout (``console``); progress, prompts, warnings and errors go
to stderr (``err_console``).
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sekret.core.config import KeyEntry
from sekret.core.importer import ImportReport, ImportResult, ImportStatus
from sekret.core.scanner import FileScan, Finding, mask_value, shorten_home

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"  [green]{escape(message)}[/green]")


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def format_added(added_at: datetime, now: datetime | None = None) -> str:
    """Human-friendly relative time (e.g., ``3 days ago``)."""
    now = now or datetime.now(timezone.utc)
    if added_at.tzinfo is None:
        added_at = added_at.replace(tzinfo=timezone.utc)

    seconds = int((now - added_at).total_seconds())
    if seconds < 60:
        return "just now"

    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            if unit == "day" and count >= 30:
                return added_at.strftime("%Y-%m-%d")
            return f"{count} {pluralize(count, unit, unit + 's')} ago"
    return "just now"


def print_key_table(rows: Sequence[tuple[KeyEntry, str | None]]) -> None:
    """Print registered keys with their masked preview.

    Args:
        rows: ``(entry, value)`` pairs; ``value`` is None if unreadable
    """
    table = Table(box=None, pad_edge=False, show_edge=False)
    table.add_column("Env Variable", style="bold")
    table.add_column("Key Preview")
    table.add_column("Added", style="dim")

    for entry, value in rows:
        preview = mask_value(value) if value is not None else "(unavailable)"
        table.add_row(entry.env_var, preview, format_added(entry.added_at))

    console.print(table)


def print_scan_summary(scans: Sequence[FileScan]) -> None:
    """Print which files were scanned and how many keys each had."""
    scanned = [scan for scan in scans if not scan.skipped]
    console.print(f"Scanned {len(scanned)} {pluralize(len(scanned), 'file', 'files')}:")

    for scan in scanned:
        display_path = escape(f"{shorten_home(scan.path):<28}")
        count = len(scan.findings)
        if count == 0:
            console.print(f"  {display_path} [green]clean[/green]")
        else:
            console.print(
                f"  {display_path} [red]{count} {pluralize(count, 'key', 'keys')} found[/red]"
            )


def print_scan_findings(findings: Sequence[tuple[Finding, str]]) -> None:
    """Print each finding with its masked value and annotation.

    Args:
        findings: ``(finding, annotation)`` pairs; empty annotation for none
    """
    count = len(findings)
    console.print(
        f"\nFound {count} potential plaintext {pluralize(count, 'key', 'keys')}:\n"
    )
    for finding, annotation in findings:
        location = f"{shorten_home(finding.file_path)}:{finding.line:<8}"
        line = f'  {location} export {finding.env_var}="{mask_value(finding.value)}"'
        if annotation:
            line += f"  ({annotation})"
        console.print(escape(line))


_DETAIL_SECTIONS = (
    (ImportStatus.IMPORTED, "Imported"),
    (ImportStatus.OVERWRITTEN, "Overwritten"),
    (ImportStatus.SKIPPED, "Skipped"),
    (ImportStatus.CANCELLED, "Cancelled"),
    (ImportStatus.FAILED, "Failed"),
)


def format_import_headline(report: ImportReport) -> str:
    """Return ``Done. 2 imported, 1 skipped.`` style headline."""
    parts = []
    if report.imported_count:
        parts.append(f"{report.imported_count} imported")
    for status in (ImportStatus.SKIPPED, ImportStatus.CANCELLED, ImportStatus.FAILED):
        count = len(report.by_status(status))
        if count:
            parts.append(f"{count} {status.value}")
    return f"Done. {', '.join(parts)}."


def _format_result(result: ImportResult) -> str:
    line = f"    {result.finding.location:<12} {result.finding.env_var}"
    if result.error is not None:
        line += f" - {result.error}"
    return line


def print_import_summary(report: ImportReport) -> None:
    """Print the final import summary grouped by status."""
    console.print(f"\n{format_import_headline(report)}")

    for status, title in _DETAIL_SECTIONS:
        results = report.by_status(status)
        if not results:
            continue
        console.print(f"\n  {title}:")
        for result in results:
            console.print(escape(_format_result(result)))

    if report.has_imports:
        console.print(
            "\nRemove the imported keys from your shell config (lines listed above)."
        )
