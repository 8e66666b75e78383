"""Plaintext secret scanner for shell startup files.

Finds ``export NAME=VALUE`` statements whose name looks like it holds a
secret, so they can be reported or imported into the keychain.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from sekret.core.registry import DEFAULT_REGISTRY, Registry

logger = logging.getLogger(__name__)

# Env var name suffixes that indicate a secret value
SECRET_SUFFIXES = ("_KEY", "_TOKEN", "_SECRET", "_CREDENTIALS")

# Known API key prefixes kept visible when masking, longest first
KNOWN_PREFIXES = tuple(
    sorted(
        ("sk-proj-", "sk-ant-", "github_pat_", "sk-", "ghp_", "gsk_", "AIza"),
        key=len,
        reverse=True,
    )
)

DEFAULT_TARGET_FILES = (
    ".zshrc",
    ".zshenv",
    ".zprofile",
    ".bashrc",
    ".bash_profile",
    ".profile",
)


@dataclass(frozen=True)
class Finding:
    """A plaintext secret assignment detected in a file."""

    file_path: Path
    line: int
    env_var: str
    value: str

    @property
    def location(self) -> str:
        """Return ``path:line`` with the home directory shortened."""
        return f"{shorten_home(self.file_path)}:{self.line}"


@dataclass
class FileScan:
    """Scan result for a single file."""

    path: Path
    findings: list[Finding] = field(default_factory=list)
    skipped: bool = False  # file does not exist


class ExportScanner:
    """Scan files for ``export NAME=VALUE`` lines that carry secrets.

    Handles:
    - Leading whitespace before ``export``
    - Quoted values: NAME="value" or NAME='value' (one layer, no escapes)
    - Comment lines (skipped, including commented-out exports)
    """

    EXPORT_PATTERN = re.compile(r"^\s*export\s+([A-Za-z_][A-Za-z0-9_]*)=(.+)$")

    def __init__(self, registry: Registry | None = None) -> None:
        self.registry = registry or DEFAULT_REGISTRY

    def is_secret_env_var(self, env_var: str) -> bool:
        """Check whether an env var name looks like it holds a secret."""
        if self.registry.lookup_by_env_var(env_var) is not None:
            return True
        return env_var.upper().endswith(SECRET_SUFFIXES)

    def scan_file(self, path: Path | str) -> list[Finding]:
        """Scan a single file.

        Args:
            path: File to scan

        Returns:
            Findings in line order

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
        # Only \n ends a line, so numbers match what an editor shows
        lines = [line.removesuffix("\r") for line in content.split("\n")]
        return list(self._scan_lines(path, lines))

    def iter_findings(self, paths: Iterable[Path | str]) -> Iterator[Finding]:
        """Yield findings from each path in order, skipping missing files.

        The iterator is lazy; call again to rescan.

        Raises:
            OSError: For read errors other than a missing file
        """
        for path in paths:
            try:
                findings = self.scan_file(path)
            except FileNotFoundError:
                logger.debug("Skipping missing file %s", path)
                continue
            yield from findings

    def scan_files(self, paths: Iterable[Path | str]) -> list[Finding]:
        """Scan multiple files and return all findings."""
        return list(self.iter_findings(paths))

    def scan_targets(self, paths: Iterable[Path | str]) -> list[FileScan]:
        """Scan each path and keep per-file results for reporting."""
        results: list[FileScan] = []
        for path in paths:
            path = Path(path)
            try:
                findings = self.scan_file(path)
            except FileNotFoundError:
                results.append(FileScan(path=path, skipped=True))
                continue
            results.append(FileScan(path=path, findings=findings))
        return results

    def _scan_lines(self, path: Path, lines: Iterable[str]) -> Iterator[Finding]:
        for line_num, line in enumerate(lines, start=1):
            if line.strip().startswith("#"):
                continue

            match = self.EXPORT_PATTERN.match(line)
            if not match:
                continue

            env_var = match.group(1)
            if not self.is_secret_env_var(env_var):
                continue

            yield Finding(
                file_path=path,
                line=line_num,
                env_var=env_var,
                value=_unquote(match.group(2)),
            )


def _unquote(value: str) -> str:
    """Trim and remove one layer of surrounding quotes."""
    value = value.strip()
    if len(value) >= 2:
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            return value[1:-1]
    return value


def is_secret_env_var(env_var: str) -> bool:
    """Check a name against the default registry and secret suffixes."""
    return ExportScanner().is_secret_env_var(env_var)


def mask_value(value: str) -> str:
    """Mask a secret for display.

    Shows a recognized key prefix (or the first 4 characters for values
    longer than 8, else the first 2), then ``...`` and the last 4 characters.
    Values of 4 characters or fewer are fully hidden.
    """
    if len(value) <= 4:
        return "****"

    prefix = next((p for p in KNOWN_PREFIXES if value.startswith(p)), "")
    if not prefix:
        prefix = value[:4] if len(value) > 8 else value[:2]

    return f"{prefix}...{value[-4:]}"


def display_masked_value(value: str) -> str:
    """Masked value, or ``empty value`` when there is nothing to mask."""
    if not value:
        return "empty value"
    return mask_value(value)


def default_targets(home: Path | None = None) -> list[Path]:
    """Return the shell config files scanned when no path is given."""
    home = home or Path.home()
    return [home / name for name in DEFAULT_TARGET_FILES]


def resolve_path(path: Path | str) -> list[Path]:
    """Resolve a ``--path``/``--file`` argument to files to scan.

    A file resolves to itself. A directory resolves to the regular files
    directly inside it (non-recursive), sorted by name.

    Raises:
        FileNotFoundError: If the path doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"no such file or directory: {path}")

    if not path.is_dir():
        return [path]

    return sorted(child for child in path.iterdir() if child.is_file())


def shorten_home(path: Path | str) -> str:
    """Replace the home directory prefix with ``~``."""
    text = str(path)
    try:
        home = str(Path.home())
    except RuntimeError:
        return text
    if text == home or text.startswith(home + "/"):
        return "~" + text[len(home):]
    return text
