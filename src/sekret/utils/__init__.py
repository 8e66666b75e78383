"""Utility modules for sekret."""

from sekret.utils.logging import setup_logging
from sekret.utils.shell import shell_escape, shell_export

__all__ = [
    "setup_logging",
    "shell_escape",
    "shell_export",
]
