"""Shell quoting helpers."""

from __future__ import annotations

# Characters with special meaning inside a double-quoted shell string
_DOUBLE_QUOTE_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        '"': '\\"',
        "$": "\\$",
        "`": "\\`",
    }
)


def shell_escape(value: str) -> str:
    """Escape a value for use inside a double-quoted shell string."""
    return value.translate(_DOUBLE_QUOTE_ESCAPES)


def shell_export(env_var: str, value: str) -> str:
    """Return an ``export NAME="value"`` statement."""
    return f'export {env_var}="{shell_escape(value)}"'
