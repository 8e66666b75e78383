"""Allow running sekret as ``python -m sekret``."""

from sekret.cli import app

app(prog_name="sekret")
