"""Command-line interface for sekret."""

from __future__ import annotations

from typing import Annotated

import typer

from sekret.cli_commands.keys import add, env, list_keys, remove, set_key
from sekret.cli_commands.scan import import_keys, scan
from sekret.context import AppContext, build_context
from sekret.output.rich import console
from sekret.settings import SekretSettings
from sekret.utils.logging import setup_logging

app = typer.Typer(
    name="sekret",
    help=(
        "Secure your API keys in the OS keychain, load them as env vars.\n\n"
        "Add 'eval \"$(sekret env)\"' to your .zshrc to load all registered keys "
        "when opening a new terminal."
    ),
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging on stderr")
    ] = False,
) -> None:
    """Secure your API keys in the OS keychain, load them as env vars."""
    app_ctx: AppContext | None = ctx.obj
    settings = app_ctx.settings if app_ctx and app_ctx.settings else SekretSettings()

    setup_logging("DEBUG" if verbose else settings.log_level)

    if app_ctx is None:
        ctx.obj = build_context(settings)


app.command("add")(add)
app.command("set")(set_key)
app.command("remove")(remove)
app.command("list")(list_keys)
app.command("env")(env)
app.command("scan")(scan)
app.command("import")(import_keys)


@app.command()
def version() -> None:
    """Show sekret version."""
    from sekret import __version__

    console.print(f"sekret [bold green]{__version__}[/bold green]")


if __name__ == "__main__":
    app()
