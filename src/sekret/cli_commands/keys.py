"""Key management commands: add, set, remove, list, env."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from sekret.context import AppContext
from sekret.core.errors import (
    DuplicateKeyError,
    EmptySecretError,
    InvalidEnvVarNameError,
    KeyNotRegisteredError,
    SekretError,
)
from sekret.core.registry import RegistryEntry, validate_value_format
from sekret.core.resolver import is_valid_env_var
from sekret.core.scanner import mask_value
from sekret.keychain import KeychainError
from sekret.output.rich import (
    err_console,
    print_error,
    print_key_table,
    print_success,
    print_warning,
)
from sekret.utils.shell import shell_export

logger = logging.getLogger(__name__)


def _read_new_value(app: AppContext, prompt: str) -> str:
    value = app.prompter.read_secret(prompt).strip()
    if not value:
        raise EmptySecretError()
    return value


def _warn_on_format(entry: RegistryEntry | None, value: str) -> None:
    if entry is not None and not validate_value_format(entry, value):
        print_warning(
            f"key does not match expected format for {entry.shorthand!r} "
            f"(expected prefix: {' or '.join(entry.prefixes)})"
        )


def _resolve_add_target(
    app: AppContext, name: str, env: str | None
) -> tuple[str, RegistryEntry | None]:
    """Work out which env var a new key is registered under."""
    if env:
        if not is_valid_env_var(env):
            raise InvalidEnvVarNameError(env)
        entry = app.registry.lookup_by_shorthand(name) or app.registry.lookup_by_env_var(env)
        return env, entry

    resolved = app.resolver.resolve_env_var(name)
    if not resolved.shorthand:
        return resolved.env_var, resolved.entry

    # Offer the registry default, letting the user pick another name
    answer = app.prompter.read_line(f"  Env var [{resolved.env_var}]").strip()
    if not answer:
        return resolved.env_var, resolved.entry
    if not is_valid_env_var(answer):
        raise InvalidEnvVarNameError(answer)
    return answer, resolved.entry


def add(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Shorthand (openai, anthropic, ...) or environment variable name"),
    ],
    env: Annotated[
        str | None,
        typer.Option("--env", "-e", help="Environment variable name to register the key under"),
    ] = None,
) -> None:
    """Register a new API key in the OS keychain.

    \b
    Examples:
      sekret add openai                 # OPENAI_API_KEY
      sekret add MY_SERVICE_TOKEN       # custom env var
      sekret add openai --env WORK_OPENAI_KEY
    """
    app: AppContext = ctx.obj

    try:
        env_var, entry = _resolve_add_target(app, name, env)

        config = app.metadata.load()
        if config.find_key_by_env_var(env_var) is not None:
            raise DuplicateKeyError(
                f"{env_var} is already registered (use 'sekret set {env_var}' to update)"
            )
        config.check_available(env_var)

        value = _read_new_value(app, "  API Key")
        _warn_on_format(entry, value)

        app.store.set(env_var, value)
        config.add_key(env_var)
        app.metadata.save(config)
    except (SekretError, KeychainError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    logger.debug("Registered %s", env_var)
    print_success(f"Saved to OS keychain ({env_var})")


def set_key(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Env var, shorthand or legacy key name")],
) -> None:
    """Update the value of a registered key."""
    app: AppContext = ctx.obj

    try:
        config = app.metadata.load()
        entry = app.resolver.resolve_key(config, name)

        current = app.store.get_or_none(entry.keychain_key)
        if current is not None:
            err_console.print(f"  Current: {mask_value(current)}", markup=False, highlight=False)

        value = _read_new_value(app, "  New API Key")
        _warn_on_format(app.resolver.registry_entry_for(entry), value)

        app.store.set(entry.keychain_key, value)
    except KeyNotRegisteredError:
        print_error(f"key {name!r} is not registered (use 'sekret add {name}' first)")
        raise typer.Exit(code=1) from None
    except (SekretError, KeychainError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success("Updated")


def remove(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Env var, shorthand or legacy key name")],
) -> None:
    """Remove a registered key from the keychain and the config."""
    app: AppContext = ctx.obj

    try:
        config = app.metadata.load()
        entry = app.resolver.resolve_key(config, name)

        label = entry.env_var
        if entry.is_legacy:
            label = f"{entry.env_var} (stored as {entry.legacy_name!r})"
        if not app.prompter.read_confirm(f"  Remove {label}?"):
            err_console.print("  Cancelled")
            return

        app.store.delete(entry.keychain_key)
        config.remove_key(entry.env_var)
        app.metadata.save(config)
    except (SekretError, KeychainError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success("Removed")


def list_keys(ctx: typer.Context) -> None:
    """List all registered keys."""
    app: AppContext = ctx.obj

    try:
        config = app.metadata.load()
    except SekretError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if not config.keys:
        err_console.print("No keys registered. Use 'sekret add <name>' to get started.")
        return

    rows = [(entry, app.store.get_or_none(entry.keychain_key)) for entry in config.keys]
    print_key_table(rows)


def env(ctx: typer.Context) -> None:
    """Print all keys as shell export statements.

    \b
    Add this to your .zshrc or .bashrc:
      eval "$(sekret env)"
    """
    app: AppContext = ctx.obj

    try:
        config = app.metadata.load()
    except SekretError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    for entry in config.keys:
        try:
            value = app.store.get(entry.keychain_key)
        except KeychainError as e:
            err_console.print(
                f"sekret: warning: could not read key {entry.env_var!r}: {e}",
                highlight=False,
                markup=False,
            )
            continue
        typer.echo(shell_export(entry.env_var, value))
