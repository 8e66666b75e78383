"""Exceptions raised by sekret core operations."""

from __future__ import annotations


class SekretError(Exception):
    """Base exception for sekret operations."""

    pass


class InvalidEnvVarNameError(SekretError):
    """Argument is not a legal environment variable name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"invalid environment variable name {name!r}: "
            "must start with a letter or underscore and contain only letters, digits and underscores"
        )


class EmptySecretError(SekretError):
    """An empty value was entered for a key."""

    def __init__(self) -> None:
        super().__init__("key cannot be empty")


class DuplicateKeyError(SekretError):
    """An env var or legacy name is already registered."""

    pass


class KeyNotRegisteredError(SekretError):
    """No registered entry matches the given argument."""

    def __init__(self, name: str, hint: str | None = None) -> None:
        self.name = name
        message = f"key {name!r} is not registered"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class ConfigError(SekretError):
    """The metadata file could not be read, parsed or written."""

    pass


class PromptError(SekretError):
    """Reading operator input failed (EOF or abort)."""

    pass
