"""Environment variable helpers with type coercion.

All leb settings that can be overridden from the environment are read through
these helpers:

    LEB_LOG_LEVEL      log level for the CLI (default INFO)
    LEB_CONFIG         path to leb.config.json / leb.config.yaml
    LEB_PROJECT_ROOT   root holding scenarios/, data/, src/adapters/
    LEB_SNAPSHOT_DIR   snapshot base directory
    LEB_SCENARIOS_DIR  scenario template directory
    LEB_DATA_DIR       fixture data directory
    LEB_ADAPTERS_DIR   adapter script directory
    LEB_TIMEOUT_MS     adapter timeout in milliseconds

Usage:
    from leb.utils.env import get_env, require_env

    timeout = get_env("LEB_TIMEOUT_MS", default=300_000, as_type=int)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarNotSetError(EnvVarError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Required environment variable not set: {name}")


class EnvVarTypeError(EnvVarError):
    """Raised when an environment variable cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a string value to the specified type.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        # "false", "0", "" and friends are False
        if as_type is bool:
            return value.lower() not in ("false", "0", "", "no", "off")
        if as_type is int:
            return int(value)
        if as_type is float:
            return float(value)
        if as_type is str:
            return value
        if as_type is Path:
            return Path(value).expanduser()

        origin = getattr(as_type, "__origin__", None)
        if as_type is list or origin is list:
            return [item.strip() for item in value.split(",") if item.strip()]

        return as_type(value)

    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


@overload
def get_env(name: str, *, default: T, as_type: type[T]) -> T:
    ...


@overload
def get_env(name: str, *, default: T) -> T:
    ...


@overload
def get_env(name: str, *, as_type: type[T]) -> T | None:
    ...


@overload
def get_env(name: str) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Get an environment variable with optional type coercion.

    Empty values are treated as unset.

    Args:
        name: Environment variable name.
        default: Value returned when the variable is not set.
        as_type: Type to convert the value to (bool, int, float, str, Path, list).

    Raises:
        EnvVarTypeError: If as_type is specified and conversion fails.

    Examples:
        >>> get_env("LEB_TIMEOUT_MS", default=300000, as_type=int)
        300000
    """
    value = os.environ.get(name)

    if value is None or value == "":
        return default

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value


def require_env(name: str, *, as_type: type[T] | None = None) -> T | str:
    """Get a required environment variable (raises if not set).

    Raises:
        EnvVarNotSetError: If the variable is not set.
        EnvVarTypeError: If as_type is specified and conversion fails.
    """
    value = os.environ.get(name)

    if value is None:
        raise EnvVarNotSetError(name)

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value


def project_root() -> Path:
    """Return the project root (LEB_PROJECT_ROOT or the working directory)."""
    return get_env("LEB_PROJECT_ROOT", default=Path.cwd(), as_type=Path)


def project_path(env_name: str, relative: str) -> Path:
    """Resolve a project directory, honouring its environment override.

    Args:
        env_name: Environment variable that overrides the location.
        relative: Default location relative to the project root.
    """
    override = get_env(env_name, as_type=Path)
    if override is not None:
        return override
    return project_root() / relative
