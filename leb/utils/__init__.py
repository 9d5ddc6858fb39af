"""leb utilities - logging and environment helpers."""

from leb.utils.env import (
    EnvVarError,
    EnvVarNotSetError,
    EnvVarTypeError,
    get_env,
    project_path,
    project_root,
    require_env,
)
from leb.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarNotSetError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "get_env",
    "project_path",
    "project_root",
    "require_env",
]
