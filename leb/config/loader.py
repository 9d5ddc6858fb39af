"""Configuration loading for leb.

Reads ``leb.config.json`` (or a YAML equivalent) and answers the questions
the orchestrator asks of it: which library is the baseline, and which
scenarios each adapter skips.

Usage:
    from leb.config import load_config, get_excluded_scenarios

    config = load_config()
    excluded = get_excluded_scenarios(config, "kalimatas")
"""

import json
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped, unused-ignore]
from pydantic import ValidationError

from leb.config.models import LebConfig, LibraryConfig
from leb.models.constants import RuntimeName
from leb.utils.env import get_env, project_root

CONFIG_FILENAMES = ("leb.config.json", "leb.config.yaml", "leb.config.yml")


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


def find_config(search_dir: Path | None = None) -> Path:
    """Locate the configuration file.

    ``LEB_CONFIG`` wins; otherwise the first of CONFIG_FILENAMES found in
    ``search_dir`` (default: the project root).

    Raises:
        ConfigError: If no configuration file exists.
    """
    override = get_env("LEB_CONFIG", as_type=Path)
    if override is not None:
        if not override.exists():
            raise ConfigError(f"Configuration file not found: {override}", override)
        return override

    base = search_dir or project_root()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    raise ConfigError(
        f"Configuration file not found: {base / CONFIG_FILENAMES[0]}",
        base / CONFIG_FILENAMES[0],
    )


def _parse(path: Path) -> Any:
    content = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_load(content)
    return json.loads(content)


def load_config(path: str | Path | None = None) -> LebConfig:
    """Load and validate the configuration.

    Args:
        path: Explicit config file; located with :func:`find_config` if None.

    Raises:
        ConfigError: If the file is missing, unparsable or invalid.
    """
    config_path = Path(path) if path else find_config()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}", config_path)

    try:
        data = _parse(config_path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}", config_path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain an object", config_path)

    try:
        return LebConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}", config_path) from e


def get_library_config(config: LebConfig, adapter_name: str) -> LibraryConfig | None:
    """Get the library entry for an adapter name."""
    for library in config.libraries:
        if library.name == adapter_name:
            return library
    return None


def get_excluded_scenarios(
    config: LebConfig, adapter_name: str, version: str | None = None
) -> set[str]:
    """Get scenario paths excluded for an adapter.

    Args:
        config: Loaded configuration.
        adapter_name: Adapter name.
        version: Library version; when None, version-specific exclusions
            apply as well.

    Returns:
        Set of excluded scenario paths.
    """
    library = get_library_config(config, adapter_name)
    if library is None:
        return set()

    excluded: set[str] = set()
    for exclusion in library.exclude_scenarios:
        if isinstance(exclusion, str):
            excluded.add(exclusion)
        elif version is None or exclusion.version == version:
            excluded.add(exclusion.scenario)
    return excluded


def filter_libraries_by_lang(
    libraries: list[LibraryConfig], lang: RuntimeName | str
) -> list[LibraryConfig]:
    """Filter libraries by programming language."""
    return [library for library in libraries if library.lang == lang]


def get_runtime_version(config: LebConfig, lang: RuntimeName | str) -> str | None:
    """Get the configured runtime version for a language."""
    return config.runtimes.get(str(lang))
