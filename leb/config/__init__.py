"""Configuration models and loader."""

from leb.config.loader import (
    ConfigError,
    filter_libraries_by_lang,
    find_config,
    get_excluded_scenarios,
    get_library_config,
    get_runtime_version,
    load_config,
)
from leb.config.models import (
    BaselineConfig,
    LebConfig,
    LibraryConfig,
    VersionedExclusion,
)

__all__ = [
    "BaselineConfig",
    "ConfigError",
    "LebConfig",
    "LibraryConfig",
    "VersionedExclusion",
    "filter_libraries_by_lang",
    "find_config",
    "get_excluded_scenarios",
    "get_library_config",
    "get_runtime_version",
    "load_config",
]
