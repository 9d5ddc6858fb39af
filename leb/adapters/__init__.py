"""Adapter registry and subprocess runner."""

from leb.adapters.registry import (
    ADAPTER_SPECS,
    AdapterConfig,
    AdapterNotFoundError,
    AdapterSpec,
    adapter_exists,
    default_adapters_dir,
    get_adapter_config,
    get_adapter_spec,
    list_adapters,
)
from leb.adapters.runner import AdapterResult, AdapterRunner

__all__ = [
    "ADAPTER_SPECS",
    "AdapterConfig",
    "AdapterNotFoundError",
    "AdapterResult",
    "AdapterRunner",
    "AdapterSpec",
    "adapter_exists",
    "default_adapters_dir",
    "get_adapter_config",
    "get_adapter_spec",
    "list_adapters",
]
