"""Closed registry of benchmark adapters.

Each adapter is an external script speaking the stdin/stdout JSON protocol.
Adding an adapter means adding an entry to ``ADAPTER_SPECS`` (and to
``AdapterName``); nothing is discovered dynamically.

Usage:
    from leb.adapters.registry import get_adapter_config

    config = get_adapter_config("shopify")
    config.command  # ['ruby', '/path/to/src/adapters/ruby/shopify.rb']
"""

from dataclasses import dataclass, field
from pathlib import Path

from leb.models.constants import AdapterName, RuntimeName
from leb.utils.env import project_path


@dataclass(frozen=True)
class AdapterSpec:
    """Static description of an adapter, independent of install location."""

    name: AdapterName
    runtime: RuntimeName
    script: str  # relative to the adapters directory
    interpreter: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AdapterConfig:
    """How to execute one adapter subprocess."""

    name: str
    lang: RuntimeName
    command: list[str]
    env: dict[str, str] = field(default_factory=dict)
    script: Path | None = None


_PHP = (
    "php",
    "-d",
    "opcache.enable_cli=1",
    "-d",
    "display_errors=stderr",
)

ADAPTER_SPECS: dict[AdapterName, AdapterSpec] = {
    AdapterName.KEEPSUIT: AdapterSpec(
        name=AdapterName.KEEPSUIT,
        runtime=RuntimeName.PHP,
        script="php/keepsuit.php",
        interpreter=_PHP,
    ),
    AdapterName.KALIMATAS: AdapterSpec(
        name=AdapterName.KALIMATAS,
        runtime=RuntimeName.PHP,
        script="php/kalimatas.php",
        interpreter=_PHP,
    ),
    AdapterName.SHOPIFY: AdapterSpec(
        name=AdapterName.SHOPIFY,
        runtime=RuntimeName.RUBY,
        script="ruby/shopify.rb",
        interpreter=("ruby",),
        env={"RUBY_YJIT_ENABLE": "1"},
    ),
}


class AdapterNotFoundError(KeyError):
    """Raised when an adapter name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown adapter: '{name}'")

    def __str__(self) -> str:
        return str(self.args[0])


def default_adapters_dir() -> Path:
    """Return the adapter script directory (``LEB_ADAPTERS_DIR`` or src/adapters)."""
    return project_path("LEB_ADAPTERS_DIR", "src/adapters")


def list_adapters() -> list[str]:
    """List all adapter names in registry order."""
    return [str(name) for name in ADAPTER_SPECS]


def adapter_exists(name: str) -> bool:
    """Check if an adapter name is registered."""
    return name in ADAPTER_SPECS


def get_adapter_spec(name: str) -> AdapterSpec:
    """Get the static spec for an adapter.

    Raises:
        AdapterNotFoundError: If the adapter is not registered.
    """
    if not adapter_exists(name):
        raise AdapterNotFoundError(name)
    return ADAPTER_SPECS[AdapterName(name)]


def get_adapter_config(
    name: str, adapters_dir: str | Path | None = None
) -> AdapterConfig:
    """Build the execution config for an adapter.

    Args:
        name: Adapter name (e.g., "keepsuit").
        adapters_dir: Directory holding adapter scripts; defaults to
            :func:`default_adapters_dir`.

    Raises:
        AdapterNotFoundError: If the adapter is not registered.
    """
    spec = get_adapter_spec(name)
    base = Path(adapters_dir) if adapters_dir else default_adapters_dir()
    script = base / spec.script
    return AdapterConfig(
        name=str(spec.name),
        lang=spec.runtime,
        command=[*spec.interpreter, str(script)],
        env=dict(spec.env),
        script=script,
    )
