"""Environment readiness checks for adapters.

Runs the runtime directly rather than searching PATH by hand, so both a
missing binary and a broken installation are caught. Checks, in order:

1. Adapter script exists
2. Runtime starts (``php -v`` / ``ruby --version``)
3. Runtime version satisfies the minimum (major.minor)
4. Dependencies are installed (composer vendor/ or bundler lockfile)
"""

import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from leb.adapters.registry import (
    default_adapters_dir,
    get_adapter_config,
    get_adapter_spec,
    list_adapters,
)
from leb.errors import CliError, Errors
from leb.models.constants import RuntimeName
from leb.utils.env import project_root as default_project_root
from leb.utils.logger import Logger

REQUIRED_VERSIONS: dict[RuntimeName, str] = {
    RuntimeName.PHP: "8.3",
    RuntimeName.RUBY: "3.3",
}

VERSION_FLAGS: dict[RuntimeName, str] = {
    RuntimeName.PHP: "-v",
    RuntimeName.RUBY: "--version",
}

INSTALL_COMMANDS: dict[RuntimeName, str] = {
    RuntimeName.PHP: "composer install",
    RuntimeName.RUBY: "bundle install",
}

# Anchored at line start: "PHP 8.3.14 (cli) ..." / "ruby 3.3.6 (2024-11-05 ...)"
_VERSION_PATTERNS: dict[RuntimeName, re.Pattern[str]] = {
    RuntimeName.PHP: re.compile(r"^PHP\s+(\d+)\.(\d+)\.(\d+)"),
    RuntimeName.RUBY: re.compile(r"^ruby\s+(\d+)\.(\d+)\.(\d+)"),
}

PROBE_TIMEOUT_S = 10


@dataclass
class RuntimeInfo:
    """Result of probing a runtime binary."""

    available: bool
    version: str | None = None
    path: str | None = None
    error: str | None = None


@dataclass
class CheckResult:
    """Readiness of one adapter."""

    adapter: str
    ok: bool
    error: CliError | None = None


def extract_version(runtime: RuntimeName | str, output: str) -> str | None:
    """Extract ``major.minor`` from the first line of a runtime's version output."""
    first_line = output.split("\n", 1)[0]
    match = _VERSION_PATTERNS[RuntimeName(runtime)].match(first_line)
    if not match:
        return None
    return f"{match.group(1)}.{match.group(2)}"


def version_satisfies(actual: str, required: str) -> bool:
    """Return True if ``actual`` >= ``required`` (both major.minor)."""
    try:
        actual_major, actual_minor = (int(p) for p in actual.split(".")[:2])
        required_major, required_minor = (int(p) for p in required.split(".")[:2])
    except ValueError:
        return False
    return (actual_major, actual_minor) >= (required_major, required_minor)


def probe_runtime(runtime: RuntimeName | str) -> RuntimeInfo:
    """Execute a runtime's version command and parse the result."""
    name = RuntimeName(runtime)
    try:
        result = subprocess.run(
            [str(name), VERSION_FLAGS[name]],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_S,
        )
    except FileNotFoundError:
        return RuntimeInfo(available=False, error=f"{name} not found in PATH")
    except (subprocess.TimeoutExpired, OSError) as e:
        return RuntimeInfo(available=False, error=str(e))

    if result.returncode != 0:
        return RuntimeInfo(
            available=False,
            error=result.stderr.strip() or f"{name} exited with code {result.returncode}",
        )

    return RuntimeInfo(
        available=True,
        version=extract_version(name, result.stdout),
        path=shutil.which(str(name)),
    )


class EnvChecker:
    """Checks whether adapters can run on this machine.

    Runtime probes are cached per checker, so checking several adapters on
    the same runtime spawns the runtime once.

    Parameters
    ----------
    project_root : Path | None
        Directory holding ``vendor/`` and ``Gemfile.lock``.
    adapters_dir : Path | None
        Directory holding adapter scripts.
    """

    def __init__(
        self,
        project_root: str | Path | None = None,
        adapters_dir: str | Path | None = None,
    ) -> None:
        self._project_root = Path(project_root) if project_root else default_project_root()
        self._adapters_dir = Path(adapters_dir) if adapters_dir else default_adapters_dir()
        self._probes: dict[RuntimeName, RuntimeInfo] = {}

    def _probe(self, runtime: RuntimeName) -> RuntimeInfo:
        if runtime not in self._probes:
            self._probes[runtime] = probe_runtime(runtime)
        return self._probes[runtime]

    def deps_installed(self, runtime: RuntimeName) -> bool:
        """Check whether the runtime's library dependencies are installed."""
        if runtime == RuntimeName.PHP:
            return (self._project_root / "vendor" / "autoload.php").exists()
        return (self._project_root / "Gemfile.lock").exists() or (
            self._project_root / ".bundle"
        ).exists()

    def check_adapter(self, adapter: str) -> CheckResult:
        """Check one adapter; never raises for environment problems."""
        spec = get_adapter_spec(adapter)
        runtime = spec.runtime
        required = REQUIRED_VERSIONS[runtime]
        config = get_adapter_config(adapter, self._adapters_dir)

        if config.script is not None and not config.script.exists():
            return CheckResult(
                adapter,
                ok=False,
                error=Errors.adapter_script_missing(adapter, str(config.script)),
            )

        info = self._probe(runtime)
        if not info.available:
            return CheckResult(
                adapter,
                ok=False,
                error=Errors.runtime_not_found(runtime, info.error or "not available"),
            )

        if not info.version:
            return CheckResult(
                adapter,
                ok=False,
                error=Errors.runtime_version_mismatch(runtime, required, "unknown"),
            )

        if not version_satisfies(info.version, required):
            return CheckResult(
                adapter,
                ok=False,
                error=Errors.runtime_version_mismatch(runtime, required, info.version),
            )

        if not self.deps_installed(runtime):
            return CheckResult(
                adapter,
                ok=False,
                error=Errors.deps_not_installed(runtime, INSTALL_COMMANDS[runtime]),
            )

        Logger.get_or_default("env").debug(
            f"{adapter}: {runtime} {info.version} at {info.path or '?'}"
        )
        return CheckResult(adapter, ok=True)

    def check_adapters(self, adapters: list[str]) -> list[CheckResult]:
        """Check several adapters."""
        return [self.check_adapter(adapter) for adapter in adapters]

    def check_all_adapters(self) -> list[CheckResult]:
        """Check every registered adapter and return only the failures."""
        return [r for r in self.check_adapters(list_adapters()) if not r.ok]

    def ensure_adapter_ready(self, adapter: str) -> None:
        """Raise the readiness error for an adapter, if any.

        Raises:
            CliError: If the adapter's environment is not ready.
        """
        result = self.check_adapter(adapter)
        if not result.ok and result.error is not None:
            raise result.error
