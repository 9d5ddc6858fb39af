"""Scenario loader.

Scenarios are Liquid templates stored under a hierarchical category tree::

    scenarios/
        unit/tags/for.liquid
        unit/filters/map.liquid
        composite/for-with-if.liquid
        partials/product-card.liquid

A scenario path is ``<category>/<name>`` where the category may itself
contain slashes (``unit/tags/for`` is category ``unit/tags``, name ``for``).
"""

from dataclasses import dataclass
from pathlib import Path

from leb.utils.env import project_path

SCENARIO_SUFFIX = ".liquid"


class ScenarioNotFoundError(FileNotFoundError):
    """Raised when a scenario or category does not exist."""

    def __init__(self, path: str, kind: str = "Scenario") -> None:
        self.path = path
        super().__init__(f"{kind} not found: {path}")

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class ScenarioInfo:
    """A scenario's location in the category tree."""

    category: str
    name: str
    path: str


def default_scenarios_dir() -> Path:
    """Return the scenario directory (``LEB_SCENARIOS_DIR`` or ./scenarios)."""
    return project_path("LEB_SCENARIOS_DIR", "scenarios")


def split_path(scenario_path: str) -> tuple[str, str]:
    """Split a scenario path into (category, name).

    Raises:
        ValueError: If the path has fewer than two segments.
    """
    parts = [part for part in scenario_path.strip("/").split("/") if part]
    if len(parts) < 2:
        raise ValueError(
            f"Invalid scenario path: {scenario_path}. Expected format: category/name"
        )
    return "/".join(parts[:-1]), parts[-1]


class ScenarioLoader:
    """Loads and lists Liquid scenario templates.

    Args:
        base_dir: Root of the category tree; defaults to
            :func:`default_scenarios_dir`.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else default_scenarios_dir()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _file(self, category: str, name: str) -> Path:
        return self._base_dir / category / f"{name}{SCENARIO_SUFFIX}"

    def load(self, category: str, name: str) -> str:
        """Load a scenario's template source.

        Raises:
            ScenarioNotFoundError: If the template file does not exist.
        """
        path = self._file(category, name)
        if not path.is_file():
            raise ScenarioNotFoundError(f"{category}/{name}")
        return path.read_text(encoding="utf-8")

    def load_by_path(self, scenario_path: str) -> str:
        """Load a scenario by path (e.g., ``unit/tags/for``).

        Raises:
            ValueError: If the path is malformed.
            ScenarioNotFoundError: If the template file does not exist.
        """
        category, name = split_path(scenario_path)
        return self.load(category, name)

    def load_many(self, scenario_paths: list[str]) -> dict[str, str]:
        """Load several scenarios, keyed by path."""
        return {path: self.load_by_path(path) for path in scenario_paths}

    def exists(self, category: str, name: str) -> bool:
        return self._file(category, name).is_file()

    def exists_by_path(self, scenario_path: str) -> bool:
        """Check a scenario path; malformed paths simply do not exist."""
        try:
            category, name = split_path(scenario_path)
        except ValueError:
            return False
        return self.exists(category, name)

    def list_categories(self) -> list[str]:
        """List every directory that directly contains scenario files.

        Returns:
            Sorted relative category paths, e.g. ``["composite", "unit/tags"]``.
        """
        if not self._base_dir.is_dir():
            return []
        categories = {
            path.parent.relative_to(self._base_dir).as_posix()
            for path in self._base_dir.rglob(f"*{SCENARIO_SUFFIX}")
            if path.is_file() and path.parent != self._base_dir
        }
        return sorted(categories)

    def list_category(self, category: str) -> list[str]:
        """List scenario names (without extension) in one category.

        Raises:
            ScenarioNotFoundError: If the category directory does not exist.
        """
        category_dir = self._base_dir / category
        if not category_dir.is_dir():
            raise ScenarioNotFoundError(category, kind="Category")
        return sorted(
            path.stem
            for path in category_dir.glob(f"*{SCENARIO_SUFFIX}")
            if path.is_file()
        )

    def list_all(self) -> list[ScenarioInfo]:
        """List every scenario with its category and path."""
        return [
            ScenarioInfo(category=category, name=name, path=f"{category}/{name}")
            for category in self.list_categories()
            for name in self.list_category(category)
        ]
