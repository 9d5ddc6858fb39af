"""Benchmark data loader.

Template data comes from pre-generated fixture files, one per scale::

    data/fixtures/small.json
    data/fixtures/medium.yaml

Fixtures hold the full record set (``products``, ``collections``,
``cart_items``, ``user``, ``posts``). Lists are cut down to the scale's
limits on load, so a single large fixture can serve smaller scales too.
"""

import json
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped, unused-ignore]

from leb.models.constants import Scale
from leb.utils.env import project_path
from leb.utils.logger import Logger

# Record counts per scale
SCALE_LIMITS: dict[Scale, dict[str, int]] = {
    Scale.SMALL: {"products": 10, "collections": 3, "cart_items": 3, "posts": 3},
    Scale.MEDIUM: {"products": 50, "collections": 10, "cart_items": 10, "posts": 10},
    Scale.LARGE: {"products": 200, "collections": 30, "cart_items": 25, "posts": 30},
    Scale.XXL: {"products": 500, "collections": 50, "cart_items": 50, "posts": 50},
}

FIXTURE_SUFFIXES = (".json", ".yaml", ".yml")


class DataLoadError(Exception):
    """Raised when a fixture file exists but cannot be read."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


def default_data_dir() -> Path:
    """Return the fixture directory (``LEB_DATA_DIR`` or data/fixtures)."""
    return project_path("LEB_DATA_DIR", "data/fixtures")


def apply_scale_limits(data: dict[str, Any], scale: Scale | str) -> dict[str, Any]:
    """Truncate list-valued records to the scale's limits.

    Keys without a limit are passed through unchanged. Products nested in a
    collection are capped at the scale's product limit.
    """
    limits = SCALE_LIMITS[Scale(scale)]
    limited = dict(data)
    for key, limit in limits.items():
        value = limited.get(key)
        if isinstance(value, list):
            limited[key] = value[:limit]

    collections = limited.get("collections")
    if isinstance(collections, list):
        limited["collections"] = [
            {**c, "products": c["products"][: limits["products"]]}
            if isinstance(c, dict) and isinstance(c.get("products"), list)
            else c
            for c in collections
        ]
    return limited


class DataLoader:
    """Loads per-scale template data from fixture files.

    Loaded scales are cached, so all benchmarks in a run share one parse.

    Args:
        data_dir: Fixture directory; defaults to :func:`default_data_dir`.
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir else default_data_dir()
        self._cache: dict[Scale, dict[str, Any]] = {}

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def fixture_path(self, scale: Scale | str) -> Path | None:
        """Return the first existing fixture file for a scale, if any."""
        for suffix in FIXTURE_SUFFIXES:
            candidate = self._data_dir / f"{Scale(scale)}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def load(self, scale: Scale | str) -> dict[str, Any]:
        """Load template data for a scale.

        Returns:
            Data dict, or an empty dict (with a warning) when no fixture exists.

        Raises:
            DataLoadError: If the fixture cannot be parsed or is not an object.
        """
        scale = Scale(scale)
        if scale in self._cache:
            return self._cache[scale]

        path = self.fixture_path(scale)
        if path is None:
            Logger.get_or_default("data").warning(
                f"No fixture data for scale '{scale}' in {self._data_dir}; using {{}}"
            )
            self._cache[scale] = {}
            return self._cache[scale]

        try:
            content = path.read_text(encoding="utf-8")
            if path.suffix == ".json":
                raw = json.loads(content)
            else:
                raw = yaml.safe_load(content)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise DataLoadError(f"Failed to load {path}: {e}", path) from e

        if not isinstance(raw, dict):
            raise DataLoadError(f"{path} must contain an object", path)

        self._cache[scale] = apply_scale_limits(raw, scale)
        return self._cache[scale]
