"""File-based storage for rendered-output snapshots."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from leb.utils.env import project_path

SNAPSHOT_SUFFIX = ".snap"


def default_snapshot_dir() -> Path:
    """Return the snapshot directory (``LEB_SNAPSHOT_DIR`` or ``__snapshots__``)."""
    return project_path("LEB_SNAPSHOT_DIR", "__snapshots__")


def make_scenario_key(scenario_path: str, scale: str) -> str:
    """Build the snapshot key for a scenario at a data scale.

    The same scenario renders differently at different scales, so the scale
    is part of the key (e.g. ``unit/tags/for/small``).
    """
    return f"{scenario_path.strip('/')}/{scale}"


class SnapshotStore:
    """Persist one rendered-output string per (scenario key, adapter).

    Each adapter has its own snapshot; cross-adapter comparison is chosen at
    verification time, not by the storage layout.

    Storage layout::

        __snapshots__/
        └── unit/tags/for/
            └── small/
                ├── keepsuit.snap
                └── shopify.snap

    Content is stored exactly as rendered: no trimming and no line-ending
    conversion, so whitespace differences between engines stay visible.

    Parameters
    ----------
    base_dir : Path | None
        Root directory for snapshot files. Defaults to
        :func:`default_snapshot_dir`.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else default_snapshot_dir()

    @property
    def base_dir(self) -> Path:
        """Root directory for snapshot files."""
        return self._base_dir

    def path_for(self, scenario_key: str, adapter: str) -> Path:
        """Return the file path for a snapshot."""
        return self._base_dir / scenario_key / f"{adapter}{SNAPSHOT_SUFFIX}"

    def save(self, scenario_key: str, adapter: str, content: str) -> Path:
        """Write or overwrite a snapshot.

        The content goes to a temporary file in the target directory which
        then replaces the snapshot, so readers never see a half-written file.
        Concurrent writers are not coordinated: the last write wins.

        Parameters
        ----------
        scenario_key : str
            Scenario path plus scale (see :func:`make_scenario_key`).
        adapter : str
            Adapter name.
        content : str
            Rendered output to store.

        Returns
        -------
        Path
            The snapshot file path.
        """
        path = self.path_for(scenario_key, adapter)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{adapter}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path

    def load(self, scenario_key: str, adapter: str) -> str | None:
        """Read a snapshot, or None if it does not exist."""
        path = self.path_for(scenario_key, adapter)
        if not path.is_file():
            return None
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()

    def exists(self, scenario_key: str, adapter: str) -> bool:
        """Check whether a snapshot file exists."""
        return self.path_for(scenario_key, adapter).is_file()
