"""Snapshot verification: persist baselines and compare output against them."""

from leb.models.constants import VerifyStatus
from leb.models.result_models import VerifyResult
from leb.snapshot.comparator import compare_snapshots
from leb.snapshot.store import SnapshotStore


class VerificationEngine:
    """Update or verify snapshots for adapter output.

    Verification defaults to self-verification: an adapter is checked for
    drift against its own previous output, since different engines are not
    guaranteed to render byte-identical output even when correct. Passing
    ``compare_against`` checks against another adapter's snapshot instead.

    Snapshots are only ever written by :meth:`update_snapshot`.

    Example:
        >>> engine = VerificationEngine(SnapshotStore(tmp_dir))
        >>> engine.update_snapshot("unit/tags/for/small", "shopify", "<ul>...</ul>")
        >>> engine.verify_snapshot("unit/tags/for/small", "shopify", "<ul>...</ul>").status
        <VerifyStatus.PASS: 'pass'>
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    @property
    def store(self) -> SnapshotStore:
        """The underlying snapshot store."""
        return self._store

    def update_snapshot(self, scenario_key: str, adapter: str, content: str) -> None:
        """Persist ``content`` as the snapshot for this key and adapter."""
        self._store.save(scenario_key, adapter, content)

    def verify_snapshot(
        self,
        scenario_key: str,
        adapter: str,
        actual_output: str,
        compare_against: str | None = None,
    ) -> VerifyResult:
        """Compare rendered output with the stored snapshot.

        Args:
            scenario_key: Scenario path plus scale.
            adapter: Adapter that produced ``actual_output``.
            actual_output: Rendered output from the adapter.
            compare_against: Adapter whose snapshot to compare with; defaults
                to ``adapter`` itself.

        Returns:
            VerifyResult with status ``missing`` when no snapshot exists for
            the resolved adapter, otherwise ``pass`` or ``fail`` (with diff).
        """
        target = compare_against or adapter

        expected = self._store.load(scenario_key, target)
        if expected is None:
            return VerifyResult(status=VerifyStatus.MISSING)

        result = compare_snapshots(expected, actual_output)
        if result.match:
            return VerifyResult(
                status=VerifyStatus.PASS, compared_against=compare_against
            )
        return VerifyResult(
            status=VerifyStatus.FAIL,
            diff=result.diff,
            compared_against=compare_against,
        )
