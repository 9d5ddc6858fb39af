"""Pydantic models for benchmark metrics, verification and run results."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from leb.models.constants import VerifyStatus


class PhaseMetrics(BaseModel):
    """Descriptive statistics for one timing phase, in milliseconds."""

    mean_ms: float = Field(..., description="Arithmetic mean")
    stddev_ms: float = Field(..., ge=0, description="Population standard deviation")
    min_ms: float = Field(..., description="Minimum value")
    max_ms: float = Field(..., description="Maximum value")
    median_ms: float = Field(..., description="Median value")


class TimingMetrics(BaseModel):
    """Metrics for parse, render and their per-iteration sum."""

    parse: PhaseMetrics
    render: PhaseMetrics
    total: PhaseMetrics


class VerifyResult(BaseModel):
    """Outcome of verifying rendered output against a snapshot.

    ``compared_against`` is only set when an explicit cross-adapter baseline
    was requested; self-verification leaves it empty.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: VerifyStatus
    diff: str | None = None
    compared_against: str | None = Field(None, alias="comparedAgainst")

    def to_dict(self) -> dict[str, Any]:
        """Serialize using wire names, omitting empty fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BenchResult(BaseModel):
    """Result of one (adapter, scenario) benchmark execution."""

    success: bool
    adapter: str
    scenario: str
    metrics: TimingMetrics | None = None
    library: str | None = None
    version: str | None = None
    lang: str | None = None
    runtime_version: str | None = None
    error: str | None = None
    error_code: str | None = None
    execution_time_ms: float | None = None
    rendered_output: str | None = Field(None, exclude=True)
    verification: VerifyResult | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output, omitting empty fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RunSummary(BaseModel):
    """Running totals for a multi-benchmark run."""

    completed: int = 0
    failed: int = 0
    skipped: int = 0
    verify_passed: int = 0
    verify_failed: int = 0
    verify_missing: int = 0

    @property
    def total(self) -> int:
        """Benchmarks that were executed (completed or failed)."""
        return self.completed + self.failed

    @property
    def total_verified(self) -> int:
        """Benchmarks that produced a verification outcome."""
        return self.verify_passed + self.verify_failed + self.verify_missing

    @property
    def exit_code(self) -> int:
        """Process exit status for an all-mode run.

        Only verification failures fail the run; missing snapshots just mean
        there is nothing to compare against yet.
        """
        return 1 if self.verify_failed > 0 else 0

    def record(self, result: BenchResult) -> None:
        """Fold one benchmark result into the totals."""
        if not result.success:
            self.failed += 1
            return

        self.completed += 1
        if result.verification is None:
            return
        status = result.verification.status
        if status == VerifyStatus.PASS:
            self.verify_passed += 1
        elif status == VerifyStatus.FAIL:
            self.verify_failed += 1
        else:
            self.verify_missing += 1
