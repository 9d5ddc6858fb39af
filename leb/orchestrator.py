"""Benchmark orchestration.

Drives (adapter, scenario) executions one at a time and folds the results
into a report. Two modes:

- single: one adapter and one scenario. Environment and scenario problems
  are fatal; a failed benchmark or failed verification gives exit code 1.
- all: every adapter against every benchmark scenario. Failures are
  recorded and the run continues; only verification failures give exit
  code 1.

Benchmarks never run concurrently: parallel interpreter processes would
distort each other's timings.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pydantic import ValidationError

from leb.adapters.registry import adapter_exists, list_adapters
from leb.adapters.runner import AdapterRunner
from leb.config.loader import get_excluded_scenarios, get_runtime_version
from leb.config.models import LebConfig
from leb.data.loader import DataLoader
from leb.env_check import EnvChecker
from leb.errors import AdapterError, CliError, Errors
from leb.models.adapter_models import AdapterInput
from leb.models.constants import (
    DEFAULT_ITERATIONS,
    DEFAULT_SCALE,
    DEFAULT_WARMUP,
    PARTIALS_CATEGORY,
    Scale,
    VerifyStatus,
)
from leb.models.result_models import BenchResult, RunSummary, VerifyResult
from leb.scenario.loader import (
    SCENARIO_SUFFIX,
    ScenarioInfo,
    ScenarioLoader,
    ScenarioNotFoundError,
)
from leb.snapshot.store import make_scenario_key
from leb.snapshot.verification import VerificationEngine
from leb.stats.statistics import calculate_timing_metrics
from leb.utils.logger import Logger
from leb.validator import format_errors


@dataclass
class BenchOptions:
    """Options shared by single and all mode."""

    scale: Scale = DEFAULT_SCALE
    iterations: int = DEFAULT_ITERATIONS
    warmup: int = DEFAULT_WARMUP
    no_verify: bool = False
    update_snapshots: bool = False
    compare_against: str | None = None
    category: str | None = None
    quiet: bool = False

    @property
    def verifying(self) -> bool:
        """True when results are compared against snapshots."""
        return not self.no_verify and not self.update_snapshots

    @property
    def mode_label(self) -> str:
        if self.update_snapshots:
            return "updating snapshots"
        if self.no_verify:
            return "no verification"
        if self.compare_against:
            return f"baseline verification (vs {self.compare_against})"
        return "self-verification (each adapter vs own snapshot)"


@dataclass
class SingleRunReport:
    """Outcome of single mode."""

    options: BenchOptions
    result: BenchResult
    error: CliError | None = None
    timestamp: str = ""
    duration_ms: float = 0.0

    @property
    def exit_code(self) -> int:
        if not self.result.success:
            return 1
        verification = self.result.verification
        if verification is not None and verification.status == VerifyStatus.FAIL:
            return 1
        return 0


@dataclass
class AllRunReport:
    """Outcome of all mode."""

    options: BenchOptions
    adapters: list[str]
    baseline: str
    results: list[BenchResult] = field(default_factory=list)
    summary: RunSummary = field(default_factory=RunSummary)
    total_scenarios: int = 0
    timestamp: str = ""
    duration_ms: float = 0.0

    @property
    def exit_code(self) -> int:
        return self.summary.exit_code


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def filter_scenarios(
    scenarios: list[ScenarioInfo], category: str | None = None
) -> list[ScenarioInfo]:
    """Drop partials and apply an optional category filter.

    A category matches itself and its subcategories, so ``unit`` selects
    ``unit/tags`` and ``unit/filters``.
    """
    selected = [s for s in scenarios if s.category != PARTIALS_CATEGORY]
    if category:
        prefix = category.strip("/")
        selected = [
            s
            for s in selected
            if s.category == prefix or s.category.startswith(f"{prefix}/")
        ]
    return selected


class BenchOrchestrator:
    """Runs benchmarks and aggregates their results.

    Args:
        runner: Executes adapter subprocesses.
        verifier: Updates and verifies snapshots.
        scenarios: Template source for scenario paths.
        data: Per-scale template data.
        env_checker: Adapter readiness checks.
        config: Baseline and scenario exclusions; optional.
        timeout_ms: Per-benchmark deadline; defaults to the runner's.
    """

    def __init__(
        self,
        runner: AdapterRunner,
        verifier: VerificationEngine,
        scenarios: ScenarioLoader,
        data: DataLoader,
        env_checker: EnvChecker,
        config: LebConfig | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self._runner = runner
        self._verifier = verifier
        self._scenarios = scenarios
        self._data = data
        self._env = env_checker
        self._config = config
        self._timeout_ms = timeout_ms
        self._log = Logger.get_or_default("orchestrator")

    def _progress(self, options: BenchOptions, message: str) -> None:
        if not options.quiet:
            self._log.info(message)

    @staticmethod
    def _failure(
        adapter: str, scenario: str, message: str, error: CliError
    ) -> tuple[BenchResult, CliError]:
        result = BenchResult(
            success=False,
            adapter=adapter,
            scenario=scenario,
            error=message,
            error_code=str(error.code),
        )
        return result, error

    def _execute(
        self, adapter: str, scenario: str, options: BenchOptions
    ) -> tuple[BenchResult, CliError | None]:
        try:
            template = self._scenarios.load_by_path(scenario)
        except UnicodeDecodeError as e:
            path = self._scenarios.base_dir / f"{scenario}{SCENARIO_SUFFIX}"
            message = f"{path} is not valid UTF-8: {e.reason}"
            return self._failure(
                adapter, scenario, message, Errors.invalid_argument("scenario", message)
            )
        except (ScenarioNotFoundError, ValueError) as e:
            return self._failure(
                adapter, scenario, str(e), Errors.scenario_not_found(scenario)
            )

        try:
            adapter_input = AdapterInput(
                template=template,
                data=self._data.load(options.scale),
                iterations=options.iterations,
                warmup=options.warmup,
            )
        except ValidationError as e:
            message = "; ".join(format_errors(e))
            return self._failure(
                adapter, scenario, message, Errors.invalid_argument("scenario", message)
            )

        try:
            run = self._runner.run(adapter, adapter_input, self._timeout_ms)
        except AdapterError as e:
            return self._failure(
                adapter, scenario, e.message, Errors.from_adapter_error(e)
            )

        output = run.output
        runtime_version = output.runtime_version
        if runtime_version is None and self._config is not None:
            runtime_version = get_runtime_version(self._config, output.lang)

        result = BenchResult(
            success=True,
            adapter=adapter,
            scenario=scenario,
            metrics=calculate_timing_metrics(
                output.timings.parse_ms, output.timings.render_ms
            ),
            library=output.library,
            version=output.version,
            lang=str(output.lang),
            runtime_version=runtime_version,
            execution_time_ms=run.execution_time_ms,
            rendered_output=output.rendered_output,
        )

        if options.no_verify or result.rendered_output is None:
            return result, None

        # Same scenario at a different scale renders different output
        key = make_scenario_key(scenario, options.scale)
        if options.update_snapshots:
            self._verifier.update_snapshot(key, adapter, result.rendered_output)
        else:
            result.verification = self._verifier.verify_snapshot(
                key, adapter, result.rendered_output, options.compare_against
            )
        return result, None

    def run_benchmark(
        self, adapter: str, scenario: str, options: BenchOptions
    ) -> BenchResult:
        """Run one benchmark; adapter failures become ``success=False``."""
        result, _ = self._execute(adapter, scenario, options)
        return result

    def run_single(
        self, adapter: str, scenario: str, options: BenchOptions
    ) -> SingleRunReport:
        """Run one (adapter, scenario) benchmark.

        Raises:
            CliError: If the adapter is unknown, its environment is not
                ready, or the scenario does not exist.
        """
        if not adapter_exists(adapter):
            raise Errors.adapter_not_found(adapter, list_adapters())
        self._env.ensure_adapter_ready(adapter)
        if not self._scenarios.exists_by_path(scenario):
            raise Errors.scenario_not_found(scenario)

        self._progress(options, f"bench: {adapter} {scenario}")
        self._progress(
            options,
            f"  scale={options.scale} iterations={options.iterations} "
            f"warmup={options.warmup}",
        )
        self._progress(options, f"  mode: {options.mode_label}")

        timestamp = _now()
        start = time.perf_counter()
        result, error = self._execute(adapter, scenario, options)
        duration_ms = (time.perf_counter() - start) * 1000

        if result.success:
            self._progress(options, f"  completed in {duration_ms:.0f}ms")
        if result.verification is not None:
            self._progress(
                options, f"  verification: {self._verify_label(result.verification)}"
            )

        return SingleRunReport(
            options=options,
            result=result,
            error=error,
            timestamp=timestamp,
            duration_ms=duration_ms,
        )

    def adapter_order(self) -> tuple[list[str], str]:
        """Return (adapters, baseline) with the baseline first."""
        adapters = list_adapters()
        baseline = adapters[0]
        if self._config is not None and adapter_exists(self._config.baseline.library):
            baseline = self._config.baseline.library
        return [baseline, *(a for a in adapters if a != baseline)], baseline

    def run_all(self, options: BenchOptions) -> AllRunReport:
        """Run every adapter against every benchmark scenario, sequentially."""
        adapters, baseline = self.adapter_order()
        scenarios = filter_scenarios(self._scenarios.list_all(), options.category)
        report = AllRunReport(
            options=options,
            adapters=adapters,
            baseline=baseline,
            total_scenarios=len(scenarios),
            timestamp=_now(),
        )

        category = f" (category: {options.category})" if options.category else ""
        self._progress(options, "bench: running all benchmarks")
        self._progress(options, f"  adapters: {', '.join(adapters)}")
        self._progress(options, f"  baseline: {baseline}")
        self._progress(options, f"  scenarios: {len(scenarios)}{category}")
        self._progress(
            options,
            f"  scale={options.scale} iterations={options.iterations} "
            f"warmup={options.warmup}",
        )
        self._progress(options, f"  mode: {options.mode_label}")

        summary = report.summary
        start = time.perf_counter()
        for adapter in adapters:
            excluded: set[str] = set()
            if self._config is not None:
                excluded = get_excluded_scenarios(self._config, adapter)
            runnable = [s for s in scenarios if s.path not in excluded]
            skipped = len(scenarios) - len(runnable)

            check = self._env.check_adapter(adapter)
            if not check.ok:
                reason = check.error.message if check.error else "not ready"
                self._progress(options, f"  [skip] {adapter}: {reason}")
                summary.skipped += len(scenarios)
                continue

            if skipped:
                self._progress(
                    options, f"  {adapter}: skipping {skipped} unsupported scenarios"
                )
                summary.skipped += skipped

            for scenario in runnable:
                self._progress(options, f"  {adapter} x {scenario.path}")
                result = self.run_benchmark(adapter, scenario.path, options)
                report.results.append(result)
                summary.record(result)
                self._log_outcome(options, result)

        report.duration_ms = (time.perf_counter() - start) * 1000

        self._progress(
            options,
            f"bench: completed {summary.completed}/{summary.total}, "
            f"failed {summary.failed}, skipped {summary.skipped}",
        )
        if options.verifying and summary.total_verified > 0:
            self._progress(
                options,
                f"verify: {summary.verify_passed} passed, "
                f"{summary.verify_failed} failed, {summary.verify_missing} missing",
            )
        elif options.update_snapshots:
            self._progress(options, f"snapshots: updated for {', '.join(adapters)}")
        return report

    @staticmethod
    def _verify_label(verification: VerifyResult) -> str:
        status = verification.status
        if status == VerifyStatus.MISSING:
            return "missing - run with -u to create snapshot"
        if status == VerifyStatus.FAIL:
            return "FAIL"
        return "pass"

    def _log_outcome(self, options: BenchOptions, result: BenchResult) -> None:
        if not result.success:
            self._progress(options, f"    [fail] {result.error}")
            return
        if result.verification is None:
            return
        if result.verification.status == VerifyStatus.FAIL:
            # Always reported, quiet or not
            self._log.warning(
                f"    [verify fail] {result.adapter} x {result.scenario}"
            )
        elif result.verification.status == VerifyStatus.MISSING:
            self._progress(
                options,
                f"    [verify missing] {result.scenario} - run with -u to create snapshot",
            )

