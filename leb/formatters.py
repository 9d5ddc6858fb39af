"""Result formatters for the bench command.

JSON documents go to stdout (or a file) for piping; tables are for people.
"""

import json
from typing import Any

from leb.models.constants import VerifyStatus
from leb.models.result_models import BenchResult
from leb.orchestrator import AllRunReport, SingleRunReport
from leb.version import LEB_VERSION

SCENARIO_MIN_WIDTH = 25
COLUMN_WIDTH = 18
BOX_WIDTH = 50


def format_time(ms: float) -> str:
    """Format milliseconds for display (``-`` for zero)."""
    if ms == 0:
        return "-"
    if ms < 0.01:
        return f"{ms * 1000:.1f}μs"
    if ms < 1:
        return f"{ms:.2f}ms"
    return f"{ms:.1f}ms"


def format_ratio(ratio: float) -> str:
    """Format a ratio against the baseline (1.50x = 50% slower)."""
    if ratio == 0:
        return "-"
    return f"{ratio:.2f}x"


def single_document(report: SingleRunReport) -> dict[str, Any]:
    """Build the single-mode JSON document."""
    result = report.result
    options = report.options
    document: dict[str, Any] = {
        "success": result.success,
        "metadata": {
            "timestamp": report.timestamp,
            "scenario": result.scenario,
            "scale": str(options.scale),
            "iterations": options.iterations,
            "warmup": options.warmup,
            "leb_version": str(LEB_VERSION),
        },
        "adapter": {
            "name": result.adapter,
            "library": result.library,
            "version": result.version,
            "lang": result.lang,
            "runtime_version": result.runtime_version,
        },
    }
    if result.metrics is not None:
        document["metrics"] = result.metrics.model_dump(mode="json")
    if result.verification is not None:
        document["verification"] = result.verification.to_dict()
    return document


def format_single_json(report: SingleRunReport) -> str:
    """Format a single-mode report as JSON."""
    return json.dumps(single_document(report), indent=2, ensure_ascii=False)


def all_document(report: AllRunReport) -> dict[str, Any]:
    """Build the all-mode JSON document."""
    options = report.options
    summary = report.summary
    metadata: dict[str, Any] = {
        "timestamp": report.timestamp,
        "scale": str(options.scale),
        "iterations": options.iterations,
        "warmup": options.warmup,
        "baseline": report.baseline,
        "total": summary.total,
        "completed": summary.completed,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "duration_ms": round(report.duration_ms, 3),
        "leb_version": str(LEB_VERSION),
    }
    if options.verifying:
        metadata["verification"] = {
            "passed": summary.verify_passed,
            "failed": summary.verify_failed,
            "missing": summary.verify_missing,
        }
    return {
        "metadata": metadata,
        "results": [result.to_dict() for result in report.results],
    }


def format_all_json(report: AllRunReport) -> str:
    """Format an all-mode report as JSON."""
    return json.dumps(all_document(report), indent=2, ensure_ascii=False)


def _cell(result: BenchResult | None, is_baseline: bool, baseline_ms: float) -> str:
    if result is None:
        return "-"
    if not result.success or result.metrics is None:
        return "ERR"

    mean_ms = result.metrics.total.mean_ms
    if is_baseline:
        return format_time(mean_ms)
    ratio = mean_ms / baseline_ms if baseline_ms > 0 else 0
    if ratio > 0:
        return f"{format_time(mean_ms)} ({format_ratio(ratio)})"
    return format_time(mean_ms)


def format_table(results: list[BenchResult], adapters: list[str], baseline: str) -> str:
    """Format a scenario x adapter comparison table.

    Each non-baseline cell shows the mean total time and its ratio to the
    baseline's time for the same scenario. When the baseline has no results
    the first adapter with results takes its place.

    Args:
        results: Results from an all-mode run.
        adapters: Column order.
        baseline: Preferred baseline adapter.

    Returns:
        The table as a string.
    """
    with_results = {r.adapter for r in results}
    active = [a for a in adapters if a in with_results]
    if not active:
        return "\nNo benchmark results to display.\n"

    actual_baseline = baseline if baseline in with_results else active[0]

    by_scenario: dict[str, dict[str, BenchResult]] = {}
    for result in results:
        by_scenario.setdefault(result.scenario, {})[result.adapter] = result

    scenarios = sorted(by_scenario)
    scenario_width = max(SCENARIO_MIN_WIDTH, *(len(s) for s in scenarios))

    header = " | ".join(
        [
            "Scenario".ljust(scenario_width),
            *(
                (f"{a} (base)" if a == actual_baseline else a).rjust(COLUMN_WIDTH)
                for a in active
            ),
        ]
    )
    separator = "-|-".join(
        ["-" * scenario_width, *("-" * COLUMN_WIDTH for _ in active)]
    )

    lines = ["", header, separator]
    for scenario in scenarios:
        row = by_scenario[scenario]
        base = row.get(actual_baseline)
        baseline_ms = (
            base.metrics.total.mean_ms
            if base is not None and base.success and base.metrics is not None
            else 0.0
        )
        cells = [
            _cell(row.get(a), a == actual_baseline, baseline_ms).rjust(COLUMN_WIDTH)
            for a in active
        ]
        lines.append(" | ".join([scenario.ljust(scenario_width), *cells]))
    lines.append("")
    return "\n".join(lines)


def format_single_table(report: SingleRunReport) -> str:
    """Format a single-mode report as a box."""
    result = report.result

    def row(text: str) -> str:
        return f"│{text.ljust(BOX_WIDTH)}│"

    hr = "─" * BOX_WIDTH
    lines = ["", f"┌{hr}┐", row(f" {result.adapter} x {result.scenario}"), f"├{hr}┤"]

    if result.metrics is None:
        lines.append(row(f"   Error: {result.error or 'unknown'}"[:BOX_WIDTH]))
    else:
        for label, phase in (
            ("Parse: ", result.metrics.parse),
            ("Render:", result.metrics.render),
            ("Total: ", result.metrics.total),
        ):
            lines.append(
                row(
                    f"   {label} {format_time(phase.mean_ms)} "
                    f"(±{format_time(phase.stddev_ms)})"
                )
            )

    if result.verification is not None:
        labels = {
            VerifyStatus.PASS: "PASS",
            VerifyStatus.FAIL: "FAIL",
            VerifyStatus.MISSING: "MISSING",
        }
        lines.append(f"├{hr}┤")
        lines.append(row(f"   Verify: {labels[result.verification.status]}"))

    lines.extend([f"└{hr}┘", ""])
    return "\n".join(lines)
