"""Bench command - runs benchmarks in single or all mode."""

import json
import sys
from pathlib import Path

import click

from leb.adapters.runner import AdapterRunner
from leb.config.loader import ConfigError, find_config, load_config
from leb.config.models import LebConfig
from leb.data.loader import DataLoader, DataLoadError
from leb.env_check import EnvChecker
from leb.errors import CliError, Errors
from leb.formatters import (
    format_all_json,
    format_single_json,
    format_single_table,
    format_table,
)
from leb.models.constants import OutputFormat, Scale
from leb.orchestrator import BenchOptions, BenchOrchestrator
from leb.scenario.loader import ScenarioLoader
from leb.snapshot.store import SnapshotStore
from leb.snapshot.verification import VerificationEngine
from leb.utils.logger import Logger
from leb.validator import OutputValidator


def emit_error(error: CliError, output_format: OutputFormat | str) -> None:
    """Write an error to stderr in the requested format."""
    if output_format == OutputFormat.JSON:
        click.echo(json.dumps(error.to_dict(), indent=2), err=True)
    else:
        click.echo(error.to_human(), err=True)


def load_optional_config() -> LebConfig | None:
    """Load leb.config.json if present.

    A missing file means no baseline preference and no exclusions; an
    invalid one is an error.

    Raises:
        CliError: If the configuration file exists but is invalid.
    """
    try:
        path = find_config()
    except ConfigError as e:
        Logger.get_or_default("bench").warning(f"{e}; running without exclusions")
        return None
    try:
        return load_config(path)
    except ConfigError as e:
        raise Errors.config_error(str(e), str(path)) from e


def build_orchestrator(
    validator: OutputValidator,
    timeout_ms: int,
    config: LebConfig | None,
) -> BenchOrchestrator:
    """Wire the orchestrator's collaborators from the environment."""
    return BenchOrchestrator(
        runner=AdapterRunner(validator, default_timeout_ms=timeout_ms),
        verifier=VerificationEngine(SnapshotStore()),
        scenarios=ScenarioLoader(),
        data=DataLoader(),
        env_checker=EnvChecker(),
        config=config,
        timeout_ms=timeout_ms,
    )


def _write(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        Logger.get_or_default("bench").info(f"  output: {output}")
    else:
        click.echo(text)


def run_bench(
    validator: OutputValidator,
    adapter: str | None,
    scenario: str | None,
    scale: str,
    iterations: int,
    warmup: int,
    category: str | None,
    output: str | None,
    output_format: str | None,
    quiet: bool,
    no_verify: bool,
    update_snapshots: bool,
    compare_against: str | None,
    timeout_ms: int,
) -> None:
    """Run benchmarks and exit with the run's status.

    With neither ``adapter`` nor ``scenario`` every adapter runs against every
    scenario (table output by default). With both, a single benchmark runs
    (JSON output by default).
    """
    single = adapter is not None
    fmt = OutputFormat(output_format or (OutputFormat.JSON if single else OutputFormat.TABLE))

    options = BenchOptions(
        scale=Scale(scale),
        iterations=iterations,
        warmup=warmup,
        no_verify=no_verify,
        update_snapshots=update_snapshots,
        compare_against=compare_against,
        category=category,
        quiet=quiet,
    )

    try:
        if single and scenario is None:
            raise Errors.invalid_argument(
                "scenario", "<adapter> and <scenario> are required for single mode"
            )
        orchestrator = build_orchestrator(validator, timeout_ms, load_optional_config())

        if adapter is not None and scenario is not None:
            report = orchestrator.run_single(adapter, scenario, options)
            if report.error is not None:
                emit_error(report.error, fmt)
            else:
                text = (
                    format_single_json(report)
                    if fmt == OutputFormat.JSON
                    else format_single_table(report)
                )
                _write(text, output)
            sys.exit(report.exit_code)

        all_report = orchestrator.run_all(options)
        text = (
            format_all_json(all_report)
            if fmt == OutputFormat.JSON
            else format_table(all_report.results, all_report.adapters, all_report.baseline)
        )
        _write(text, output)
        sys.exit(all_report.exit_code)

    except CliError as e:
        emit_error(e, fmt)
        sys.exit(1)
    except DataLoadError as e:
        emit_error(Errors.config_error(str(e), str(e.path)), fmt)
        sys.exit(1)
    except OSError as e:
        emit_error(Errors.internal(str(e)), fmt)
        sys.exit(1)
