#!/usr/bin/env python3
"""leb CLI - command-line interface for the template engine benchmark runner."""

import click

from leb.adapters.registry import list_adapters
from leb.models.constants import (
    DEFAULT_ITERATIONS,
    DEFAULT_SCALE,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_WARMUP,
    MAX_ITERATIONS,
    MAX_WARMUP,
    MIN_ITERATIONS,
    MIN_WARMUP,
    OutputFormat,
    Scale,
)
from leb.utils.env import EnvVarError, get_env
from leb.utils.logger import Logger
from leb.validator import OutputValidator


@click.group()
@click.pass_context
def leb(ctx):
    """Benchmark Liquid template engines across PHP and Ruby adapters."""
    # Logs go to stderr; stdout carries results only
    if not Logger.is_configured():
        Logger.configure(level=get_env("LEB_LOG_LEVEL", default="INFO"), output="stderr")

    # One validator for the whole process, handed to whoever needs it
    ctx.ensure_object(dict)
    ctx.obj.setdefault("validator", OutputValidator())


@leb.command()
@click.argument("adapter", required=False)
@click.argument("scenario", required=False)
@click.option(
    "--scale",
    "-s",
    type=click.Choice([str(s) for s in Scale]),
    default=str(DEFAULT_SCALE),
    show_default=True,
    help="Data scale",
)
@click.option(
    "--iterations",
    "-i",
    type=click.IntRange(MIN_ITERATIONS, MAX_ITERATIONS),
    default=DEFAULT_ITERATIONS,
    show_default=True,
    help="Number of measured iterations",
)
@click.option(
    "--warmup",
    "-w",
    type=click.IntRange(MIN_WARMUP, MAX_WARMUP),
    default=DEFAULT_WARMUP,
    show_default=True,
    help="Number of warmup iterations",
)
@click.option(
    "--category",
    "-c",
    default=None,
    help="Filter by category (e.g., representative, unit/tags) in all mode",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write results to a file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([str(f) for f in OutputFormat]),
    default=None,
    help="Output format (default: json for single, table for all)",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress output")
@click.option(
    "--no-verify",
    is_flag=True,
    help="Skip output verification against snapshots",
)
@click.option(
    "--update-snapshots",
    "-u",
    is_flag=True,
    help="Update snapshots with the current output",
)
@click.option(
    "--compare-against",
    type=click.Choice(list_adapters()),
    default=None,
    help="Verify against another adapter's snapshot instead of its own",
)
@click.option(
    "--timeout-ms",
    type=click.IntRange(min=1),
    default=None,
    help=f"Per-benchmark timeout (default: $LEB_TIMEOUT_MS or {DEFAULT_TIMEOUT_MS})",
)
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def bench(
    ctx,
    adapter,
    scenario,
    scale,
    iterations,
    warmup,
    category,
    output,
    output_format,
    quiet,
    no_verify,
    update_snapshots,
    compare_against,
    timeout_ms,
    debug,
):
    r"""Run benchmarks.

    \b
    Examples:
      leb bench                                # All adapters x all scenarios
      leb bench -c representative              # Only one category
      leb bench -f json > results.json         # All mode as JSON
      leb bench keepsuit unit/tags/for         # Single benchmark
      leb bench shopify representative/simple -s large
      leb bench -u                             # Refresh snapshots
    """
    from leb.commands.bench_cmd import run_bench

    if debug:
        Logger.set_level("DEBUG")
    elif quiet:
        Logger.set_level("WARNING")

    if timeout_ms is None:
        try:
            timeout_ms = get_env("LEB_TIMEOUT_MS", default=DEFAULT_TIMEOUT_MS, as_type=int)
        except EnvVarError as e:
            raise click.UsageError(str(e)) from e

    run_bench(
        validator=ctx.obj["validator"],
        adapter=adapter,
        scenario=scenario,
        scale=scale,
        iterations=iterations,
        warmup=warmup,
        category=category,
        output=output,
        output_format=output_format,
        quiet=quiet,
        no_verify=no_verify,
        update_snapshots=update_snapshots,
        compare_against=compare_against,
        timeout_ms=timeout_ms,
    )


@leb.command("list")
@click.argument("target", type=click.Choice(["adapters", "scenarios", "categories"]))
@click.option(
    "--category",
    "-c",
    default=None,
    help="Filter scenarios by category (e.g., unit/tags)",
)
def list_(target, category):
    r"""List adapters, scenarios or categories (one per line).

    \b
    Shell composition:
      leb list scenarios | xargs -I{} leb bench keepsuit {}
      leb list adapters | xargs -I{} leb bench {} unit/tags/for
    """
    from leb.commands.list_cmd import run_list

    run_list(target, category=category)


@leb.command()
@click.argument("adapters", nargs=-1)
def check(adapters):
    """Check that adapter runtimes and dependencies are installed."""
    from leb.commands.check_cmd import run_check

    run_check(adapters)


@leb.command()
@click.option(
    "--which",
    type=click.Choice(["input", "output", "all"]),
    default="all",
    show_default=True,
    help="Which protocol schema to print",
)
@click.pass_context
def schema(ctx, which):
    """Print the adapter protocol JSON Schemas."""
    from leb.commands.schema_cmd import run_schema

    run_schema(ctx.obj["validator"], which)


@leb.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display leb version information."""
    from leb.commands.version_cmd import run_version

    if verbose:
        Logger.set_level("DEBUG")

    run_version(verbose=verbose)


if __name__ == "__main__":
    leb()
