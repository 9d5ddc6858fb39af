"""Check command - reports whether adapters can run on this machine."""

import sys

import click

from leb.adapters.registry import adapter_exists, list_adapters
from leb.env_check import EnvChecker


def run_check(adapters: tuple[str, ...] = ()) -> None:
    """Check adapter environments and exit 1 if any is not ready.

    Args:
        adapters: Adapter names to check; all registered adapters if empty.
    """
    names = list(adapters) or list_adapters()
    unknown = [name for name in names if not adapter_exists(name)]
    if unknown:
        click.echo(f"error: unknown adapter: {', '.join(unknown)}", err=True)
        click.echo(f"Available: {', '.join(list_adapters())}", err=True)
        sys.exit(1)

    results = EnvChecker().check_adapters(names)
    for result in results:
        if result.error is None:
            click.echo(f"✓ {result.adapter}")
            continue
        click.echo(f"✗ {result.adapter}: {result.error.message}")
        if result.error.suggestion:
            click.echo(f"    {result.error.suggestion}")

    if not all(result.ok for result in results):
        sys.exit(1)
