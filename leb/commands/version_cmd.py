"""
Version command - displays leb version information
"""

import platform

import click

from leb.version import LEB_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display leb version information.

    Args:
        verbose: If True, also show the Python runtime in use
    """
    if verbose:
        click.echo(f"leb version {LEB_VERSION}")
        click.echo("\nDetailed version information:")
        click.echo(f"  Semantic Version: {LEB_VERSION.major}.{LEB_VERSION.minor}.{LEB_VERSION.patch}")
        click.echo(f"  Python:           {platform.python_version()}")
    else:
        click.echo(f"leb {LEB_VERSION}")
