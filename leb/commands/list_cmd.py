"""List command - prints adapters, scenarios or categories, one per line."""

import click

from leb.adapters.registry import list_adapters
from leb.models.constants import PARTIALS_CATEGORY
from leb.orchestrator import filter_scenarios
from leb.scenario.loader import ScenarioLoader
from leb.utils.logger import Logger


def run_list(target: str, category: str | None = None) -> None:
    """Print the requested items to stdout for shell composition.

    Args:
        target: "adapters", "scenarios" or "categories".
        category: Scenario category filter (scenarios only).
    """
    if target == "adapters":
        for adapter in list_adapters():
            click.echo(adapter)
        return

    loader = ScenarioLoader()
    if target == "categories":
        for name in loader.list_categories():
            if name != PARTIALS_CATEGORY:
                click.echo(name)
        return

    scenarios = filter_scenarios(loader.list_all(), category)
    if category and not scenarios:
        Logger.get_or_default("list").warning(f'No scenarios found in category "{category}"')
        return

    for scenario in scenarios:
        click.echo(scenario.path)
