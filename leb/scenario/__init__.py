"""Scenario template loading."""

from leb.scenario.loader import (
    ScenarioInfo,
    ScenarioLoader,
    ScenarioNotFoundError,
    default_scenarios_dir,
    split_path,
)

__all__ = [
    "ScenarioInfo",
    "ScenarioLoader",
    "ScenarioNotFoundError",
    "default_scenarios_dir",
    "split_path",
]
