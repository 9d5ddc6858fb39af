"""Shared fixtures."""

import sys
import textwrap

import pytest

from leb.adapters.registry import AdapterConfig
from leb.models.constants import RuntimeName
from leb.utils.logger import Logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep library logging configured and out of the way."""
    if not Logger.is_configured():
        Logger.configure(level="WARNING")
    yield


@pytest.fixture
def make_adapter(tmp_path):
    """Write a fake adapter script and return its AdapterConfig."""

    def _make(
        source: str, name: str = "fake", env: dict[str, str] | None = None
    ) -> AdapterConfig:
        script = tmp_path / f"{name}.py"
        script.write_text(textwrap.dedent(source), encoding="utf-8")
        return AdapterConfig(
            name=name,
            lang=RuntimeName.PHP,
            command=[sys.executable, str(script)],
            env=env or {},
            script=script,
        )

    return _make


@pytest.fixture
def scenarios_dir(tmp_path):
    """A small scenario tree with a partial and nested categories."""
    base = tmp_path / "scenarios"
    files = {
        "unit/tags/greeting.liquid": "Hello, {{ name }}!",
        "unit/tags/assign.liquid": "{% assign x = 1 %}{{ x }}",
        "unit/filters/upcase.liquid": "{{ name | upcase }}",
        "composite/card.liquid": "<div>{{ name }}</div>\n",
        "partials/footer.liquid": "<footer></footer>",
    }
    for relative, content in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return base
