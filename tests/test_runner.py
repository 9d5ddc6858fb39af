"""End-to-end tests for the adapter runner using fake Python adapters."""

import asyncio
import time

import psutil
import pytest

from fakes import ECHO_ADAPTER

from leb.adapters import AdapterRunner, get_adapter_config
from leb.errors import AdapterError, AdapterErrorKind
from leb.models import AdapterInput
from leb.stats import calculate_metrics
from leb.validator import OutputValidator

HELLO_INPUT = AdapterInput(
    template="{{ name }}", data={"name": "World"}, iterations=3, warmup=1
)

SLEEPING_ADAPTER = """
import os
import subprocess
import sys
import time

child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(120)"])
with open(os.environ["FAKE_PID_FILE"], "w") as f:
    f.write(f"{os.getpid()} {child.pid}")
time.sleep(120)
"""

CRASHING_ADAPTER = """
import sys

sys.stderr.write("parse error")
print('{"library": "fake", "version": "1.0.0"}')
sys.exit(1)
"""

MALFORMED_ADAPTER = """
import sys

sys.stdin.read()
print("Warning: deprecated call")
print("{not json")
"""

INVALID_ADAPTER = """
import json
import sys

sys.stdin.read()
json.dump({"library": "fake", "version": "not-semver", "lang": "cobol"}, sys.stdout)
"""

SHORT_TIMINGS_ADAPTER = """
import json
import sys

sys.stdin.read()
json.dump(
    {
        "library": "fake",
        "version": "1.0.0",
        "lang": "ruby",
        "timings": {"parse_ms": [0.1, 0.1], "render_ms": [0.1, 0.1, 0.1]},
    },
    sys.stdout,
)
"""

NOISY_ADAPTER = """
import json
import sys

request = json.load(sys.stdin)
n = request["iterations"]
sys.stderr.write("e" * 1_000_000)
json.dump(
    {
        "library": "fake",
        "version": "1.0.0",
        "lang": "php",
        "timings": {"parse_ms": [0.0] * n, "render_ms": [0.0] * n},
        "rendered_output": "x" * 2_000_000,
    },
    sys.stdout,
)
"""

ENV_ADAPTER = """
import json
import os
import sys

request = json.load(sys.stdin)
n = request["iterations"]
json.dump(
    {
        "library": "fake",
        "version": "1.0.0",
        "lang": "ruby",
        "timings": {"parse_ms": [0.0] * n, "render_ms": [0.0] * n},
        "rendered_output": os.environ.get("FAKE_FLAG", "") + os.environ.get("FAKE_INHERITED", ""),
    },
    sys.stdout,
)
"""


def _is_gone(pid: int) -> bool:
    """True once a process no longer exists or is only a zombie entry."""
    try:
        return psutil.Process(pid).status() == psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return True


@pytest.fixture
def runner():
    return AdapterRunner(OutputValidator(), default_timeout_ms=30_000)


class TestSuccessfulRun:
    """Tests for a well-behaved adapter."""

    def test_hello_world(self, runner, make_adapter):
        result = runner.run(make_adapter(ECHO_ADAPTER), HELLO_INPUT)

        timings = result.output.timings
        assert len(timings.parse_ms) == 3
        assert len(timings.render_ms) == 3
        assert all(t >= 0 for t in timings.parse_ms + timings.render_ms)
        assert result.output.rendered_output == "World"
        assert result.output.library == "fake/liquid"
        assert result.execution_time_ms > 0

        metrics = calculate_metrics(timings.parse_ms)
        assert metrics.min_ms <= metrics.mean_ms <= metrics.max_ms

    def test_large_output_does_not_deadlock(self, runner, make_adapter):
        """stdout and stderr are drained while waiting for exit."""
        result = runner.run(make_adapter(NOISY_ADAPTER), HELLO_INPUT, timeout_ms=20_000)
        assert len(result.output.rendered_output) == 2_000_000

    def test_adapter_env_overrides_are_applied(self, runner, make_adapter, monkeypatch):
        monkeypatch.setenv("FAKE_INHERITED", "-inherited")
        config = make_adapter(ENV_ADAPTER, env={"FAKE_FLAG": "on"})
        result = runner.run(config, HELLO_INPUT)
        assert result.output.rendered_output == "on-inherited"

    def test_run_async(self, runner, make_adapter):
        result = asyncio.run(runner.run_async(make_adapter(ECHO_ADAPTER), HELLO_INPUT))
        assert result.output.rendered_output == "World"


class TestTimeout:
    """Tests for the timeout race."""

    def test_never_exiting_adapter_times_out(self, runner, make_adapter, tmp_path):
        pid_file = tmp_path / "pids"
        config = make_adapter(SLEEPING_ADAPTER, env={"FAKE_PID_FILE": str(pid_file)})

        start = time.monotonic()
        with pytest.raises(AdapterError) as exc_info:
            runner.run(config, HELLO_INPUT, timeout_ms=1500)
        elapsed = time.monotonic() - start

        error = exc_info.value
        assert error.kind == AdapterErrorKind.TIMEOUT
        assert error.timeout_ms == 1500
        assert error.adapter_name == "fake"
        assert "timed out after 1500ms" in error.message
        assert elapsed < 1.5 + 5.0

        parent_pid, child_pid = (int(p) for p in pid_file.read_text().split())
        assert _is_gone(parent_pid)
        # Grandchildren are killed with the adapter
        deadline = time.monotonic() + 5
        while not _is_gone(child_pid) and time.monotonic() < deadline:
            time.sleep(0.05)
        assert _is_gone(child_pid)

    def test_default_timeout_used(self, make_adapter, tmp_path):
        runner = AdapterRunner(OutputValidator(), default_timeout_ms=1000)
        config = make_adapter(SLEEPING_ADAPTER, env={"FAKE_PID_FILE": str(tmp_path / "p")})
        with pytest.raises(AdapterError) as exc_info:
            runner.run(config, HELLO_INPUT)
        assert exc_info.value.timeout_ms == 1000


class TestFailureKinds:
    """Tests for failure classification."""

    def test_nonzero_exit_is_crash(self, runner, make_adapter):
        """Non-zero exit wins even when stdout looks like JSON."""
        with pytest.raises(AdapterError) as exc_info:
            runner.run(make_adapter(CRASHING_ADAPTER), HELLO_INPUT)
        error = exc_info.value
        assert error.kind == AdapterErrorKind.CRASHED
        assert error.exit_code == 1
        assert "parse error" in error.stderr
        assert "exited with code 1" in error.message

    def test_unparsable_stdout_is_malformed(self, runner, make_adapter):
        with pytest.raises(AdapterError) as exc_info:
            runner.run(make_adapter(MALFORMED_ADAPTER), HELLO_INPUT)
        assert exc_info.value.kind == AdapterErrorKind.MALFORMED_OUTPUT
        assert exc_info.value.exit_code == 0

    def test_schema_violation_is_invalid(self, runner, make_adapter):
        with pytest.raises(AdapterError) as exc_info:
            runner.run(make_adapter(INVALID_ADAPTER), HELLO_INPUT)
        error = exc_info.value
        assert error.kind == AdapterErrorKind.INVALID_OUTPUT
        assert any(e.startswith("/version") for e in error.validation_errors)
        assert any(e.startswith("/lang") for e in error.validation_errors)
        assert any(e.startswith("/timings") for e in error.validation_errors)

    def test_timing_length_must_match_iterations(self, runner, make_adapter):
        with pytest.raises(AdapterError) as exc_info:
            runner.run(make_adapter(SHORT_TIMINGS_ADAPTER), HELLO_INPUT)
        error = exc_info.value
        assert error.kind == AdapterErrorKind.INVALID_OUTPUT
        assert error.validation_errors == [
            "/timings/parse_ms: expected 3 items, got 2"
        ]

    def test_missing_binary_is_spawn_failure(self, runner, make_adapter, tmp_path):
        config = make_adapter(ECHO_ADAPTER)
        config.command[0] = str(tmp_path / "no-such-interpreter")
        with pytest.raises(AdapterError) as exc_info:
            runner.run(config, HELLO_INPUT)
        assert exc_info.value.kind == AdapterErrorKind.SPAWN_FAILED


class TestResolve:
    """Tests for adapter name resolution."""

    def test_resolves_registered_name(self, tmp_path):
        runner = AdapterRunner(OutputValidator(), adapters_dir=tmp_path)
        config = runner.resolve("shopify")
        assert config == get_adapter_config("shopify", tmp_path)
        assert config.command[-1] == str(tmp_path / "ruby" / "shopify.rb")

    def test_config_passes_through(self, runner, make_adapter):
        config = make_adapter(ECHO_ADAPTER)
        assert runner.resolve(config) is config
