"""Tests for the centralized logging utility."""

from io import StringIO

import pytest

from leb.utils.logger import Logger, LoggerNotConfiguredError


def test_logger_unconfigured():
    """Test that using Logger before configuration raises error."""
    # Reset logger state for test
    Logger._configured = False

    with pytest.raises(LoggerNotConfiguredError):
        Logger.get("test")


def test_logger_configuration():
    """Test logger configuration."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)

    assert Logger.is_configured()

    log = Logger.get("test_config")
    log.debug("Debug message")

    content = output.getvalue()
    assert "DEBUG" in content
    assert "[leb.test_config]" in content
    assert "Debug message" in content


def test_logger_set_level():
    """Test changing log level."""
    output = StringIO()
    Logger.configure(level="INFO", output=output, timestamps=False)

    log = Logger.get("test_level")
    log.debug("Hidden")
    assert "Hidden" not in output.getvalue()

    Logger.set_level("DEBUG")
    log.debug("Visible")
    assert "Visible" in output.getvalue()


def test_get_or_default_configures_warning():
    """Test that library code can log before the CLI configures logging."""
    Logger._configured = False

    log = Logger.get_or_default("runner")

    assert Logger.is_configured()
    assert log.name == "leb.runner"
    assert log.getEffectiveLevel() == 30


def test_get_or_default_keeps_existing_config():
    """Test that an existing configuration is left alone."""
    output = StringIO()
    Logger.configure(level="INFO", output=output)

    Logger.get_or_default("orchestrator").info("bench: running all benchmarks")

    assert "bench: running all benchmarks" in output.getvalue()


def test_logger_file_output(tmp_path):
    """Test logging to a file path."""
    path = tmp_path / "leb.log"
    Logger.configure(level="WARNING", output=path)

    Logger.get("file").warning("written to file")

    for handler in Logger.get().handlers:
        handler.flush()
    assert "written to file" in path.read_text()
