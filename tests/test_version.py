"""Tests for the leb version information."""

import pytest

from leb.version import LEB_VERSION, Version


def test_version_methods():
    """Test Version class methods."""
    v = Version(major=1, minor=2, patch=3)

    assert str(v) == "1.2.3"
    assert v.semver() == (1, 2, 3)


def test_version_parse():
    """Test parsing semantic version strings."""
    assert Version.parse("0.10.2") == Version(0, 10, 2)

    for bad in ("1.2", "1.2.3.4", "v1.2.3", "1.x.3"):
        with pytest.raises(ValueError):
            Version.parse(bad)


def test_leb_version_instance():
    """Test the global LEB_VERSION instance."""
    assert isinstance(LEB_VERSION, Version)
    assert LEB_VERSION.major >= 0
    assert Version.parse(str(LEB_VERSION)) == LEB_VERSION
