"""Fixtures for functional CLI tests.

Provides a CliRunner, an isolated filesystem per test, and helpers to write
scenario files into it.
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name

DEMO_SCENARIO = Path(__file__).resolve().parents[2] / "scenarios" / "demo.json"


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def demo_scenario() -> Path:
    """Path to the demo scenario shipped with the project."""
    return DEMO_SCENARIO


@pytest.fixture
def write_scenario(fs) -> Callable[[dict, str], Path]:
    """Factory fixture: dump a scenario dict to a JSON file in the isolated fs."""

    def _write(data: dict, name: str = "scenario.json") -> Path:
        path = Path(name)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
