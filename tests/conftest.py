"""Shared test fixtures for ccstatus.

Provides reusable fixtures for status API payloads, a controllable clock,
isolated config environments, output state management, and a CLI runner.
These fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from ccstatus.config import ENV_MAPPING
from ccstatus.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

PAGE = {
    "id": "tymt9n04zgry",
    "name": "Anthropic",
    "url": "https://status.anthropic.com",
    "time_zone": "Etc/UTC",
    "updated_at": "2025-06-03T08:15:42.123Z",
}


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation, so a stale
    manager would write to a closed file.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Controllable clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Status API payloads
# ---------------------------------------------------------------------------


def make_incident(index: int, status: str = "resolved", impact: str = "minor") -> dict[str, Any]:
    """Build a raw incident dict as returned by ``incidents.json``."""
    return {
        "id": f"inc-{index}",
        "name": f"Incident {index}",
        "status": status,
        "created_at": f"2025-05-{index + 1:02d}T10:00:00.000Z",
        "updated_at": f"2025-05-{index + 1:02d}T11:00:00.000Z",
        "monitoring_at": None,
        "resolved_at": f"2025-05-{index + 1:02d}T11:00:00.000Z" if status == "resolved" else None,
        "impact": impact,
        "shortlink": f"https://stspg.io/{index}",
        "started_at": f"2025-05-{index + 1:02d}T09:55:00.000Z",
        "page_id": PAGE["id"],
        "incident_updates": [
            {
                "id": f"upd-{index}",
                "status": status,
                "body": "This incident has been resolved.",
                "created_at": f"2025-05-{index + 1:02d}T11:00:00.000Z",
                "display_at": f"2025-05-{index + 1:02d}T11:00:00.000Z",
                "affected_components": [],
            }
        ],
        "components": [],
    }


def make_incidents_payload(count: int) -> dict[str, Any]:
    """Build a raw ``incidents.json`` envelope with *count* incidents."""
    return {"page": dict(PAGE), "incidents": [make_incident(i) for i in range(count)]}


@pytest.fixture
def incidents_payload() -> dict[str, Any]:
    """Raw ``incidents.json`` body with ten incidents."""
    return make_incidents_payload(10)


@pytest.fixture
def incidents_payload_factory() -> Callable[[int], dict[str, Any]]:
    return make_incidents_payload


@pytest.fixture
def summary_payload() -> dict[str, Any]:
    """Raw ``summary.json`` body: three components, one active incident, one maintenance."""
    with open(FIXTURES_DIR / "summary.json") as f:
        return copy.deepcopy(json.load(f))


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, clears every
    CCSTATUS_* environment variable, and changes the working directory to
    tmp_path so project config files are not picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("ccstatus.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ENV_MAPPING:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
