"""Mini README: Tests for the Typer launcher.

Structure:
    * run tests - reload follows the configured environment unless overridden.
    * summary test - prints the demo ledger figures.
"""

from __future__ import annotations

from typing import Dict, List

import pytest
from typer.testing import CliRunner

import main_pocketledger
from pocketledger.configuration import PocketledgerSettings

RUNNER = CliRunner()


@pytest.fixture
def uvicorn_calls(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, object]]:
    calls: List[Dict[str, object]] = []
    monkeypatch.setattr(
        main_pocketledger.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs)
    )
    return calls


def _use_settings(monkeypatch: pytest.MonkeyPatch, **values: object) -> None:
    settings = PocketledgerSettings(**values)
    monkeypatch.setattr(main_pocketledger, "get_settings", lambda: settings)


@pytest.mark.parametrize(
    ("environment", "flags", "reload"),
    [
        ("development", [], True),
        ("production", [], False),
        ("Production", [], False),
        ("development", ["--production"], False),
        ("production", ["--development"], True),
    ],
)
def test_run_reload_follows_environment(
    monkeypatch: pytest.MonkeyPatch,
    uvicorn_calls: List[Dict[str, object]],
    environment: str,
    flags: List[str],
    reload: bool,
) -> None:
    _use_settings(monkeypatch, environment=environment, interface_port=9100)

    result = RUNNER.invoke(main_pocketledger.cli, ["run", *flags])

    assert result.exit_code == 0, result.output
    assert uvicorn_calls == [
        {"host": "0.0.0.0", "port": 9100, "factory": True, "reload": reload}
    ]
    assert "http://127.0.0.1:9100/api/balance" in result.output


def test_summary_prints_demo_figures(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_settings(monkeypatch)

    result = RUNNER.invoke(main_pocketledger.cli, ["summary", "--days", "2"])

    assert result.exit_code == 0, result.output
    assert "Balance:" in result.output
    assert "Month entries:" in result.output
    # Three history lines for a two-day window.
    assert len([line for line in result.output.splitlines() if line.startswith("  ")]) == 3
