"""Tests for the report command line entry point."""

import importlib.util
import logging
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_report.py"


@pytest.fixture()
def run_report(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "report.log"))

    spec = importlib.util.spec_from_file_location("run_report", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield module
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_main_success(run_report, tmp_path):
    journal = tmp_path / "journal.yaml"
    journal.write_text(
        """
trades:
  - {id: a, date: 2024-01-02, symbol: AAA, side: BUY, price: 100, quantity: 10}
  - {id: b, date: 2024-01-03, symbol: AAA, side: SELL, price: 150, quantity: 5}
prices:
  AAA: 120
""",
        encoding="utf-8",
    )

    code = run_report.main(["--journal", str(journal), "--mode", "monthly", "--balance", "5000"])

    assert code == 0
    assert (tmp_path / "logs" / "report.log").exists()


def test_main_invalid_journal(run_report, tmp_path):
    journal = tmp_path / "journal.yaml"
    journal.write_text(
        "trades:\n  - {id: a, date: 2024-01-02, symbol: AAA, side: HOLD, price: 1, quantity: 1}\n",
        encoding="utf-8",
    )

    assert run_report.main(["--journal", str(journal)]) == 1


def test_main_missing_journal(run_report, tmp_path):
    assert run_report.main(["--journal", str(tmp_path / "missing.yaml")]) == 1


def test_main_invalid_config(run_report, tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("risk:\n  max_daily_loss_percent: -1\n", encoding="utf-8")

    code = run_report.main(
        ["--journal", str(tmp_path / "journal.yaml"), "--config", str(config)]
    )

    assert code == 1
    assert "Error loading settings" in capsys.readouterr().err
