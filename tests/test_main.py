"""Tests for the command line entry point."""
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from tradejournal.config.settings import Settings
from tradejournal.main import build_parser, load_and_validate_config, main, run


def write_trades(path: Path) -> Path:
    """Write two closed trades and one malformed record as JSON."""
    path.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "symbol": "NVDA",
                    "type": "Long",
                    "entry_price": 100,
                    "exit_price": 110,
                    "quantity": 10,
                    "entry_time": "2026-01-05T09:30:00",
                    "exit_time": "2026-01-05T11:00:00",
                    "profit_loss": 100,
                },
                {
                    "id": "2",
                    "symbol": "TSLA",
                    "type": "Short",
                    "entry_price": 200,
                    "exit_price": 205,
                    "quantity": 5,
                    "entry_time": "2026-01-06T13:00:00",
                    "exit_time": "2026-01-06T14:00:00",
                    "profit_loss": -25,
                },
                {"id": "3", "symbol": "AAPL", "entry_time": "bad"},
            ]
        )
    )
    return path


def test_load_config_defaults_when_default_path_missing(tmp_path, monkeypatch):
    """Missing default config falls back to built-in settings."""
    monkeypatch.chdir(tmp_path)

    with patch("tradejournal.main.load_dotenv"):
        settings = load_and_validate_config()

    assert isinstance(settings, Settings)
    assert settings.analytics.initial_capital == 10000.0


def test_load_config_explicit_missing_path_exits(tmp_path):
    with patch("tradejournal.main.load_dotenv"):
        with pytest.raises(SystemExit):
            load_and_validate_config(tmp_path / "missing.yaml")


def test_load_config_invalid_yaml_values_exit(tmp_path):
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("analytics:\n  bucket_count: 0\n")

    with patch("tradejournal.main.load_dotenv"):
        with pytest.raises(SystemExit):
            load_and_validate_config(config_file)


def test_load_config_from_yaml(tmp_path):
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("analytics:\n  initial_capital: 1234\n")

    with patch("tradejournal.main.load_dotenv"):
        settings = load_and_validate_config(config_file)

    assert settings.analytics.initial_capital == 1234


def test_run_builds_report(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    trades_file = write_trades(tmp_path / "trades.json")
    args = build_parser().parse_args([str(trades_file), "--initial-capital", "1000"])

    with patch("tradejournal.main.load_dotenv"):
        report = run(args)

    assert report.metrics.total_trades == 2
    assert report.skipped_trades == 1
    assert report.equity_curve[-1].equity == 1075.0


def test_run_exports_report(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    trades_file = write_trades(tmp_path / "trades.json")
    out_dir = tmp_path / "out"
    args = build_parser().parse_args(
        [str(trades_file), "--export", "--output-dir", str(out_dir), "--prefix", "week"]
    )

    with patch("tradejournal.main.load_dotenv"):
        run(args)

    assert (out_dir / "week.json").exists()
    assert (out_dir / "week_metrics.csv").exists()


def test_run_missing_trades_file_exits(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    args = build_parser().parse_args([str(tmp_path / "nope.json")])

    with patch("tradejournal.main.load_dotenv"):
        with pytest.raises(SystemExit):
            run(args)


def test_main_returns_zero(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    trades_file = write_trades(tmp_path / "trades.json")

    with patch("tradejournal.main.load_dotenv"):
        assert main([str(trades_file)]) == 0


def test_main_rejects_zero_buckets(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "trades.json"), "--buckets", "0"])


def test_run_logs_system_name(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    trades_file = write_trades(tmp_path / "trades.json")
    config_file = tmp_path / "settings.yaml"
    config_file.write_text('system:\n  name: "Desk Journal"\n')
    args = build_parser().parse_args([str(trades_file), "--config", str(config_file)])

    with patch("tradejournal.main.load_dotenv"), caplog.at_level("INFO", logger="tradejournal.main"):
        run(args)

    assert "Desk Journal: analyzing" in caplog.text
