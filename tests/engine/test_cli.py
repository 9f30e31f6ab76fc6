import json
from pathlib import Path

from typer.testing import CliRunner

from engine import cli

runner = CliRunner()


def test_help_exits_zero():
    res = runner.invoke(cli.app, ["--help"])
    assert res.exit_code == 0
    assert "play" in res.stdout
    assert "calendar" in res.stdout


def test_calendar_command():
    res = runner.invoke(cli.app, ["calendar", "37"])
    assert res.exit_code == 0
    assert "Y10 Q1" in res.stdout


def test_calendar_rejects_zero():
    res = runner.invoke(cli.app, ["calendar", "0"])
    assert res.exit_code == 1


def test_play_prints_quarters_and_outcome(tmp_path: Path):
    out = tmp_path / "run.json"
    res = runner.invoke(cli.app, ["play", "--quarters", "2", "--export", str(out)])
    assert res.exit_code == 0
    assert "Y1 Q2  cash=1,339,000" in res.stdout
    assert "Outcome: running after 2 quarters" in res.stdout
    assert len(json.loads(out.read_text())["quarter_logs"]) == 2


def test_play_with_bad_config(tmp_path: Path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("nonsense: 1\n")
    res = runner.invoke(cli.app, ["play", "--config", str(cfg)])
    assert res.exit_code == 1


def test_version_flag_prints_version():
    res = runner.invoke(cli.app, ["--version"])
    assert res.exit_code == 0
    assert "0.1.0" in res.stdout
