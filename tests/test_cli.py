"""Tests for CLI functionality."""

from __future__ import annotations

import io
import json

import pytest

from ecobot import cli


def _feed(lines):
    remaining = list(lines)

    def _input(prompt: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


@pytest.fixture(autouse=True)
def _no_browser(monkeypatch):
    opened: list[str] = []
    monkeypatch.setattr(cli, "open_share_link", lambda url: opened.append(url) or True)
    return opened


def test_cli_main_help(capsys):
    """argparse exits with 0 for --help."""
    result = cli.main(["--help"])
    assert result == 0

    captured = capsys.readouterr()
    assert "usage:" in captured.out.lower()
    assert "--export" in captured.out


def test_cli_main_invalid_args():
    assert cli.main(["--version"]) == 1


def test_cli_unknown_log_level(capsys):
    assert cli.main(["--log-level", "chatty"], input_func=_feed([])) == 1
    assert "Unknown log level" in capsys.readouterr().err


def test_cli_eof_immediately_prints_greeting():
    out = io.StringIO()
    assert cli.main([], input_func=_feed([]), output=out) == 0
    text = out.getvalue()
    assert text.startswith("EcoBot: Hi! I'm EcoBot.")
    assert "[1] Individual  [2] Company" in text


def test_cli_individual_flow_with_buttons():
    out = io.StringIO()
    answers = ["1", "300", "12", "50", "1", "10", "2", "5", "2", "/quit"]

    assert cli.main(["--no-delay"], input_func=_feed(answers), output=out) == 0

    text = out.getvalue()
    assert "You: Individual" in text
    assert "[1] Petrol  [2] Diesel" in text
    assert "You: petrol" in text
    assert "You: long" in text
    assert "Your annual carbon footprint is 14.64 tons of CO2!" in text
    assert "[ 14.64 tons CO2/year ]" in text
    assert "Mindful Flying" in text


def test_cli_invalid_number_is_silent():
    out = io.StringIO()
    cli.main(["--no-delay"], input_func=_feed(["company", "lots", ""]), output=out)
    text = out.getvalue()
    assert "You: lots" not in text
    assert text.count("How many kWh does your company consume per month?") == 1


def test_cli_company_flow_exports_report(tmp_path):
    out = io.StringIO()
    target = tmp_path / "report.json"
    answers = ["Company", "1000", "100", "20", "10", "metro", "200", "5", "short", "50"]

    assert (
        cli.main(
            ["--no-delay", "--export", str(target)],
            input_func=_feed(answers),
            output=out,
        )
        == 0
    )

    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["kind"] == "company"
    assert data["answers"]["commute_mode"] == "train"
    assert data["answers"]["flight_haul"] == "short"
    assert f"Report saved to {target}" in out.getvalue()


def test_cli_share_and_reset(_no_browser):
    out = io.StringIO()
    answers = ["2", "0", "0", "0", "0", "1", "0", "0", "1", "0", "/share", "/reset"]

    cli.main(["--no-delay"], input_func=_feed(answers), output=out)

    text = out.getvalue()
    assert "Share your impact: https://twitter.com/intent/tweet?text=" in text
    assert len(_no_browser) == 1
    assert "0.00" in _no_browser[0]
    # the greeting is printed again after a reset
    assert text.count("EcoBot: Hi! I'm EcoBot.") == 2


def test_cli_share_before_finishing():
    out = io.StringIO()
    cli.main([], input_func=_feed(["/share"]), output=out)
    assert "Finish the questions first" in out.getvalue()


def test_cli_bad_factors_file(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("ECOBOT_FACTORS_FILE", str(tmp_path / "missing.json"))
    assert cli.main([], input_func=_feed([])) == 1
    assert "ECOBOT_FACTORS_FILE not found" in capsys.readouterr().err


@pytest.mark.parametrize("line", ["²", "٣"])
def test_cli_non_ascii_digits_fall_back_to_default_choice(line, tmp_path):
    out = io.StringIO()
    target = tmp_path / "report.json"
    answers = [line, "0", "0", "0", line, "0", line, "0", "0"]

    assert (
        cli.main(
            ["--no-delay", "--export", str(target)],
            input_func=_feed(answers),
            output=out,
        )
        == 0
    )

    assert out.getvalue().count(f"You: {line}") == 3
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["kind"] == "individual"
    assert data["answers"]["fuel_type"] == "petrol"
    assert data["answers"]["flight_haul"] == "short"


def test_cli_open_share_after_results(_no_browser):
    out = io.StringIO()
    answers = ["2", "0", "0", "0", "0", "1", "0", "0", "1", "0"]

    assert cli.main(["--no-delay", "--open-share"], input_func=_feed(answers), output=out) == 0

    assert len(_no_browser) == 1
    assert "Share your impact: https://twitter.com/intent/tweet?text=" in out.getvalue()


def test_cli_without_open_share_opens_nothing(_no_browser):
    answers = ["2", "0", "0", "0", "0", "1", "0", "0", "1", "0"]
    cli.main(["--no-delay"], input_func=_feed(answers), output=io.StringIO())
    assert _no_browser == []


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


def test_cli_json_logs_flag(capsys):
    cli.main(
        ["--json-logs", "--log-level", "INFO"],
        input_func=_feed(["company"]),
        output=io.StringIO(),
    )

    records = _json_lines(capsys.readouterr().err)
    selected = [r for r in records if r["message"] == "Respondent kind selected"]
    assert selected
    assert selected[0]["context"]["kind"] == "company"


def test_cli_json_logs_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("ECOBOT_LOG_JSON", "1")
    monkeypatch.setenv("ECOBOT_LOG_LEVEL", "info")

    cli.main([], input_func=_feed(["1"]), output=io.StringIO())

    records = _json_lines(capsys.readouterr().err)
    assert any(r["logger"] == "ecobot.sequencer" for r in records)
