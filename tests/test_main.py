# tests/test_main.py
"""
End-to-end orchestrator tests with fake AWS CLI output and scripted answers.
"""

import csv
import io
import os

import pytest
from rich.console import Console

import main as app
from prompt import Prompter

CRITICAL = {
    "awsAccountId": "111122223333",
    "severity": "CRITICAL",
    "packageVulnerabilityDetails": {"vulnerabilityId": "CVE-2024-1111"},
    "remediation": {"recommendation": {"text": "Upgrade, then restart"}},
}
HIGH = {"awsAccountId": "111122223333", "severity": "HIGH",
        "packageVulnerabilityDetails": {"vulnerabilityId": "CVE-2024-2222"}}


@pytest.fixture
def profiles(aws_home):
    (aws_home / "credentials").write_text("[dev]\n[prod]\n")
    (aws_home / "config").write_text("[profile stage]\nregion = eu-west-1\n")
    return aws_home


def make_prompter(*lines):
    out = io.StringIO()
    stream = io.StringIO("".join(line + "\n" for line in lines))
    return Prompter(console=Console(file=out, width=120), stream=stream), out


def test_full_session_writes_report(profiles, cli, runner, tmp_path):
    runner.add(["ec2", "describe-regions"], stdout=["us-east-1", "eu-west-1"])
    runner.add(["inspector2", "--max-items"], stdout={"findings": []})
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": [CRITICAL]})
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": [HIGH]})
    # profile 3 = stage, region 1 = eu-west-1 (default), scenario 2
    prompter, out = make_prompter("3", "1", "2")
    report_dir = tmp_path / "reports"

    path = app.run_report(cli, prompter, report_dir=str(report_dir))

    assert path is not None and os.path.dirname(path) == str(report_dir)
    assert os.path.basename(path).startswith("aws_inspector_all_active_findings_")
    with open(path, encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert [r[2] for r in rows[1:]] == ["CVE-2024-1111", "CVE-2024-2222"]
    assert rows[1][6] == "Upgrade; then restart"

    text = out.getvalue()
    assert "1. eu-west-1 (default)" in text
    assert "Total findings: 2" in text
    assert all("--region" in c and "eu-west-1" in c for c in runner.calls[1:])
    assert all("stage" in c for c in runner.calls)


def test_no_profiles(aws_home, cli, runner):
    prompter, out = make_prompter()
    assert app.run_report(cli, prompter) is None
    assert "No AWS profiles found" in out.getvalue()
    assert runner.calls == []


def test_inspector_unavailable_stops(profiles, cli, runner):
    runner.add(["ec2"], returncode=255)
    runner.add(["inspector2"], stderr="Could not connect to the endpoint URL", returncode=255)
    prompter, out = make_prompter("1", "2")

    assert app.run_report(cli, prompter) is None
    assert "AWS Inspector is not available in the" in out.getvalue()
    assert len(runner.calls) == 2


def test_no_findings(profiles, cli, runner, tmp_path):
    runner.add(["ec2"], stdout=["us-east-1"])
    runner.add(["inspector2", "--max-items"], stdout={"findings": []})
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": []})
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": []})
    prompter, out = make_prompter("1", "1", "3")

    assert app.run_report(cli, prompter, report_dir=str(tmp_path)) is None
    assert "No findings to export." in out.getvalue()
    assert os.listdir(tmp_path) == [".aws"]


def test_presets_skip_prompts(profiles, cli, runner, tmp_path):
    runner.add(["ec2"], stdout=["us-east-1", "eu-west-1"])
    runner.add(["inspector2", "--max-items"], stderr="AccessDeniedException", returncode=254)
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": [CRITICAL]})
    runner.add(["inspector2", "--filter-criteria"], stdout={"findings": []})
    prompter, _ = make_prompter()

    path = app.run_report(cli, prompter, report_dir=str(tmp_path / "out"),
                          profile="prod", region="us-east-1", scenario="all_closed")

    assert "aws_inspector_all_closed_findings_" in path
    assert runner.calls[-1][-4:] == ["--profile", "prod", "--region", "us-east-1"]


def test_main_handles_interrupt(monkeypatch, capsys):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    closed = []
    monkeypatch.setattr(app, "run_report", interrupted)
    monkeypatch.setattr(app.AwsCli, "close", lambda self: closed.append("cli"))
    monkeypatch.setattr(app.Prompter, "close", lambda self: closed.append("prompt"))

    assert app.main([]) == 0
    assert "Process interrupted. Cleaning up..." in capsys.readouterr().out
    assert sorted(closed) == ["cli", "prompt"]


def test_main_logs_errors(monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise RuntimeError("Could not determine home directory")

    monkeypatch.setattr(app, "run_report", broken)
    assert app.main(["--log-level", "DEBUG"]) == 0
    assert "An error occurred: Could not determine home directory" in caplog.text


def test_unknown_preset_warns_before_menu(profiles, cli, runner):
    runner.add(["ec2"], returncode=255)
    runner.add(["inspector2"], stderr="Could not connect to the endpoint URL", returncode=255)
    prompter, out = make_prompter("2", "1")

    app.run_report(cli, prompter, profile="nope", region="us-east-1")

    text = out.getvalue()
    warning = text.index("Profile 'nope' is not available")
    assert warning < text.index("Available AWS profiles:")
    assert "Available AWS regions:" not in text
    assert all("prod" in c for c in runner.calls)
