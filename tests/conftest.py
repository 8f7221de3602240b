# tests/conftest.py
"""
Shared fixtures.

- FakeRunner stands in for subprocess.run so AwsCli can be tested offline.
- Each response is matched against the AWS CLI subcommand words in the call.
"""

import json
import subprocess

import pytest

from inspector.aws_cli import AwsCli


class FakeRunner:
    def __init__(self):
        self.calls = []
        self._responses = []

    def add(self, match, stdout=None, stderr="", returncode=0):
        """
        Register a response for calls containing every word in `match`.
        Dict/list stdout is JSON-encoded.
        """
        if isinstance(stdout, (dict, list)):
            stdout = json.dumps(stdout)
        self._responses.append((tuple(match), stdout or "", stderr, returncode))

    def __call__(self, cmd, capture_output=True, check=False):
        self.calls.append(cmd)
        for i, (match, stdout, stderr, returncode) in enumerate(self._responses):
            if all(word in cmd for word in match):
                # One-shot: later responses for the same command can differ
                self._responses.pop(i)
                return subprocess.CompletedProcess(
                    cmd, returncode, stdout=stdout.encode("utf-8"), stderr=stderr.encode("utf-8")
                )
        raise AssertionError(f"unexpected AWS CLI call: {cmd}")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def cli(runner):
    with AwsCli(runner=runner) as handle:
        yield handle


@pytest.fixture
def aws_home(tmp_path, monkeypatch):
    """
    A home directory with an .aws folder; botocore is pointed at the same files.
    """
    aws_dir = tmp_path / ".aws"
    aws_dir.mkdir()
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("USERPROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(aws_dir / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(aws_dir / "credentials"))
    return aws_dir
