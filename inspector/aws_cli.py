# inspector/aws_cli.py
"""
AWS CLI process wrapper.

- AwsCli owns the external-process interface; construct it once and close it when done.
- run() builds `aws <command> [--profile P] [--region R]`, captures output and parses JSON.
- is_inspector_available() issues a minimal inspector2 call to see if the service answers.
"""

import json
import logging
import shlex
import subprocess
from json import JSONDecodeError
from typing import Any, Callable, List, Optional, Sequence, Union

from config import AWS_CLI_EXECUTABLE, AWS_CLI_MAX_OUTPUT_BYTES

logger = logging.getLogger(__name__)

# Error text that means the service exists but the caller lacks permission
ACCESS_ERROR_MARKERS = ("AccessDenied", "UnauthorizedOperation")


class AwsCliError(RuntimeError):
    """Raised when an AWS CLI invocation fails or prints something that is not JSON."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class AwsCli:
    """
    Handle to the AWS CLI.

    `runner` defaults to subprocess.run and is replaceable for offline use.
    """

    def __init__(self, executable: str = AWS_CLI_EXECUTABLE,
                 max_output_bytes: int = AWS_CLI_MAX_OUTPUT_BYTES,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.executable = executable
        self.max_output_bytes = max_output_bytes
        self._runner = runner
        self._closed = False

    def __enter__(self) -> "AwsCli":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            logger.debug("Releasing AWS CLI handle")
            self._closed = True

    def build_command(self, command: Union[str, Sequence[str]],
                      profile: Optional[str] = None,
                      region: Optional[str] = None) -> List[str]:
        args = shlex.split(command) if isinstance(command, str) else list(command)
        cmd = [self.executable] + args
        if profile:
            cmd += ["--profile", profile]
        if region:
            cmd += ["--region", region]
        return cmd

    def run(self, command: Union[str, Sequence[str]],
            profile: Optional[str] = None,
            region: Optional[str] = None) -> Any:
        """
        Run an AWS CLI command and return its parsed JSON output.

        Raises AwsCliError on a non-zero exit, oversized output or output that is not JSON.
        """
        if self._closed:
            raise AwsCliError("AWS CLI handle is closed")

        cmd = self.build_command(command, profile=profile, region=region)
        logger.debug("Executing: %s", " ".join(shlex.quote(c) for c in cmd))

        try:
            proc = self._runner(cmd, capture_output=True, check=False)
        except FileNotFoundError as e:
            raise AwsCliError(f"AWS CLI error: executable not found: {self.executable}") from e
        except OSError as e:
            raise AwsCliError(f"AWS CLI error: could not start {self.executable}: {e}") from e

        stdout = proc.stdout or b""
        if len(stdout) > self.max_output_bytes:
            raise AwsCliError(
                f"AWS CLI error: output exceeded {self.max_output_bytes} bytes",
                returncode=proc.returncode,
            )
        stderr = _decode(proc.stderr).strip()

        if proc.returncode != 0:
            logger.error("AWS CLI error: %s", stderr)
            raise AwsCliError(
                f"AWS CLI error: command failed with exit code {proc.returncode}: {stderr}",
                returncode=proc.returncode,
                stderr=stderr,
            )

        if stderr:
            logger.warning("AWS CLI warning: %s", stderr)

        try:
            return json.loads(_decode(stdout))
        except JSONDecodeError as e:
            raise AwsCliError(f"Failed to parse AWS CLI output: {e.msg} (line {e.lineno} column {e.colno})") from e


def _decode(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def is_access_error(error: Exception) -> bool:
    text = str(error)
    return any(marker in text for marker in ACCESS_ERROR_MARKERS)


def is_inspector_available(cli: AwsCli, region: str, profile: Optional[str]) -> bool:
    """
    Return True if inspector2 answers in the region.

    An access-denied style failure still counts as available: the service
    exists, the caller just lacks permission.
    """
    try:
        cli.run(["inspector2", "list-findings", "--max-results", "1", "--max-items", "1"],
                profile=profile, region=region)
        return True
    except AwsCliError as e:
        if is_access_error(e):
            logger.info("Inspector answered with an access error in %s; treating as available", region)
            return True
        logger.info("Inspector not reachable in %s: %s", region, e)
        return False
