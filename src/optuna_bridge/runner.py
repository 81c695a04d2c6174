"""Command runner for the external optuna CLI."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def run_command(args: Sequence[str], timeout: Optional[float] = None) -> str:
    """Run a command and return everything it wrote to stdout.

    Arguments are passed straight to the process as a list, no shell is
    involved. Failures are not raised: a non-zero exit returns whatever
    stdout was produced, and a launch failure or timeout returns "".

    Args:
        args: Executable followed by its arguments
        timeout: Seconds to wait before killing the process (None blocks)

    Returns:
        Captured stdout text
    """
    cmd = [str(arg) for arg in args]
    logger.debug(f"Running: {cmd}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout} seconds: {cmd[:2]}")
        return ""
    except OSError as e:
        logger.error(f"Failed to launch {cmd[0]}: {e}")
        return ""

    if result.returncode != 0:
        logger.warning(
            f"{' '.join(cmd[:2])} exited with code {result.returncode}: "
            f"{result.stderr.strip()}"
        )

    return result.stdout


class CommandRunner:
    """Runs optuna CLI argument lists with a shared default timeout."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def __call__(self, args: Sequence[str]) -> str:
        return run_command(args, timeout=self.timeout)
