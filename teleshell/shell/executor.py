"""Run chat-supplied scripts through bash."""

from __future__ import annotations

import asyncio
import os
import signal
from dataclasses import dataclass

from loguru import logger

# Seconds to wait for the pipe to close after the process group is killed.
KILL_GRACE = 5


@dataclass
class ExecResult:
    """Combined stdout/stderr of a script plus an error description, if any."""

    output: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def _kill_group(process: asyncio.subprocess.Process) -> None:
    """Kill the shell and every child it started (they share its session)."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


async def execute_in_bash(script: str, bash_path: str = "/bin/bash", timeout: int = 300) -> ExecResult:
    """Pipe *script* into *bash_path* and capture everything it prints."""
    try:
        process = await asyncio.create_subprocess_exec(
            bash_path,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            start_new_session=True,
        )
    except OSError as e:
        logger.error(f"Failed to start {bash_path}: {e}")
        return ExecResult(error=f"failed to execute command: {e}")

    try:
        stdout, _ = await asyncio.wait_for(process.communicate(script.encode()), timeout=timeout)
    except asyncio.TimeoutError:
        _kill_group(process)
        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=KILL_GRACE)
        except asyncio.TimeoutError:
            # A child left the process group and still holds the pipe open
            logger.warning(f"Output pipe still open {KILL_GRACE}s after kill, dropping output")
            stdout = b""
        output = (stdout or b"").decode("utf-8", errors="replace")
        logger.warning(f"Command timed out after {timeout}s")
        return ExecResult(output=output, error=f"failed to execute command: timed out after {timeout}s")

    output = stdout.decode("utf-8", errors="replace")
    if process.returncode != 0:
        return ExecResult(
            output=output,
            error=f"failed to execute command: exit status {process.returncode}",
        )
    return ExecResult(output=output)
