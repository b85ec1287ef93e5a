"""Tests for running scripts through an interpreter on stdin.

The Python interpreter stands in for bash where child processes do not matter.
"""

import asyncio
import sys
from pathlib import Path

import pytest

from teleshell.shell.executor import ExecResult, execute_in_bash

PYTHON = sys.executable


class TestExecuteInBash:
    @pytest.mark.asyncio
    async def test_captures_stdout(self):
        result = await execute_in_bash("print('hello')", bash_path=PYTHON)
        assert result == ExecResult(output="hello\n")
        assert result.failed is False

    @pytest.mark.asyncio
    async def test_combines_stderr(self):
        script = "import sys; sys.stderr.write('err\\n'); sys.stderr.flush()"
        result = await execute_in_bash(script, bash_path=PYTHON)
        assert "err" in result.output

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_error(self):
        result = await execute_in_bash("print('partial'); raise SystemExit(3)", bash_path=PYTHON)
        assert result.output == "partial\n"
        assert result.error == "failed to execute command: exit status 3"
        assert result.failed is True

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        result = await execute_in_bash("import time; time.sleep(10)", bash_path=PYTHON, timeout=1)
        assert result.error == "failed to execute command: timed out after 1s"

    @pytest.mark.asyncio
    async def test_missing_shell(self, tmp_path):
        result = await execute_in_bash("echo hi", bash_path=str(tmp_path / "no-such-shell"))
        assert result.failed is True
        assert result.error.startswith("failed to execute command:")
        assert result.output == ""


@pytest.mark.skipif(not Path("/bin/bash").exists(), reason="needs /bin/bash")
class TestBashChildProcesses:
    """bash runs `sleep` as a child that inherits the output pipe."""

    @pytest.mark.asyncio
    async def test_timeout_kills_children(self):
        result = await asyncio.wait_for(
            execute_in_bash("echo started\nsleep 30\n", bash_path="/bin/bash", timeout=1),
            timeout=10,
        )
        assert result.error == "failed to execute command: timed out after 1s"

    @pytest.mark.asyncio
    async def test_child_output_is_captured(self):
        result = await execute_in_bash("echo one; sh -c 'echo two'\n", bash_path="/bin/bash")
        assert result == ExecResult(output="one\ntwo\n")
