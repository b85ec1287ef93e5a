"""Shell command execution and reply formatting."""

from teleshell.shell.executor import ExecResult, execute_in_bash
from teleshell.shell.report import render_result

__all__ = ["ExecResult", "execute_in_bash", "render_result"]
