"""Format a command result as annotated reply chunks."""

from __future__ import annotations

from teleshell.segment import LimitPolicy, MessageWriter, Segmentation
from teleshell.shell.executor import ExecResult


def render_result(result: ExecResult, limits: LimitPolicy | None = None) -> Segmentation:
    """Lay out *result* as ``Output:`` / ``Error:`` sections, bold headers and code bodies."""
    writer = MessageWriter(limits)
    writer.write("Output:\n", "bold")
    writer.write(result.output, "code")
    if result.failed:
        writer.write("\nError:\n", "bold")
        writer.write(result.error, "code")
    return writer.segmentation()
