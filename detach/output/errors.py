"""Error presentation utilities.

Centralized error formatting and exit code mapping for the command line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from detach.core.errors import ErrorCode
from detach.output.console import Style
from detach.services.errors import CommandError, ManifestError, ValidationError, WorkflowError

if TYPE_CHECKING:
    from detach.output.console import ConsoleProtocol

__all__ = ["print_workflow_error", "workflow_error_exit_code"]


def print_workflow_error(error: WorkflowError, console: ConsoleProtocol) -> None:
    """Print a workflow error to the console."""
    match error:
        case ValidationError(message=message, hint=hint):
            console.error(f"Input validation error: {message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case CommandError(step=step, message=message, hint=hint):
            console.error(f"{step} step failed: {message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case ManifestError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)


def workflow_error_exit_code(error: WorkflowError) -> int:
    """Get exit code for a workflow error."""
    match error:
        case ValidationError():
            return int(ErrorCode.USER_ERROR)
        case CommandError():
            return int(ErrorCode.STEP_ERROR)
        case ManifestError():
            return int(ErrorCode.IO_ERROR)
