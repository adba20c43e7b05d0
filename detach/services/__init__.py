"""Application services for the detach workflow.

Services drive the external tools (expo, npm, yarn) through the command
runner and report through the console; none of them ends the process.
"""

from detach.services.errors import CommandError, ManifestError, ValidationError, WorkflowError
from detach.services.workflow import DetachWorkflow, SessionState, validate_config

__all__ = [
    # errors
    "CommandError",
    "ManifestError",
    "ValidationError",
    "WorkflowError",
    # workflow
    "DetachWorkflow",
    "SessionState",
    "validate_config",
]
