"""Process execution and filesystem helpers."""

from .files import atomic_write_text
from .process import (
    REDACTED,
    Command,
    CommandRunner,
    MockRunner,
    ProcessError,
    SubprocessRunner,
)

__all__ = [
    # files
    "atomic_write_text",
    # process
    "REDACTED",
    "Command",
    "CommandRunner",
    "MockRunner",
    "ProcessError",
    "SubprocessRunner",
]
