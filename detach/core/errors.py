"""Exit codes for the expo-detach command line.

The CI pipeline only distinguishes zero from non-zero, but the values below
stay stable so logs and wrappers can tell a bad input from a failing tool.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (invalid inputs, credential pairing)
    - 2: Environment error (config file missing, unreadable or invalid)
    - 3: Step error (npm, expo or yarn exited non-zero)
    - 5: I/O error (package.json unreadable, invalid or not writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    STEP_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
