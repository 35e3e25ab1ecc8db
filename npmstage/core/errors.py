"""Error codes for CLI exit status.

Stable process exit codes shared by every command.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing or invalid version input)
    - 2: Environment error (invalid configuration)
    - 3: Verification error (staged tree is inconsistent)
    - 5: I/O error (template unreadable, copy or write failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    VERIFY_ERROR = 3
    IO_ERROR = 5
