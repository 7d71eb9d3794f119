"""Process exit codes for the tagtrain CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes returned by CLI commands.

    The numeric values are part of the CLI contract (CI jobs branch on them):
    - 0: Success
    - 1: User error (bad tag, bad manifest, bad trigger, bad config)
    - 2: Environment error (missing tool, not a git checkout)
    - 3: Build error (changelog generation failed)
    - 4: Network error (registry or release host rejected the call)
    - 5: I/O error (manifest or env file not readable/writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
