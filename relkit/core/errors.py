"""Process exit codes.

Every command maps its failure onto one of these values, so scripts and CI
jobs can tell a bad argument apart from a missing tag or a failed compile.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for relkit commands.

    The numeric values are part of the command-line contract:
    - 0: Success
    - 1: User error (malformed version, unknown bump kind, no version field)
    - 2: Environment error (no project root, bad config, unparseable remote)
    - 3: Build error (the compiler exited non-zero)
    - 4: Network error (archive unreachable or tag missing)
    - 5: I/O error (manifest, counter or formula could not be read/written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
