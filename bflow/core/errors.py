"""Process exit codes for bflow commands.

Values are part of the CLI contract and should remain stable:
- 0: Success (including a declined confirmation)
- 1: User error (missing argument, wrong branch for the command)
- 2: Git error (a git invocation exited non-zero)
- 3: Version error (unreadable or unwritable version file)
- 4: Config error (invalid .bflow.toml)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 2
    VERSION_ERROR = 3
    CONFIG_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
