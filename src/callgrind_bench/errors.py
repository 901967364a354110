from __future__ import annotations

import errno

# 127 follows the shell convention for "command not found".
EXIT_USAGE = 2
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127


class HarnessError(Exception):
    """Base class for failures detected by the harness itself (never by the target)."""

    exit_code = 1


class UsageError(HarnessError):
    exit_code = EXIT_USAGE


class EngineNotFound(HarnessError):
    exit_code = EXIT_NOT_FOUND


class LaunchFailure(HarnessError):
    """The child process could not be started; carries the underlying OS error."""

    def __init__(self, message: str, *, os_error: OSError | None = None) -> None:
        super().__init__(message)
        self.os_error = os_error
        self.exit_code = _exit_code_for_os_error(os_error)


def _exit_code_for_os_error(e: OSError | None) -> int:
    if e is None:
        return 1
    if e.errno == errno.ENOENT:
        return EXIT_NOT_FOUND
    if e.errno in (errno.EACCES, errno.EPERM, errno.ENOEXEC):
        return EXIT_CANNOT_EXECUTE
    return 1
