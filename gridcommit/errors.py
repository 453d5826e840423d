"""
Error kinds raised by gridcommit.

Every error is fatal to the current run. They are raised where the problem is
detected, travel unchanged through the batch driver and are only caught by
the command line entry point, which prints them and exits non-zero.
"""


class GridCommitError(Exception):
    """Base class for every error this package raises."""


class ConfigurationError(GridCommitError):
    """Invalid or missing input: bad date string, missing workbook, unknown sheet."""


class RangeError(GridCommitError, ValueError):
    """A grid column index (or day offset) outside the supported range."""


class ExternalToolError(GridCommitError):
    """git could not be run or exited non-zero."""

    def __init__(self, cmd, returncode, output=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        detail = output.strip()
        if returncode is None:
            msg = f"`{' '.join(self.cmd)}` could not be run"
        else:
            msg = f"`{' '.join(self.cmd)}` exited with status {returncode}"
        if detail:
            msg += f":\n{detail}"
        super().__init__(msg)


class FileSystemError(GridCommitError):
    """A directory or file could not be created."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Cannot write {path}: {reason}")
