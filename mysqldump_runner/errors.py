"""
Exceptions raised by MySQL Dump Runner.
"""

from typing import Optional


class DumpError(Exception):
    """Base class for dump failures."""


class DumpExecutionError(DumpError):
    """mysqldump reported an error, or could not be started."""

    def __init__(self, stderr: str):
        super().__init__(stderr)
        self.stderr = stderr


class DumpTimeoutError(DumpError):
    """mysqldump did not finish in time and was killed."""

    def __init__(self, timeout: float, stderr: Optional[str] = None):
        super().__init__(f"mysqldump did not finish within {timeout} seconds")
        self.timeout = timeout
        self.stderr = stderr


class DumpCancelledError(DumpError):
    """The dump was cancelled and mysqldump was killed."""

    def __init__(self, message: str = "mysqldump was cancelled"):
        super().__init__(message)
