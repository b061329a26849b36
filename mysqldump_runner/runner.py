"""
Subprocess execution for MySQL Dump Runner.
"""

import logging
import subprocess
import threading
import time
from typing import Optional

from .errors import DumpCancelledError, DumpExecutionError, DumpTimeoutError
from .models import ProcessOutput


class ProcessRunner:
    """Runs a command to completion and captures stdout and stderr separately."""

    DEFAULT_POLL_INTERVAL = 0.1
    DEFAULT_ENCODING = 'utf-8'

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL, encoding: str = DEFAULT_ENCODING):
        self.poll_interval = poll_interval
        self.encoding = encoding

    def run(
        self,
        args: list[str],
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ProcessOutput:
        """
        Run a command and wait for it to exit.

        Args:
            args: Program followed by its arguments. Never passed through a shell.
            timeout: Seconds to wait before killing the process. None waits forever.
            cancel_event: When set, the process is killed and the run is cancelled.

        Returns:
            ProcessOutput with exit code and both captured streams.

        Raises:
            DumpExecutionError: The program could not be started.
            DumpTimeoutError: The timeout expired.
            DumpCancelledError: cancel_event was set.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise DumpCancelledError("Dump cancelled before it was started")

        process = self._spawn(args)
        deadline = time.monotonic() + timeout if timeout is not None else None

        # communicate() reads both pipes concurrently and may be retried after
        # TimeoutExpired without losing output.
        with process:
            while True:
                wait = self.poll_interval if cancel_event is not None else None
                if deadline is not None:
                    remaining = max(deadline - time.monotonic(), 0)
                    wait = remaining if wait is None else min(wait, remaining)

                try:
                    stdout, stderr = process.communicate(timeout=wait)
                    break
                except subprocess.TimeoutExpired:
                    if cancel_event is not None and cancel_event.is_set():
                        self._kill(process)
                        raise DumpCancelledError()
                    if deadline is not None and time.monotonic() >= deadline:
                        _, stderr = self._kill(process)
                        raise DumpTimeoutError(timeout, stderr)

        logging.debug(f"Process {process.pid} exited with code {process.returncode}")
        return ProcessOutput(returncode=process.returncode, stdout=stdout, stderr=stderr)

    def _spawn(self, args: list[str]) -> subprocess.Popen:
        """Start the process with piped output streams."""
        try:
            return subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding=self.encoding,
                errors='replace'
            )
        except FileNotFoundError as e:
            raise DumpExecutionError(
                f"Dump command '{args[0]}' not found. Ensure the MySQL client tools are installed."
            ) from e
        except OSError as e:
            raise DumpExecutionError(f"Failed to start '{args[0]}': {e}") from e

    def _kill(self, process: subprocess.Popen) -> tuple[str, str]:
        """Kill the process and drain whatever is left in its pipes."""
        logging.warning(f"Killing process {process.pid}")
        process.kill()
        return process.communicate()
