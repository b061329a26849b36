"""
Command line serialization and execution of mysqldump.
"""

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Optional

from .errors import DumpCancelledError, DumpExecutionError
from .models import BOOLEAN_FLAG, DumpConfiguration
from .runner import ProcessRunner
from .utils import format_command_display

DEFAULT_BINARY = 'mysqldump'
ALL_DATABASES_FLAG = '--all-databases'
PASSWORD_WARNING = 'mysqldump: [Warning] Using a password on the command line interface can be insecure.'


def build_arguments(config: DumpConfiguration) -> list[str]:
    """
    Serialize a configuration into mysqldump arguments.

    Order is: options as inserted, then the database (or --all-databases),
    then each table followed by its own --where clause when it has one.
    """
    args = []
    for name, value in config.options:
        if value is BOOLEAN_FLAG:
            args.append(f"--{name}")
        else:
            args.append(f"--{name}={value}")

    if config.database:
        args.append(config.database)
    else:
        args.append(ALL_DATABASES_FLAG)

    for table, condition in config.tables:
        args.append(table)
        if condition:
            args.append(f"--where={condition}")

    return args


def filter_stderr(stderr: str) -> str:
    """Drop the password-on-command-line warning and surrounding whitespace."""
    return stderr.replace(PASSWORD_WARNING, '').strip()


class DumpTask:
    """A dump running in the background that can be cancelled."""

    def __init__(self, future: Future, cancel_event: threading.Event):
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Request cancellation; a running mysqldump process is killed."""
        self._cancel_event.set()
        self._future.cancel()

    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> str:
        """Wait for the dump output. Re-raises whatever the dump raised."""
        try:
            return self._future.result(timeout)
        except CancelledError as e:
            raise DumpCancelledError("Dump cancelled before it was started") from e


class CommandExecutor:
    """Runs mysqldump for a DumpConfiguration and classifies the result."""

    def __init__(self, binary: str = DEFAULT_BINARY, runner: Optional[ProcessRunner] = None):
        self.binary = binary
        self.runner = runner or ProcessRunner()

    def command(self, config: DumpConfiguration) -> list[str]:
        """Full argument vector, program name first."""
        return [self.binary, *build_arguments(config)]

    def execute(
        self,
        config: DumpConfiguration,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """
        Run mysqldump and return its standard output.

        Args:
            config: Configuration to dump.
            timeout: Seconds before the process is killed. None waits forever.
            cancel_event: Event that cancels the dump when set.

        Returns:
            The dump payload exactly as mysqldump wrote it.

        Raises:
            DumpExecutionError: mysqldump wrote anything to stderr besides the
                password warning.
            DumpTimeoutError: The timeout expired.
            DumpCancelledError: The dump was cancelled.
        """
        args = self.command(config)
        logging.info(f"Running: {format_command_display(args)}")

        output = self.runner.run(args, timeout=timeout, cancel_event=cancel_event)

        error = filter_stderr(output.stderr)
        if error:
            logging.error(f"mysqldump failed with exit code {output.returncode}: {error}")
            raise DumpExecutionError(error)

        if output.returncode != 0:
            logging.warning(f"mysqldump exited with code {output.returncode} but reported no error")

        logging.info(f"Dump finished: {len(output.stdout)} characters of output")
        return output.stdout

    def submit(self, config: DumpConfiguration, timeout: Optional[float] = None) -> DumpTask:
        """Start execute() on a worker thread and return a cancellable task."""
        cancel_event = threading.Event()
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix='mysqldump')
        try:
            future = pool.submit(self.execute, config, timeout, cancel_event)
        finally:
            pool.shutdown(wait=False)
        return DumpTask(future, cancel_event)
