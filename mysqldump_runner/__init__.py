"""
MySQL Dump Runner
=================
Builds safe mysqldump command lines and runs them:
- Fluent builder for connection settings, options and tables
- Per-table WHERE filters
- Arguments passed directly to the process, never through a shell
- Separate stdout/stderr capture with password-warning filtering
- Timeouts and cancellation
"""

from .builder import MysqldumpBuilder
from .config import ConfigLoader
from .errors import DumpCancelledError, DumpError, DumpExecutionError, DumpTimeoutError
from .executor import CommandExecutor, DumpTask, build_arguments, filter_stderr
from .main import main
from .models import BOOLEAN_FLAG, DumpConfiguration, ProcessOutput
from .runner import ProcessRunner
from .utils import format_command_display, mask_arguments, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "CommandExecutor",
    "ConfigLoader",
    "DumpTask",
    "MysqldumpBuilder",
    "ProcessRunner",
    # Models
    "BOOLEAN_FLAG",
    "DumpConfiguration",
    "ProcessOutput",
    # Errors
    "DumpCancelledError",
    "DumpError",
    "DumpExecutionError",
    "DumpTimeoutError",
    # Utilities
    "build_arguments",
    "filter_stderr",
    "format_command_display",
    "mask_arguments",
    "setup_logging",
]
