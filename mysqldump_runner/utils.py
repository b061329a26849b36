"""
Utility functions for MySQL Dump Runner.
"""

import logging
import shlex
import sys
from pathlib import Path
from typing import Any, Optional

MASK = '****'
SECRET_OPTIONS = ('--password=',)


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    # stdout may carry the dump itself, so log records go to stderr
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def mask_arguments(args: list[str]) -> list[str]:
    """Replace secret option values so a command can be logged."""
    masked = []
    for arg in args:
        for prefix in SECRET_OPTIONS:
            if arg.startswith(prefix):
                arg = prefix + MASK
                break
        masked.append(arg)
    return masked


def format_command_display(args: list[str]) -> str:
    """Format a command for display, with secrets masked."""
    return shlex.join(mask_arguments(args))


def resolve_output_path(output_settings: dict[str, Any], timestamp: str) -> Optional[Path]:
    """
    Work out where the dump should be written.

    Returns None when no output file is configured (dump goes to stdout).
    """
    output_file = output_settings.get('file')
    if not output_file:
        return None

    path = Path(output_file)
    if output_settings.get('timestamp_suffix', False):
        path = path.with_name(f"{path.stem}_{timestamp}{path.suffix}")
    if output_settings.get('compress', False):
        path = Path(str(path) + '.gz')
    return path
