"""
Data models for MySQL Dump Runner.
"""

from dataclasses import dataclass, field
from typing import Optional

# Option value marking a bare ``--name`` flag.
BOOLEAN_FLAG = None


@dataclass(frozen=True)
class DumpConfiguration:
    """Immutable snapshot of everything needed for one mysqldump invocation.

    ``options`` and ``tables`` are ordered ``(name, value)`` pairs; their order
    is the order the arguments are emitted in.
    """
    database: Optional[str] = None
    options: tuple[tuple[str, Optional[str]], ...] = ()
    tables: tuple[tuple[str, Optional[str]], ...] = ()

    @property
    def table_names(self) -> list[str]:
        return [name for name, _ in self.tables]

    def has_option(self, name: str) -> bool:
        return any(key == name for key, _ in self.options)

    def get_option(self, name: str) -> Optional[str]:
        """Get an option value; bare flags and missing options both return None."""
        for key, value in self.options:
            if key == name:
                return value
        return None


@dataclass
class ProcessOutput:
    """Captured result of a finished process."""
    returncode: int
    stdout: str = ""
    stderr: str = field(default="", repr=False)
