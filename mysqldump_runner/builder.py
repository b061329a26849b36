"""
Fluent builder for mysqldump configurations.
"""

from typing import Any, Optional, Union

from .config import ConfigLoader
from .executor import CommandExecutor
from .models import BOOLEAN_FLAG, DumpConfiguration

DEFAULT_PORT = 3306


class MysqldumpBuilder:
    """Collects connection settings, options and tables for a dump.

    Every setter returns the builder, so calls can be chained::

        output = (
            MysqldumpBuilder()
            .set_host('db.internal')
            .set_user('backup')
            .set_database('shop')
            .add_table('orders', 'created_at > NOW() - INTERVAL 1 DAY')
            .hex_blob()
            .dump()
        )

    Setting an option or table that is already present replaces its value and
    keeps its original position.
    """

    def __init__(self):
        self._database: Optional[str] = None
        self._options: dict[str, Optional[str]] = {'port': str(DEFAULT_PORT)}
        self._tables: dict[str, Optional[str]] = {}

    @classmethod
    def from_config(cls, config: ConfigLoader, database: Optional[str] = None) -> "MysqldumpBuilder":
        """Create a builder from a loaded YAML configuration.

        ``database`` overrides the configured database.
        """
        builder = cls()
        connection = config.get_connection()
        for key in ('host', 'port', 'user', 'password'):
            if connection.get(key) is not None:
                builder.set_option(key, _render_value(connection[key]))

        database = database or config.get_database()
        builder.set_database(None if database is None else _render_value(database))

        for name, value in config.get_options().items():
            builder.set_option(name, None if value is None else _render_value(value))

        for table in config.get_tables():
            where = table['where']
            builder.add_table(_render_value(table['name']), None if where is None else _render_value(where))

        return builder

    def set_host(self, host: str) -> "MysqldumpBuilder":
        return self.set_option('host', host)

    def set_port(self, port: Union[int, str]) -> "MysqldumpBuilder":
        return self.set_option('port', port)

    def set_user(self, user: str) -> "MysqldumpBuilder":
        return self.set_option('user', user)

    def set_password(self, password: str) -> "MysqldumpBuilder":
        return self.set_option('password', password)

    def set_database(self, database: Optional[str]) -> "MysqldumpBuilder":
        """Set the database to dump. Left unset, all databases are dumped."""
        self._database = database
        return self

    def add_table(self, table: str, where: Optional[str] = None) -> "MysqldumpBuilder":
        """Dump only the given table, optionally filtered by a WHERE condition."""
        self._tables[table] = where
        return self

    def set_option(self, name: str, value: Any = BOOLEAN_FLAG) -> "MysqldumpBuilder":
        """Set any mysqldump option. A value of None gives a bare ``--name`` flag."""
        self._options[name] = value if value is BOOLEAN_FLAG else str(value)
        return self

    def hex_blob(self) -> "MysqldumpBuilder":
        return self.set_option('hex-blob')

    def complete_insert(self) -> "MysqldumpBuilder":
        return self.set_option('complete-insert')

    def set_gtid_purged(self, value: str) -> "MysqldumpBuilder":
        return self.set_option('set-gtid-purged', value)

    def disable_extended_insert(self) -> "MysqldumpBuilder":
        return self.set_option('skip-extended-insert', 'false')

    def disable_lock_table(self) -> "MysqldumpBuilder":
        return self.set_option('lock-tables', 'false')

    def without_comments(self) -> "MysqldumpBuilder":
        return self.set_option('skip-comments')

    def without_add_lock(self) -> "MysqldumpBuilder":
        return self.set_option('skip-add-locks')

    def without_create_db(self) -> "MysqldumpBuilder":
        return self.set_option('no-create-db')

    def without_create_table(self) -> "MysqldumpBuilder":
        return self.set_option('no-create-info')

    def without_create_info(self) -> "MysqldumpBuilder":
        return self.set_option('no-create-info')

    def without_table_data(self) -> "MysqldumpBuilder":
        return self.set_option('no-data')

    def without_set_charset(self) -> "MysqldumpBuilder":
        return self.set_option('skip-set-charset')

    def build(self) -> DumpConfiguration:
        """Snapshot the current state. Later changes to the builder don't affect it."""
        return DumpConfiguration(
            database=self._database,
            options=tuple(self._options.items()),
            tables=tuple(self._tables.items())
        )

    def dump(self, executor: Optional[CommandExecutor] = None, timeout: Optional[float] = None) -> str:
        """Build the configuration and run mysqldump, returning its output."""
        executor = executor or CommandExecutor()
        return executor.execute(self.build(), timeout=timeout)


def _render_value(value: Any) -> str:
    """Render a YAML scalar as a mysqldump option value."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
