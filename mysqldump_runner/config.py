"""
Configuration loading for MySQL Dump Runner.
"""

import os
import re
from typing import Any, Optional

import yaml


class ConfigLoader:
    """Loads dump configuration from a YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file '{self.config_path}' must contain a mapping")

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_connection(self) -> dict[str, Any]:
        """Get host, port, user and password settings."""
        return self.config.get('connection') or {}

    def get_database(self) -> Optional[str]:
        """Get the database to dump. None means all databases."""
        database = self.config.get('database')
        return str(database) if database not in (None, '') else None

    def get_options(self) -> dict[str, Any]:
        """Get extra mysqldump options, in file order."""
        return self.config.get('options') or {}

    def get_tables(self) -> list[dict[str, Any]]:
        """Get tables to dump, normalized to {'name': ..., 'where': ...} entries."""
        tables = []
        for entry in self.config.get('tables') or []:
            if isinstance(entry, dict):
                if 'name' not in entry:
                    raise ValueError(f"Table entry without a name: {entry}")
                where = entry.get('where')
                tables.append({'name': str(entry['name']), 'where': None if where is None else str(where)})
            else:
                tables.append({'name': str(entry), 'where': None})
        return tables

    def get_mysqldump_settings(self) -> dict[str, Any]:
        """Get binary path and timeout settings."""
        return self.config.get('mysqldump') or {}

    def get_output_settings(self) -> dict[str, Any]:
        """Get output settings."""
        return self.config.get('output') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}
