#!/usr/bin/env python3
"""
MySQL Dump Runner - CLI Entry Point
===================================
Builds a mysqldump command from a YAML configuration and runs it:
- Connection settings with ${ENV_VAR} expansion
- Any mysqldump option, in configured order
- Per-table WHERE filters
- Output to a file (optionally gzipped) or to stdout
"""

import argparse
import gzip
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from .builder import MysqldumpBuilder
from .config import ConfigLoader
from .errors import DumpError
from .executor import DEFAULT_BINARY, CommandExecutor
from .utils import format_command_display, resolve_output_path, setup_logging


def write_output(payload: str, output_path: Optional[Path]) -> None:
    """Write the dump to a file, gzipped if the name ends in .gz, or to stdout."""
    if output_path is None:
        sys.stdout.write(payload)
        sys.stdout.flush()
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix == '.gz':
        with gzip.open(output_path, 'wt', encoding='utf-8') as f:
            f.write(payload)
    else:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(payload)
    logging.info(f"Dump written to {output_path}")


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='MySQL Dump Runner - run mysqldump from a YAML configuration'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show the mysqldump command without running it'
    )
    parser.add_argument(
        '-d', '--database',
        help='Dump this database instead of the configured one'
    )
    parser.add_argument(
        '-o', '--output',
        help='Write the dump to this file instead of the configured one'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        help='Kill mysqldump after this many seconds'
    )

    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found", file=sys.stderr)
        sys.exit(1)
    except (yaml.YAMLError, ValueError) as e:
        print(f"Error: Invalid configuration file: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    try:
        builder = MysqldumpBuilder.from_config(config, database=args.database)
    except ValueError as e:
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    dump_settings = config.get_mysqldump_settings()
    executor = CommandExecutor(binary=dump_settings.get('binary') or DEFAULT_BINARY)
    dump_config = builder.build()

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - mysqldump will not be run")
        logging.info(f"Would run: {format_command_display(executor.command(dump_config))}")
        sys.exit(0)

    output_settings = config.get_output_settings()
    if args.output:
        output_settings['file'] = args.output
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    output_path = resolve_output_path(output_settings, timestamp)

    timeout = args.timeout if args.timeout is not None else dump_settings.get('timeout')

    # Run dump
    try:
        payload = executor.execute(dump_config, timeout=timeout)
        write_output(payload, output_path)
    except DumpError as e:
        logging.error(f"Dump failed: {e}")
        sys.exit(1)
    except OSError as e:
        logging.error(f"Could not write dump: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
