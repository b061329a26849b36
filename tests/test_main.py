"""
Unit tests for main.py
"""

import gzip
import json
import logging
from unittest import mock

import pytest
import yaml

from mysqldump_runner.executor import PASSWORD_WARNING
from mysqldump_runner.main import main, write_output


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Leave the root logger to pytest."""
    with mock.patch('mysqldump_runner.main.setup_logging') as patched:
        yield patched


@pytest.fixture
def config_path(tmp_path, fake_mysqldump):
    """Write a config pointing at the stand-in mysqldump."""
    config = {
        "mysqldump": {"binary": fake_mysqldump},
        "connection": {"host": "localhost", "user": "root", "password": "secret"},
        "database": "shop",
        "options": {"single-transaction": None},
        "tables": [{"name": "orders", "where": "id > 5"}],
        "output": {"file": str(tmp_path / "out" / "shop.sql")}
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config, sort_keys=False))
    return path


class TestMain:
    """Tests for the command line entry point."""

    def test_missing_config(self, tmp_path, capsys):
        """Test a missing config file exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_yaml(self, tmp_path, capsys):
        """Test invalid YAML exits with status 1."""
        path = tmp_path / "config.yaml"
        path.write_text("connection: [unclosed\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(path)])
        assert exc_info.value.code == 1

    def test_dump_to_file(self, config_path, tmp_path):
        """Test the dump is written to the configured file."""
        main(["-c", str(config_path)])

        output = json.loads((tmp_path / "out" / "shop.sql").read_text())
        assert output == [
            "--port=3306",
            "--host=localhost",
            "--user=root",
            "--password=secret",
            "--single-transaction",
            "shop",
            "orders",
            "--where=id > 5",
        ]

    def test_database_and_output_override(self, config_path, tmp_path):
        """Test command line flags replace configured database and file."""
        target = tmp_path / "other.sql"
        main(["-c", str(config_path), "-d", "analytics", "-o", str(target)])

        output = json.loads(target.read_text())
        assert "analytics" in output
        assert "shop" not in output

    def test_dump_to_stdout(self, config_path, capsys):
        """Test the dump goes to stdout when no file is configured."""
        config = yaml.safe_load(config_path.read_text())
        del config["output"]
        config_path.write_text(yaml.dump(config, sort_keys=False))

        main(["-c", str(config_path)])

        assert json.loads(capsys.readouterr().out)[-1] == "--where=id > 5"

    def test_password_warning_ignored(self, config_path, tmp_path, monkeypatch):
        """Test the password warning does not fail the dump."""
        monkeypatch.setenv("FAKE_MYSQLDUMP_STDERR", PASSWORD_WARNING)
        main(["-c", str(config_path)])
        assert (tmp_path / "out" / "shop.sql").exists()

    def test_dump_error_exits(self, config_path, tmp_path, monkeypatch):
        """Test a mysqldump error exits with status 1 and writes nothing."""
        monkeypatch.setenv("FAKE_MYSQLDUMP_STDERR", "mysqldump: Got error: 1045: Access denied")
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config_path)])
        assert exc_info.value.code == 1
        assert not (tmp_path / "out" / "shop.sql").exists()

    def test_numeric_database_name(self, config_path, tmp_path):
        """Test a database name YAML reads as a number is dumped normally."""
        config = yaml.safe_load(config_path.read_text())
        config["database"] = 2024
        config["tables"] = [{"name": 2023}]
        config_path.write_text(yaml.dump(config, sort_keys=False))

        main(["-c", str(config_path)])

        output = json.loads((tmp_path / "out" / "shop.sql").read_text())
        assert output[-2:] == ["2024", "2023"]

    def test_verbose_sets_debug(self, config_path, mock_setup_logging):
        """Test --verbose switches logging to DEBUG."""
        with pytest.raises(SystemExit):
            main(["-c", str(config_path), "-v", "--dry-run"])
        assert mock_setup_logging.call_args.args[0]["level"] == "DEBUG"

    def test_dry_run(self, config_path, tmp_path, caplog):
        """Test dry run logs the masked command and runs nothing."""
        caplog.set_level(logging.INFO)
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config_path), "--dry-run"])
        assert exc_info.value.code == 0
        assert "--password=****" in caplog.text
        assert "secret" not in caplog.text
        assert not (tmp_path / "out" / "shop.sql").exists()


class TestWriteOutput:
    """Tests for write_output function."""

    def test_plain_file(self, tmp_path):
        path = tmp_path / "nested" / "dump.sql"
        write_output("-- dump\n", path)
        assert path.read_text() == "-- dump\n"

    def test_gzip_file(self, tmp_path):
        path = tmp_path / "dump.sql.gz"
        write_output("-- dump\n", path)
        with gzip.open(path, 'rt', encoding='utf-8') as f:
            assert f.read() == "-- dump\n"

    def test_stdout(self, capsys):
        write_output("-- dump\n", None)
        assert capsys.readouterr().out == "-- dump\n"
