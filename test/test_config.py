"""
Tests to validate environment configuration is correct.

Run these first to ensure the connection settings and logging work before
running report tests.
"""

import logging

import db
from db.database import Database
from config import get_logger, setup_logging
from pipeline import validate_environment


class TestDatabaseConfig:
    """Validate database settings and connections."""

    def test_settings_have_defaults(self):
        assert db.DB_ENGINE in ("sqlite", "mysql")
        assert db.DB_DATABASE
        assert db.TEST_DB

    def test_sandbox_connection(self, db_test):
        """Verify sandbox database is accessible."""
        result = db_test.execute_select_query("SELECT 1")
        assert result == [(1,)]

    def test_validate_returns_dict(self, db_test):
        result = validate_environment(db_test)

        assert result == {
            "database_ok": True,
            "schema_ok": True,
            "missing_tables": [],
            "errors": [],
        }

    def test_validate_reports_missing_tables(self, db_empty):
        result = validate_environment(db_empty)

        assert result["database_ok"] is True
        assert result["schema_ok"] is False
        assert "tracks" in result["missing_tables"]
        assert len(result["missing_tables"]) == 7
        assert result["errors"]

    def test_validate_reports_bad_connection(self, tmp_path):
        bad = Database("", "", "", str(tmp_path / "missing" / "x.db"), engine="sqlite")

        result = validate_environment(bad)

        assert result["database_ok"] is False
        assert "Database connection failed" in result["errors"][0]


class TestLoggingConfig:
    """Validate loguru setup."""

    def test_file_sink_receives_messages(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(str(log_file), level="INFO", console=False)

        get_logger(__name__).info("report run started")

        assert "report run started" in log_file.read_text(encoding="utf-8")

    def test_driver_records_point_at_their_caller(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(str(log_file), level="DEBUG", console=False)

        logging.getLogger("mysql.connector").warning("server has gone away")

        line = next(
            line for line in log_file.read_text(encoding="utf-8").splitlines()
            if "server has gone away" in line
        )
        assert "test_config:test_driver_records_point_at_their_caller:" in line
        assert "WARNING" in line
