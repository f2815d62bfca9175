"""
Tests for settings, logging setup and model registration.
"""

import json
import logging

from app.core.config import Settings, settings
from app.core.database import Base, init_db
from app.core.logging_config import CustomJsonFormatter, setup_logging


class TestSettings:

    def test_reads_environment(self, monkeypatch):
        """Test that settings are loaded from environment variables"""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("POSTGRES_DB", "jobly_test")

        loaded = Settings(_env_file=None)

        assert loaded.LOG_LEVEL == "DEBUG"
        assert loaded.DATABASE_URL.endswith("/jobly_test")

    def test_environment_names_are_case_sensitive(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("log_level", "ERROR")

        assert Settings(_env_file=None).LOG_LEVEL == "INFO"

    def test_cors_origins_from_json(self, monkeypatch):
        monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["http://a.test", "http://b.test"]')
        assert Settings(_env_file=None).BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_cors_origins_comma_separated(self):
        """Test that a plain comma-separated origin list is split"""
        loaded = Settings(_env_file=None, BACKEND_CORS_ORIGINS="http://a.test, http://b.test")
        assert loaded.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]


class TestLogging:

    def teardown_method(self):
        setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    def test_json_logs(self):
        """Test that JSON mode installs the structured formatter"""
        setup_logging("DEBUG", json_logs=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        formatter = root.handlers[0].formatter
        assert isinstance(formatter, CustomJsonFormatter)

        record = logging.LogRecord("app.crud.company", logging.WARNING, __file__, 10, "No company: %s", ("nope",), None)
        output = json.loads(formatter.format(record))
        assert output["message"] == "No company: nope"
        assert output["level"] == "WARNING"
        assert output["logger"] == "app.crud.company"
        assert output["line"] == 10

    def test_plain_logs(self):
        setup_logging("warning", json_logs=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, CustomJsonFormatter)


class TestModelRegistration:

    def test_init_db_registers_tables(self):
        """Test that every table is declared on the shared Base"""
        init_db()
        assert {"users", "companies", "jobs"} <= set(Base.metadata.tables)
