"""Tests for the SQLite bootstrap and connection helpers."""

import logging
import os
import sqlite3
from datetime import date

import pytest

from mentor_app_api.app.core import db
from mentor_app_api.app.core.config import Settings
from mentor_app_api.app.core.db import MIGRATIONS, get_connection, get_database_path, init_db
from mentor_app_api.app.core.logging_config import daily_logfile, setup_logging


class TestInitDb:
    def test_creates_tables(self, conn):
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        }

        assert {"skill", "user", "user_skill", "partnership", "migrations"} <= tables

    def test_is_idempotent(self, conn):
        latest = MIGRATIONS[-1][0]

        assert init_db(conn) == latest
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        assert versions == [version for version, _ in MIGRATIONS]

    def test_opens_configured_database_when_no_connection_given(self, tmp_path, monkeypatch):
        path = tmp_path / "configured.db"
        monkeypatch.setattr(db.settings, "database_url", str(path))

        init_db()

        assert path.exists()
        check = get_connection(str(path))
        try:
            assert check.execute("SELECT COUNT(*) AS n FROM skill").fetchone()["n"] == 0
        finally:
            check.close()


class TestPaths:
    def test_absolute_path_is_used_as_is(self, tmp_path, monkeypatch):
        path = str(tmp_path / "absolute.db")
        monkeypatch.setattr(db.settings, "database_url", path)

        assert get_database_path() == path

    def test_relative_path_resolves_under_package(self, monkeypatch):
        monkeypatch.setattr(db.settings, "database_url", "relative.db")

        resolved = get_database_path()

        assert os.path.isabs(resolved)
        assert resolved.endswith(os.path.join("mentor_app_api", "relative.db"))


class TestGetDb:
    def test_yields_and_closes_connection(self, tmp_path, monkeypatch):
        monkeypatch.setattr(db.settings, "database_url", str(tmp_path / "dep.db"))
        dependency = db.get_db()

        conn = next(dependency)
        assert conn.execute("SELECT 1 AS one").fetchone()["one"] == 1

        dependency.close()
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.api_prefix.startswith("/")
        assert settings.identifier_max_attempts >= 1


class TestLogging:
    def test_daily_logfile_name(self, tmp_path):
        assert daily_logfile(str(tmp_path), date(2024, 1, 2)) == str(tmp_path / "2024-01-02.log")

    def test_setup_logging_writes_file(self, tmp_path, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        logfile = tmp_path / "logs" / "today.log"
        try:
            setup_logging("DEBUG", str(logfile))
            logging.getLogger("mentor_app_api.test").info("hello from the test")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers:
                handler.close()

        assert "hello from the test" in logfile.read_text(encoding="utf-8")

    def test_setup_logging_runs_once(self, monkeypatch):
        root = logging.getLogger()
        sentinel = logging.NullHandler()
        monkeypatch.setattr(root, "handlers", [sentinel])

        setup_logging("INFO")

        assert root.handlers == [sentinel]
