"""Tests for the SQLite logging module."""

import logging
import sqlite3
from pathlib import Path

from long_multiplication.utils import Config, LoggingDatabase, SQLiteHandler, setup_db_logging


class TestSQLiteHandler:
    """Test cases for SQLiteHandler class."""

    def test_handler_creation(self, temp_dir):
        """Test SQLiteHandler creation."""
        db_path = Path(temp_dir) / "test_logs.db"
        handler = SQLiteHandler(db_path)

        assert handler.db_path == db_path
        assert db_path.exists()

        # Check that table was created
        conn = sqlite3.connect(str(db_path))
        cursor = conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='calculator_logs'"
        )
        assert cursor.fetchone() is not None
        conn.close()

    def test_emit_log_record(self, temp_dir):
        """Test emitting log records."""
        db_path = Path(temp_dir) / "test_emit.db"
        handler = SQLiteHandler(db_path)

        logger = logging.getLogger("test_emit_logger")
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

        try:
            logger.info("Multiplied 2-digit by 2-digit operands", extra={"style": "grid"})
            logger.error("Rejected '12a' x '3'")
        finally:
            logger.removeHandler(handler)

        logs = LoggingDatabase(db_path).query_logs()

        assert len(logs) == 2
        # Newest first
        assert logs[0]["level"] == "ERROR"
        assert logs[0]["status"] == "error"
        assert logs[1]["status"] == "success"
        assert logs[1]["metadata"] == {"style": "grid"}
        assert logs[1]["module"] == "test_emit_logger"

    def test_explicit_status(self, temp_dir):
        """Test a status passed through extra wins."""
        db_path = Path(temp_dir) / "test_status.db"
        handler = SQLiteHandler(db_path)

        logger = logging.getLogger("test_status_logger")
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

        try:
            logger.warning("Partial request", extra={"status": "skipped"})
        finally:
            logger.removeHandler(handler)

        logs = LoggingDatabase(db_path).query_logs(status="skipped")

        assert len(logs) == 1
        assert logs[0]["metadata"] is None

    def test_exception_trace(self, temp_dir):
        """Test exception information is stored."""
        db_path = Path(temp_dir) / "test_trace.db"
        handler = SQLiteHandler(db_path)

        logger = logging.getLogger("test_trace_logger")
        logger.addHandler(handler)

        try:
            try:
                raise ValueError("bad digit")
            except ValueError:
                logger.exception("Computation failed")
        finally:
            logger.removeHandler(handler)

        logs = LoggingDatabase(db_path).query_logs()

        assert "ValueError: bad digit" in logs[0]["error_trace"]


class TestLoggingDatabase:
    """Test cases for LoggingDatabase class."""

    def _populate(self, db_path):
        handler = SQLiteHandler(db_path)
        logger = logging.getLogger("long_multiplication.test_populate")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            logger.info("first run")
            logger.info("second run")
            logger.error("bad input")
        finally:
            logger.removeHandler(handler)

    def test_query_filters(self, temp_dir):
        """Test filtering by module, level and limit."""
        db_path = Path(temp_dir) / "query.db"
        self._populate(db_path)
        db = LoggingDatabase(db_path)

        assert len(db.query_logs(module="test_populate")) == 3
        assert len(db.query_logs(module="unrelated")) == 0
        assert len(db.query_logs(level="INFO")) == 2
        assert [log["message"] for log in db.query_logs(limit=1)] == ["bad input"]

    def test_query_by_status(self, temp_dir):
        """Test the error filter used for recent rejections."""
        db_path = Path(temp_dir) / "status.db"
        self._populate(db_path)

        errors = LoggingDatabase(db_path).query_logs(status="error", limit=5)

        assert [log["message"] for log in errors] == ["bad input"]

    def test_summary_of_empty_database(self, temp_dir):
        """Test statistics before anything was logged."""
        db_path = Path(temp_dir) / "empty.db"
        SQLiteHandler(db_path)

        stats = LoggingDatabase(db_path).get_summary_statistics()

        assert stats["total_logs"] == 0
        assert stats["error_count"] == 0
        assert stats["by_level"] == {}
        assert "time_range" not in stats

    def test_summary_statistics(self, temp_dir):
        """Test summary statistics."""
        db_path = Path(temp_dir) / "stats.db"
        self._populate(db_path)

        stats = LoggingDatabase(db_path).get_summary_statistics()

        assert stats["total_logs"] == 3
        assert stats["by_level"] == {"INFO": 2, "ERROR": 1}
        assert stats["by_status"] == {"success": 2, "error": 1}
        assert stats["error_count"] == 1
        assert "first" in stats["time_range"]

    def test_setup_db_logging(self, temp_dir):
        """Test the handler is attached to the root logger."""
        config = Config(logging_db_path=Path(temp_dir) / "root.db")

        handler = setup_db_logging(config)
        try:
            assert handler in logging.getLogger().handlers
            assert isinstance(handler, SQLiteHandler)
        finally:
            logging.getLogger().removeHandler(handler)
