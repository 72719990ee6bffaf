"""SQLite mirror of the calculator's log records.

Every record becomes one row of the ``calculator_logs`` table. Values passed
through ``extra=`` (style, annotate, ...) are kept as JSON in the ``metadata``
column, so ``long-mult status`` can summarise runs and list recent rejections.
"""

import json
import logging
import sqlite3
import traceback
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any

TABLE = "calculator_logs"

COLUMNS = ("timestamp", "module", "function", "level", "status", "message", "error_trace", "metadata")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
    "status",
}


def _schema(table: str) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS {table} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            timestamp TEXT NOT NULL,
            module TEXT,
            function TEXT,
            level TEXT,
            status TEXT,
            message TEXT,
            error_trace TEXT,
            metadata TEXT
        );
        CREATE INDEX IF NOT EXISTS idx_{table}_timestamp ON {table} (timestamp);
    """


def _connect(db_path: Path):
    return closing(sqlite3.connect(db_path))


def _record_status(record: logging.LogRecord) -> str:
    status = getattr(record, "status", None)
    if status is not None:
        return status
    return "error" if record.levelno >= logging.ERROR else "success"


class SQLiteHandler(logging.Handler):
    """Logging handler that appends each record to the calculator log table."""

    def __init__(self, db_path: Path, table_name: str = TABLE):
        """Create the database file and table if needed.

        Args:
            db_path: Path to SQLite database file
            table_name: Name of the log table
        """
        super().__init__()
        self.db_path = Path(db_path)
        self.table_name = table_name
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with _connect(self.db_path) as conn, conn:
            conn.executescript(_schema(table_name))

    def _row(self, record: logging.LogRecord) -> tuple:
        error_trace = None
        if record.exc_info:
            error_trace = "".join(traceback.format_exception(*record.exc_info))

        metadata = {
            key: str(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        }

        return (
            datetime.fromtimestamp(record.created).isoformat(),
            record.name,
            record.funcName,
            record.levelname,
            _record_status(record),
            record.getMessage(),
            error_trace,
            json.dumps(metadata) if metadata else None,
        )

    def emit(self, record: logging.LogRecord):
        placeholders = ", ".join("?" * len(COLUMNS))
        try:
            row = self._row(record)
            with _connect(self.db_path) as conn, conn:
                conn.execute(
                    f"INSERT INTO {self.table_name} ({', '.join(COLUMNS)}) VALUES ({placeholders})",
                    row,
                )
        except Exception:
            # A broken log database must not break the calculation
            self.handleError(record)


class LoggingDatabase:
    """Read side of the calculator log table."""

    def __init__(self, db_path: Path, table_name: str = TABLE):
        self.db_path = Path(db_path)
        self.table_name = table_name

    def _fetch(self, sql: str, params: list[Any] | tuple = ()) -> list[sqlite3.Row]:
        with _connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            return conn.execute(sql, params).fetchall()

    def query_logs(
        self,
        module: str | None = None,
        level: str | None = None,
        status: str | None = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Return log entries, newest first.

        Args:
            module: Substring of the logger name
            level: Exact level name, e.g. ``ERROR``
            status: ``success``, ``error`` or a status passed through ``extra``
            limit: Maximum number of entries

        Returns:
            Entries as dictionaries with ``metadata`` decoded from JSON
        """
        filters = {
            "module LIKE ?": f"%{module}%" if module else None,
            "level = ?": level,
            "status = ?": status,
        }
        clauses = [clause for clause, value in filters.items() if value]
        params = [value for value in filters.values() if value]
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        rows = self._fetch(
            f"SELECT * FROM {self.table_name}{where} ORDER BY id DESC LIMIT ?",
            [*params, limit],
        )

        entries = []
        for row in rows:
            entry = dict(row)
            if entry["metadata"]:
                entry["metadata"] = json.loads(entry["metadata"])
            entries.append(entry)
        return entries

    def _counts(self, column: str) -> dict[str, int]:
        rows = self._fetch(f"SELECT {column}, COUNT(*) FROM {self.table_name} GROUP BY {column}")
        return {row[0]: row[1] for row in rows}

    def get_summary_statistics(self) -> dict[str, Any]:
        """Totals per level and status, the logged time range and the error count."""
        total, first, last, errors = self._fetch(
            f"SELECT COUNT(*), MIN(timestamp), MAX(timestamp), "
            f"SUM(level = 'ERROR' OR status = 'error') FROM {self.table_name}"
        )[0]

        stats: dict[str, Any] = {
            "total_logs": total,
            "by_level": self._counts("level"),
            "by_status": self._counts("status"),
            "error_count": errors or 0,
        }
        if first:
            stats["time_range"] = {"first": first, "last": last}
        return stats


def setup_db_logging(config) -> SQLiteHandler:
    """Mirror root logger records into ``config.logging_db_path``."""
    handler = SQLiteHandler(config.logging_db_path)
    handler.setFormatter(logging.Formatter(config.log_format))
    logging.getLogger().addHandler(handler)
    return handler
