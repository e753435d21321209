"""
Centralized logging configuration for the clinic backend.

This module provides structured logging with:
- JSON formatting for production
- Console formatting for development
- SQLAlchemy query timing
- Log rotation

Usage:
    import logging

    from clinic.core.logging_config import setup_logging

    # At process start-up
    setup_logging(log_level="INFO", enable_sql_echo=True)

    # In any module
    logger = logging.getLogger(__name__)
    logger.info("Operation completed", extra={"context": {"user_id": "abc"}})
"""

import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Union

from sqlalchemy import event
from sqlalchemy.engine import Engine


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so other handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            message = f"{message} | {json.dumps(context, default=str)}"
        return message


_sql_timing_registered = False


def _register_sql_timing() -> None:
    """Attach query timing listeners to every SQLAlchemy engine (once)."""
    global _sql_timing_registered
    if _sql_timing_registered:
        return

    @event.listens_for(Engine, "before_cursor_execute")
    def before_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(Engine, "after_cursor_execute")
    def after_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):
        starts = conn.info.get("query_start_time")
        if not starts:
            return
        total_ms = (time.perf_counter() - starts.pop(-1)) * 1000
        perf_logger = logging.getLogger("sqlalchemy.performance")
        perf_logger.debug(
            f"Query executed in {total_ms:.2f}ms",
            extra={
                "context": {
                    "sql_query": statement[:500],  # Truncate long queries
                    "sql_duration_ms": round(total_ms, 2),
                }
            },
        )

    _sql_timing_registered = True


def setup_logging(
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = False,
    use_json_format: bool = False,
    log_dir: Union[str, Path, None] = None,
) -> None:
    """
    Configure logging for the process.

    Args:
        log_level: Logging level (int like logging.INFO or string "INFO")
        enable_sql_echo: Enable SQLAlchemy statement logging and query timing
        log_to_file: Also write JSON logs to a rotating file
        use_json_format: Use JSON format on the console instead of colors
        log_dir: Directory for log files (defaults to ``backend/logs``)
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ConsoleFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    if log_to_file:
        target_dir = (
            Path(log_dir) if log_dir else Path(__file__).parent.parent.parent / "logs"
        )
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                target_dir / "clinic.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Failed to create file handler: {e}. Falling back to console-only logging.",
                extra={"context": {"component": "logging_setup"}},
            )

    if enable_sql_echo:
        sql_logger = logging.getLogger("sqlalchemy.engine")
        sql_logger.setLevel(logging.INFO)
        sql_logger.propagate = True
        _register_sql_timing()

    app_logger = logging.getLogger("clinic")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={level}, sql_echo={enable_sql_echo}, "
        f"log_to_file={log_to_file}, json_format={use_json_format}"
    )
