"""
Structured Logging Configuration

Provides consistent logging across the relay with support for:
- Console output (development)
- JSON format (production)
- File output (optional)
- Game session IDs, so every line logged during one game can be grouped
"""

import logging
import sys
import json
import uuid
from datetime import datetime, timezone
from typing import Optional, Any
from contextvars import ContextVar, Token


# Context variable for the current game session
_game_session_id: ContextVar[Optional[str]] = ContextVar("game_session_id", default=None)

_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message"
))


class JsonFormatter(logging.Formatter):
    """JSON formatter for production logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        session_id = _game_session_id.get()
        if session_id:
            log_data["game_session_id"] = session_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for development console output"""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"

        session_id = _game_session_id.get()
        if session_id:
            record.msg = f"[game {session_id[:8]}] {record.msg}"

        return super().format(record)


class ContextualAdapter(logging.LoggerAdapter):
    """Logger adapter that tags records with the current game session"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})

        session_id = _game_session_id.get()
        if session_id:
            extra["game_session_id"] = session_id

        kwargs["extra"] = extra
        return msg, kwargs


_logging_initialized = False


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
    force: bool = False
) -> None:
    """
    Configure application logging.

    Should be called once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (for production)
        log_file: Optional file path for logging
        force: Force reconfiguration even if already initialized
    """
    global _logging_initialized

    if _logging_initialized and not force:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)

    if json_format:
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%H:%M:%S"
        ))

    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JsonFormatter())  # Always JSON for files
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file {log_file}: {e}")

    # Polling at 500ms makes the HTTP/websocket libraries very chatty
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.WARNING)

    _logging_initialized = True

    root_logger.debug(f"Logging initialized: level={level}, json={json_format}")


def get_logger(name: str) -> ContextualAdapter:
    """
    Get a contextual logger for a module.

    Usage:
        logger = get_logger(__name__)
        logger.info("Game detected", extra={"game_time": 12.5})
    """
    return ContextualAdapter(logging.getLogger(name), {})


def get_game_session_id() -> Optional[str]:
    return _game_session_id.get()


def new_game_session_id() -> str:
    """Start a game session: generate an ID and tag the current context with it"""
    session_id = uuid.uuid4().hex
    _game_session_id.set(session_id)
    return session_id


class LogContext:
    """
    Tag logs with a game session ID for the duration of a block.

    Anything set inside the block, including by new_game_session_id(), is
    rolled back on exit.
    """

    def __init__(self, game_session_id: Optional[str] = None):
        self.session_id = game_session_id
        self._token: Optional[Token] = None

    def __enter__(self) -> "LogContext":
        self._token = _game_session_id.set(self.session_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _game_session_id.reset(self._token)
