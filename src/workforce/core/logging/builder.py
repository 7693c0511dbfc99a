# workforce/core/logging/builder.py
"""
Build and apply the dictConfig logging setup, optionally queue-backed.

    setup_logging(settings)       # once, in the app lifespan (or test session)
    ...
    stop_queue_logging()          # at shutdown, flushes the background listener

With LOG_USE_QUEUE the real handlers move to a QueueListener thread and the
root logger only enqueues. Producer-side filters (request id, redaction) sit on
the QueueHandler so they run where the request contextvar is visible.

Handler selection:

| LOG_TO_STDOUT | LOG_DIR | handlers                        |
| ------------- | ------- | ------------------------------- |
| true          | any     | console + error_console         |
| false         | unset   | console + error_console         |
| false         | set     | console + file + error_file     |
"""

from __future__ import annotations

import logging
import logging.config
import queue as _queue
import threading
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Optional

from workforce.config.settings import Settings
from workforce.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

_QUEUE_LISTENER: Optional[QueueListener] = None
_QUEUE: Optional[_queue.Queue] = None

_DROPPED_LOGS_COUNT = 0
_DROPPED_LOGS_LOCK = threading.Lock()


class NonBlockingQueueHandler(QueueHandler):
    """
    QueueHandler that drops records instead of blocking when a bounded queue is full.

    Every `drop_warning_threshold`-th drop enqueues a warning about the drops
    (itself dropped if the queue is still full).
    """

    def __init__(self, q: _queue.Queue, drop_warning_threshold: int = 100):
        super().__init__(q)
        self.drop_warning_threshold = drop_warning_threshold

    def emit(self, record: logging.LogRecord) -> None:
        global _DROPPED_LOGS_COUNT
        try:
            self.queue.put_nowait(self.prepare(record))
        except _queue.Full:
            with _DROPPED_LOGS_LOCK:
                _DROPPED_LOGS_COUNT += 1
                dropped = _DROPPED_LOGS_COUNT
            if self.drop_warning_threshold > 0 and dropped % self.drop_warning_threshold == 0:
                self._enqueue_drop_warning(dropped)

    def _enqueue_drop_warning(self, dropped: int) -> None:
        warning = logging.LogRecord(
            __name__, logging.WARNING, __file__, 0,
            "Dropped %d log records because the logging queue was full", (dropped,), None,
        )
        warning.request_id = "-"
        try:
            self.queue.put_nowait(warning)
        except _queue.Full:
            pass


def get_queue_stats() -> dict:
    with _DROPPED_LOGS_LOCK:
        return {"dropped_logs": _DROPPED_LOGS_COUNT, "queue_present": _QUEUE is not None}


def make_dict_config(settings: Settings) -> dict:
    """dictConfig mapping: formatters, filters, handlers and logger levels."""
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL echo includes document values; keep it opt-in
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def _detach_handlers(handlers: list[logging.Handler]) -> None:
    """Remove handler instances from every logger, root included."""
    moving = set(handlers)
    loggers = [logging.getLogger()] + [
        obj for obj in logging.Logger.manager.loggerDict.values() if isinstance(obj, logging.Logger)
    ]
    for logger_obj in loggers:
        for handler in list(logger_obj.handlers):
            if handler in moving:
                logger_obj.removeHandler(handler)


def setup_logging(settings: Settings) -> None:
    """
    Apply the dictConfig and, when LOG_USE_QUEUE is set, move the real
    handlers behind a QueueListener.

    Calling it again replaces the previous setup (a running listener is stopped first).
    """
    global _QUEUE_LISTENER, _QUEUE

    stop_queue_logging()

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root_logger = logging.getLogger()
    root_logger.addFilter(RequestIdFilter())

    if not settings.LOG_USE_QUEUE:
        return

    real_handlers = list(root_logger.handlers)
    if not real_handlers:
        return
    _detach_handlers(real_handlers)

    max_size = settings.LOG_QUEUE_MAX_SIZE or 0
    log_queue: _queue.Queue = _queue.Queue(max_size if max_size > 0 else 0)

    if max_size > 0 and not settings.LOG_QUEUE_BLOCKING:
        queue_handler: QueueHandler = NonBlockingQueueHandler(
            log_queue, settings.LOG_QUEUE_DROP_WARNING_THRESHOLD
        )
    else:
        queue_handler = QueueHandler(log_queue)

    queue_handler.addFilter(RequestIdFilter())
    queue_handler.addFilter(RedactFilter())

    listener = QueueListener(log_queue, *real_handlers, respect_handler_level=True)
    listener.start()
    root_logger.addHandler(queue_handler)

    _QUEUE_LISTENER = listener
    _QUEUE = log_queue


def stop_queue_logging() -> None:
    """Stop the background listener (flushing queued records) and clear module state."""
    global _QUEUE_LISTENER, _QUEUE
    listener = _QUEUE_LISTENER
    if listener is None:
        return
    try:
        listener.stop()
    except RuntimeError:
        logging.getLogger(__name__).exception("Failed to stop QueueListener cleanly")
    finally:
        _QUEUE_LISTENER = None
        _QUEUE = None
