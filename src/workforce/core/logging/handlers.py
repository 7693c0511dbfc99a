# workforce/core/logging/handlers.py
"""
Handler factories: each returns a dictConfig handler entry.

| name          | destination         | levels        |
| ------------- | ------------------- | ------------- |
| console       | stderr              | >= LOG_LEVEL  |
| file          | LOG_DIR/app.log     | >= LOG_LEVEL  |
| error_file    | LOG_DIR/errors.log  | >= ERROR      |
| error_console | stderr (JSON)       | >= ERROR      |
"""

from pathlib import Path

from workforce.config.settings import Settings

PRODUCER_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(PRODUCER_FILTERS),
    }


def _rotating_file(settings: Settings, filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": formatter,
        "level": level,
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(PRODUCER_FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "app.log", _formatter_name(settings), settings.LOG_LEVEL)


def get_error_file_handler(settings: Settings) -> dict:
    # error files stay structured whatever LOG_FORMAT says
    return _rotating_file(settings, "errors.log", "json", "ERROR")


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(PRODUCER_FILTERS),
    }
