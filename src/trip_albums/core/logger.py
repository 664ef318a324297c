import json
import logging
import logging.config
import sys

from trip_albums.core.config import configs

# Attributes every LogRecord has; anything else arrived through ``extra=``
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line. Context passed with ``extra=`` (trip_id, user_id,
    album_id) becomes top-level keys so log search can filter on them.
    """
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                log_record[key] = value
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def _stream_handler(formatter: str) -> dict:
    return {"class": "logging.StreamHandler", "stream": sys.stdout, "formatter": formatter}


def build_logging_config(environment: str, level: str) -> dict:
    handler = "json" if environment == "production" else "default"

    def logger_entry(logger_level: str) -> dict:
        return {"level": logger_level, "handlers": [handler], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JsonFormatter,
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "handlers": {
            "default": _stream_handler("default"),
            "json": _stream_handler("json"),
        },
        "loggers": {
            "trip_albums": logger_entry(level),
            "uvicorn.access": logger_entry("INFO"),
            "uvicorn.error": logger_entry("ERROR"),
            # SQL echo is controlled by DB_ECHO, keep the engine quiet otherwise
            "sqlalchemy.engine": logger_entry("INFO" if configs.DB_ECHO else "WARNING"),
        },
        "root": {"level": level, "handlers": [handler]},
    }


def setup_logging():
    """Configure logging for the current ENVIRONMENT and LOG_LEVEL."""
    log_level = configs.LOG_LEVEL.upper()
    logging.config.dictConfig(build_logging_config(configs.ENVIRONMENT, log_level))
    logger = logging.getLogger(__name__)
    logger.info(f"Logging setup complete for {configs.ENVIRONMENT} environment with level {log_level}")
