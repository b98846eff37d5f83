# core/log_config.py
import json
import logging
import sys

from config import DEBUG, LOG_LEVEL


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        return json.dumps(
            {
                "time": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "exception": record.exc_text,
            }
        )


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger that writes JSON lines to stdout.
    The handler is attached once per logger name.
    """
    logger = logging.getLogger(name)
    level = "DEBUG" if DEBUG else LOG_LEVEL
    logger.setLevel(getattr(logging, level, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger
