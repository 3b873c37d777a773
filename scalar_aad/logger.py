import json
import logging
import sys

from .config import AADConfig


class JsonFormatter(logging.Formatter):
    """
    Format log records as one JSON object per line
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        # Benchmark scripts attach their measurements through `extra`
        metrics = getattr(record, "metrics", None)
        if metrics is not None:
            log_record["metrics"] = metrics
        return json.dumps(log_record, ensure_ascii=False)


def setup_logger(name, level=None):
    logger = logging.getLogger(name)
    logger.setLevel(level or AADConfig.LOG_LEVEL)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    return logger
