"""Logging setup for the quiz API.

Modules log through ``logging.getLogger(__name__)``; this only wires the root
handler once at startup.
"""

import json
import logging
import sys
import time

from app.core.config import settings


class JSONFormatter(logging.Formatter):
    """Render a log record as a single line of JSON."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "ts": round(time.time(), 3),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level=None, as_json=None) -> logging.Logger:
    level = level or settings.LOG_LEVEL
    as_json = settings.LOG_JSON if as_json is None else as_json

    handler = logging.StreamHandler(sys.stdout)
    if as_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("app")
