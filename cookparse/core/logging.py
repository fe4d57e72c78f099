# cookparse/core/logging.py
from __future__ import annotations

import logging
import os
import sys
from pythonjsonlogger import jsonlogger

from cookparse.core import config
from cookparse.core.parse_context import get_slug


class ParseContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "slug", None) is None:
            record.slug = get_slug()
        return True


def setup_logging() -> None:
    level = os.getenv("LOG_LEVEL", config.LOG_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(slug)s %(steps)s %(ingredients)s %(cookware)s %(duration_ms)s %(position)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(ParseContextFilter())

    root.handlers = [handler]
