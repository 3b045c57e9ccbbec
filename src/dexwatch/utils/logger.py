"""
Logging helpers.

- JSONFormatter: one JSON object per line, carrying the asset/cycle extras
- PerformanceLogger: duration of pipeline stages
- setup_logging: root logger configuration used by the entry point
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

EXTRA_FIELDS = ('address', 'symbol', 'chain', 'cycle', 'check', 'execution_time')
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JSONFormatter(logging.Formatter):
    """Structured log lines for log shippers."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'where': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({name: getattr(record, name) for name in EXTRA_FIELDS if hasattr(record, name)})

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class PerformanceLogger:
    """Wraps a logger to report how long a block took."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @contextmanager
    def timer(self, operation: str, **context):
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - started
            self.logger.info(
                f"Operation completed: {operation} in {elapsed:.3f}s",
                extra={'execution_time': elapsed, **context},
            )


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False
) -> logging.Logger:
    """
    Configure the root logger, replacing any existing handlers.

    Args:
        log_level: Level name, e.g. DEBUG or INFO
        log_file: Also write to this file when given
        json_format: Emit JSONFormatter lines instead of plain text

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(log_level).upper()))
    for existing in list(root.handlers):
        root.removeHandler(existing)

    formatter = JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # aiohttp access noise
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return root


def get_performance_logger(name: str) -> PerformanceLogger:
    return PerformanceLogger(logging.getLogger(name))
