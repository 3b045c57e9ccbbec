"""
Unit tests for the logging helpers.
"""

import json
import logging

from dexwatch.utils.logger import JSONFormatter, PerformanceLogger


def test_json_formatter_includes_extras():
    record = logging.LogRecord("dexwatch.test", logging.INFO, __file__, 10, "Denied %s", ("TKN",), None)
    record.address = "0xabc"
    record.cycle = 3

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "Denied TKN"
    assert entry["level"] == "INFO"
    assert entry["address"] == "0xabc"
    assert entry["cycle"] == 3
    assert "symbol" not in entry


def test_performance_timer_logs_execution_time(caplog):
    perf = PerformanceLogger(logging.getLogger("dexwatch.test.perf"))

    with caplog.at_level(logging.INFO, logger="dexwatch.test.perf"):
        with perf.timer("cycle", cycle=1):
            pass

    record = caplog.records[-1]
    assert "Operation completed: cycle" in record.getMessage()
    assert record.cycle == 1
    assert record.execution_time >= 0
