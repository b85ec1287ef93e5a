"""Tests for routing standard logging into loguru."""

import logging

from loguru import logger

from teleshell.utils.logging import InterceptHandler


def test_intercepted_record_keeps_level_and_component():
    records = []
    sink_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    std = logging.getLogger("telegram.ext.test")
    handler = InterceptHandler()
    std.addHandler(handler)
    std.setLevel(logging.DEBUG)
    std.propagate = False
    try:
        std.warning("poll failed: %s", "timeout")
    finally:
        std.removeHandler(handler)
        logger.remove(sink_id)

    assert len(records) == 1
    assert records[0]["message"] == "poll failed: timeout"
    assert records[0]["level"].name == "WARNING"
    assert records[0]["extra"]["component"] == "telegram.ext.test"
