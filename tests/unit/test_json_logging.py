"""
Tests for JSON log formatting and setup.
"""

import json
import logging
import sys

import pytest

from indicore.utils.json_logging import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def make_record(msg="cache_pruned", extra=None, exc_info=None):
    record = logging.LogRecord(
        name="indicore.indicators.cache",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test the JSON line formatter."""

    def test_basic_fields_and_extra(self):
        line = JSONFormatter().format(make_record(extra={"removed": 3, "begin_index": 7}))
        payload = json.loads(line)

        assert payload["level"] == "DEBUG"
        assert payload["logger"] == "indicore.indicators.cache"
        assert payload["message"] == "cache_pruned"
        assert payload["removed"] == 3
        assert payload["begin_index"] == 7
        assert "pathname" not in payload

    def test_non_json_values_stringified(self, make_series):
        series = make_series([1])
        line = JSONFormatter().format(make_record(extra={"value": series.get_bar(0).close}))

        assert json.loads(line)["value"] == "1"

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())

        payload = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in payload["exception"]


class TestSetupLogging:
    """Test root logger configuration."""

    def test_console_only(self, restore_root_logger):
        assert setup_logging() is None

    def test_json_file(self, tmp_path, restore_root_logger):
        log_file = setup_logging(str(tmp_path / "logs"), prefix="unit")

        logging.getLogger("indicore.test").info("series_bars_evicted", extra={"removed": 2})
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert log_file.parent == tmp_path / "logs"
        assert log_file.name.startswith("unit_")
        lines = log_file.read_text().strip().splitlines()
        assert json.loads(lines[-1])["removed"] == 2
