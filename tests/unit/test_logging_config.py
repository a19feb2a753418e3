import logging

from bin_tracker.logging_config import RequestIdFilter, set_request_id
from bin_tracker.utils.logging import log_api_error, log_api_success


def _record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)


def test_filter_attaches_current_request_id():
    set_request_id("req-123")
    try:
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "req-123"
    finally:
        set_request_id(None)


def test_missing_request_id_defaults_to_dash():
    set_request_id(None)
    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_api_log_helpers_include_context(caplog):
    logger = logging.getLogger("tests.api_helpers")
    with caplog.at_level(logging.INFO, logger="tests.api_helpers"):
        log_api_success(logger, "save snapshot", {"bins": 3})
        log_api_error(logger, "add bins", ValueError("bad location"), {"items": 2})

    assert "save snapshot completed successfully [bins=3]" in caplog.text
    assert "add bins failed [items=2]: bad location" in caplog.text
