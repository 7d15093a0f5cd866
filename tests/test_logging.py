import json
import logging

from hitbtc_api.utils.logging import RequestLogger, configure_logging


def test_request_logger_writes_json(tmp_path):
    logger = RequestLogger(log_dir=tmp_path, logger_name="hitbtc_api.test_requests")
    logger.log_request("GET", "https://api.hitbtc.com/api/2/order", signed=True)
    logger.log_response("GET", "https://api.hitbtc.com/api/2/order", 200, 0.0123)
    logger.log_error("boom", exception=RuntimeError("x"))

    lines = (tmp_path / "requests.log").read_text().splitlines()
    entries = [json.loads(line.split(" | ", 2)[2]) for line in lines]
    assert [entry["type"] for entry in entries] == ["request", "response", "error"]
    assert entries[0]["signed"] is True
    assert entries[1]["status"] == 200
    assert entries[1]["elapsed_ms"] == 12.3
    assert "RuntimeError" in entries[2]["exception"]


def test_request_logger_does_not_duplicate_handlers(tmp_path):
    RequestLogger(log_dir=tmp_path, logger_name="hitbtc_api.test_dedup")
    RequestLogger(log_dir=tmp_path, logger_name="hitbtc_api.test_dedup")
    assert len(logging.getLogger("hitbtc_api.test_dedup").handlers) == 1


def test_configure_logging_file(tmp_path):
    log_file = tmp_path / "nested" / "client.log"
    configure_logging(logging.DEBUG, log_file=log_file)
    assert log_file.parent.exists()
