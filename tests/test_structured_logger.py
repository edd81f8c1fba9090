"""
Logging setup tests.
"""

import io
import json
import logging

from docintro.core.structured_logger import configure_logging, request_id_var
from docintro.observability.audit import audit_log_event


def test_json_lines_with_extra_data():
    stream = io.StringIO()
    configure_logging("INFO", "json", stream=stream)

    logging.getLogger("docintro.test").info("chunk stored", extra={"extra_data": {"video_id": "v"}})

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "docintro.test"
    assert record["message"] == "chunk stored"
    assert record["video_id"] == "v"


def test_configure_logging_replaces_its_handler():
    configure_logging("INFO", "text")
    configure_logging("DEBUG", "text")

    handlers = [h for h in logging.getLogger("docintro").handlers if getattr(h, "_docintro_handler", False)]
    assert len(handlers) == 1
    assert logging.getLogger("docintro").level == logging.DEBUG


def test_audit_event_is_json(caplog):
    with caplog.at_level(logging.INFO, logger="docintro.audit"):
        audit_log_event(event="video.finalized", video_id="v", payload={"chunks": 3})

    message = caplog.records[-1].getMessage()
    assert message.startswith("AUDIT ")
    record = json.loads(message[len("AUDIT "):])
    assert record["event"] == "video.finalized"
    assert record["payload"] == {"chunks": 3}


def test_request_id_from_context_lands_on_json_lines():
    stream = io.StringIO()
    configure_logging("INFO", "json", stream=stream)

    token = request_id_var.set("req-42")
    try:
        logging.getLogger("docintro.test").info("inside request")
    finally:
        request_id_var.reset(token)
    logging.getLogger("docintro.test").info("outside request")

    inside, outside = [json.loads(line) for line in stream.getvalue().strip().splitlines()[-2:]]
    assert inside["request_id"] == "req-42"
    assert "request_id" not in outside


def test_request_logs_carry_caller_request_id(client):
    stream = io.StringIO()
    configure_logging("INFO", "json", stream=stream)

    response = client.get("/health", headers={"X-Request-ID": "trace-abc"})

    assert response.headers["X-Request-ID"] == "trace-abc"
    records = [json.loads(line) for line in stream.getvalue().strip().splitlines()]
    performance = [r for r in records if r["logger"] == "docintro.performance"]
    assert performance and all(r["request_id"] == "trace-abc" for r in performance)
