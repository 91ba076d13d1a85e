import json
import logging

from wizmatik.logger import StructuredLogger, logger


def test_structured_logger_format(caplog):
    with caplog.at_level(logging.INFO, logger="wizmatik.events"):
        logger.log_event("images_fetched", session_id="abc123", extra={"page": 1, "added": 2})

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "images_fetched"
    assert payload["session_id"] == "abc123"
    assert payload["page"] == 1
    assert payload["added"] == 2
    assert "timestamp" in payload


def test_non_dict_extra_is_kept_as_field(caplog):
    events = StructuredLogger("wizmatik.test")
    with caplog.at_level(logging.INFO, logger="wizmatik.test"):
        events.log_event("page_advanced", extra="not-a-dict")

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["extra"] == "not-a-dict"


def test_proxies_plain_messages(caplog):
    with caplog.at_level(logging.INFO, logger="wizmatik.events"):
        logger.warning("Gallery page rendered without images (session=%s)", "s1")

    assert caplog.records[-1].levelno == logging.WARNING
    assert caplog.records[-1].getMessage() == "Gallery page rendered without images (session=s1)"


def test_bound_context_is_on_every_event(caplog):
    events = logger.bind(session_id="s1").bind(page_size=2)
    with caplog.at_level(logging.INFO, logger="wizmatik.events"):
        events.log_event("page_advanced", page=1)
        events.log_event("gallery_exhausted", page=1, total=3)

    payloads = [json.loads(record.getMessage()) for record in caplog.records[-2:]]
    assert [p["session_id"] for p in payloads] == ["s1", "s1"]
    assert [p["page_size"] for p in payloads] == [2, 2]
    assert payloads[1]["total"] == 3
    assert logger.context == {}


def test_events_below_level_are_not_emitted(caplog):
    events = StructuredLogger("wizmatik.test.quiet")
    with caplog.at_level(logging.WARNING, logger="wizmatik.test.quiet"):
        events.log_event("images_fetched", page=0)
        events.log_event("gallery_exhausted", level=logging.WARNING, page=0)

    assert [json.loads(r.getMessage())["event"] for r in caplog.records] == ["gallery_exhausted"]
    assert caplog.records[0].event == "gallery_exhausted"
