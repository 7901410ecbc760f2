"""Structured Logging — handler installation and JSON output.

Tests:
    - setup_logging keeps handlers it did not install
    - Repeated setup_logging calls leave exactly one SensorHub handler
    - JSONFormatter surfaces known extras and drops unknown ones
"""

import json
import logging

import pytest

from sensorhub.infrastructure.observability import JSONFormatter, setup_logging


@pytest.fixture
def clean_root():
    saved_handlers = list(logging.root.handlers)
    saved_level = logging.root.level
    yield logging.root
    logging.root.handlers = saved_handlers
    logging.root.setLevel(saved_level)


def _own_handlers(root):
    return [h for h in root.handlers if getattr(h, "_sensorhub_handler", False)]


def test_existing_handlers_are_kept(clean_root):
    foreign = logging.NullHandler()
    clean_root.addHandler(foreign)

    setup_logging("INFO", "json")

    assert foreign in clean_root.handlers
    assert len(_own_handlers(clean_root)) == 1


def test_repeated_setup_installs_one_handler(clean_root):
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")

    own = _own_handlers(clean_root)
    assert len(own) == 1
    assert not isinstance(own[0].formatter, JSONFormatter)
    assert clean_root.level == logging.DEBUG


def test_json_formatter_includes_known_extras():
    record = logging.LogRecord(
        "sensorhub.test", logging.INFO, __file__, 1, "Reading stored", None, None,
    )
    record.device_id = "dev1"
    record.unrelated = "ignored"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Reading stored"
    assert payload["device_id"] == "dev1"
    assert "unrelated" not in payload
