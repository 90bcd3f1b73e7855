from __future__ import annotations

import json
import logging

import pytest
import structlog

from teamcity_rest_client.core.logging import get_logger, setup_logging


@pytest.fixture
def restore_logging():
    yield
    for handler in logging.getLogger().handlers:
        handler.close()
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


def test_json_logging_to_file(tmp_path, restore_logging) -> None:
    log_file = tmp_path / "logs" / "client.log"

    setup_logging(log_level="INFO", log_format="json", log_file=str(log_file))
    get_logger("teamcity_rest_client.test").info("Fetched projects", count=2)
    logging.getLogger("plain.stdlib").warning("plain record")

    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    events = {record["event"]: record for record in records}

    assert events["Fetched projects"]["count"] == 2
    assert events["Fetched projects"]["level"] == "info"
    assert events["plain record"]["level"] == "warning"


def test_debug_events_filtered_at_info(tmp_path, restore_logging) -> None:
    log_file = tmp_path / "client.log"

    setup_logging(log_level="INFO", log_format="console", log_file=str(log_file))
    get_logger("teamcity_rest_client.test").debug("noisy detail")
    get_logger("teamcity_rest_client.test").warning("kept")

    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text()
    assert "kept" in content
    assert "noisy detail" not in content
