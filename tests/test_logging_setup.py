import json
import logging
import sys

import pytest
from loguru import logger

from wordguard.utils.logging_setup import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    logger.remove()
    logger.configure(extra={})
    logger.add(sys.stderr)
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_records_carry_service_name(capsys, restore_logging):
    setup_logging(level="INFO", format="json", service_name="wordguard-test")
    logger.info("hello")

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]
    record = lines[-1]["record"]
    assert record["message"] == "hello"
    assert record["extra"]["service"] == "wordguard-test"


def test_stdlib_logging_is_forwarded(capsys, restore_logging):
    setup_logging(level="INFO", format="json")
    logging.getLogger("wordguard.test").warning("from stdlib %s", 42)

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]
    record = lines[-1]["record"]
    assert record["message"] == "from stdlib 42"
    assert record["level"]["name"] == "WARNING"
    assert record["extra"]["service"] == "wordguard"
