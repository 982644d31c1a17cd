import logging

import pytest
from spendscan.runtime.logging import DEFAULT_LOG_LEVEL, get_logger, parse_log_level


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARN ", logging.WARNING),
        ("ERROR", logging.ERROR),
        (logging.INFO, logging.INFO),
        ("chatty", DEFAULT_LOG_LEVEL),
        (None, DEFAULT_LOG_LEVEL),
    ],
)
def test_parse_log_level(value: str | int | None, expected: int) -> None:
    assert parse_log_level(value) == expected


def test_get_logger_uses_namespace() -> None:
    assert get_logger("spendscan.runtime.paths").name == "spendscan.runtime.paths"
    assert get_logger("scripts.backfill").name == "spendscan.scripts.backfill"
