import logging

from catatuang.logging_setup import _parse_level, get_logger


def test_parse_level():
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level(" WARNING ") == logging.WARNING
    assert _parse_level("15") == 15
    assert _parse_level(logging.ERROR) == logging.ERROR
    assert _parse_level("nonsense") == logging.INFO


def test_get_logger_is_silent_by_default():
    logger = get_logger("catatuang.tests")
    assert logger.name == "catatuang.tests"
    assert logging.getLogger("catatuang").handlers
