import io
import logging

import pytest

from ethtx.utils.logging import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    configure_logging,
    disable_logging,
    get_logger,
    set_level,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    disabled = logger.disabled
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.disabled = disabled


def test_get_logger_namespaces():
    assert get_logger("ethtx.fees").name == "ethtx.fees"
    assert get_logger("ethtx").name == "ethtx"
    assert get_logger("scripts.deploy").name == "ethtx.scripts.deploy"


def test_library_is_silent_by_default():
    handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_configure_logging_renders_extras():
    stream = io.StringIO()
    configure_logging(logging.DEBUG, fmt="%(levelname)s %(message)s", stream=stream)

    get_logger("ethtx.broadcast").warning("hash mismatch", extra={"returned_hash": "0x02", "computed_hash": "0x01"})

    assert stream.getvalue().strip() == "WARNING hash mismatch | computed_hash=0x01 returned_hash=0x02"


def test_configure_logging_replaces_previous_handler():
    configure_logging(stream=io.StringIO())
    configure_logging(stream=io.StringIO())

    ours = [h for h in logging.getLogger(ROOT_LOGGER_NAME).handlers if getattr(h, "_ethtx_handler", False)]
    assert len(ours) == 1


def test_set_level_and_disable():
    stream = io.StringIO()
    configure_logging(logging.INFO, fmt="%(message)s", stream=stream)
    log = get_logger("ethtx.receipts")

    set_level(logging.WARNING)
    log.info("hidden")
    log.warning("shown")
    disable_logging()
    log.warning("also hidden")

    assert stream.getvalue().splitlines() == ["shown"]


def test_formatter_without_extras():
    record = logging.LogRecord("ethtx", logging.INFO, __file__, 1, "plain", (), None)
    assert StructuredFormatter("%(message)s").format(record) == "plain"
