import json
import logging

from billsplit.core.config import Settings
from billsplit.core.logging import StructuredFormatter, setup_logging


class TestSetupLogging:
    def test_disabled_logger_only_has_null_handler(self):
        logger = setup_logging(Settings(LOG_ENABLED=False))
        assert logger.disabled is True
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_enabled_logger_uses_configured_level(self):
        logger = setup_logging(Settings(LOG_ENABLED=True, LOG_LEVEL="debug"))
        assert logger.disabled is False
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        setup_logging(Settings(LOG_ENABLED=False))

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging(Settings(LOG_ENABLED=True))
        logger = setup_logging(Settings(LOG_ENABLED=True))
        assert len(logger.handlers) == 1
        setup_logging(Settings(LOG_ENABLED=False))


def test_structured_formatter_emits_json_with_extra():
    record = logging.LogRecord(
        name="billsplit.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="rejected %s",
        args=("split",),
        exc_info=None,
    )
    record.path = "/api/v1/splits/"

    entry = json.loads(StructuredFormatter().format(record))
    assert entry["level"] == "WARNING"
    assert entry["message"] == "rejected split"
    assert entry["path"] == "/api/v1/splits/"
