import logging

from capitalgains.logging.config import ProfessionalFormatter, configure_logging


def _record(level: int) -> logging.LogRecord:
    return logging.LogRecord("capitalgains.test", level, __file__, 1, "hello", None, None)


def test_professional_formatter_uses_short_level_names():
    fmt = ProfessionalFormatter()
    assert "| INF | capitalgains.test | hello" in fmt.format(_record(logging.INFO))
    assert "| WRN |" in fmt.format(_record(logging.WARNING))
    assert "| DBG |" in fmt.format(_record(logging.DEBUG))


def test_configure_logging_sets_level_and_is_idempotent():
    root = logging.getLogger()
    previous_level = root.level
    try:
        configure_logging(logging.DEBUG)
        handlers = list(root.handlers)
        configure_logging(logging.INFO)

        assert root.level == logging.INFO
        assert root.handlers == handlers
    finally:
        root.setLevel(previous_level)
