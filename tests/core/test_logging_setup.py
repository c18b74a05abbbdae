import logging

from rich.logging import RichHandler

from sitemeta.core.logging import configure_logging


def _managed_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if getattr(h, "_sitemeta_managed", False)]


def test_configure_logging_is_idempotent(monkeypatch):
    monkeypatch.delenv("SITEMETA_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    previous_level = root.level
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")

        handlers = _managed_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert root.level == logging.WARNING
    finally:
        for handler in _managed_handlers():
            root.removeHandler(handler)
        root.setLevel(previous_level)


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("SITEMETA_LOG_LEVEL", "error")
    root = logging.getLogger()
    previous_level = root.level
    try:
        configure_logging()
        assert root.level == logging.ERROR
    finally:
        for handler in _managed_handlers():
            root.removeHandler(handler)
        root.setLevel(previous_level)
