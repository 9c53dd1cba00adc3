import logging

import pytest

from ooxml_templater import logging_config
from ooxml_templater.config import ConfigManager


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    package_logger = logging.getLogger("ooxml_templater")
    saved_package = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    for handler in package_logger.handlers:
        if handler not in saved_package[0]:
            handler.close()
    package_logger.handlers, package_logger.level, package_logger.propagate = (
        saved_package[0], saved_package[1], saved_package[2],
    )
    root.handlers, root.level = saved_handlers, saved_level


class TestSetupLogging:
    def test_config_file_handler_goes_to_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OOXML_TEMPLATER_LOG_DIR", str(tmp_path / "logs"))

        logging_config.setup_logging()

        handlers = logging.getLogger("ooxml_templater").handlers
        file_handlers = [h for h in handlers if isinstance(h, logging.FileHandler)]
        assert file_handlers
        assert file_handlers[0].baseFilename == str(tmp_path / "logs" / "app.log")

    def test_minimal_fallback_without_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OOXML_TEMPLATER_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setattr(ConfigManager, "get_logging_config", lambda self: {})

        logging_config.setup_logging()

        assert logging.getLogger().level == logging.INFO
        assert not (tmp_path / "logs").exists()

    def test_debug_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OOXML_TEMPLATER_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("OOXML_TEMPLATER_DEBUG_MODULES", "ooxml_templater.core.fetch, ")

        logging_config.setup_logging()

        fetch_logger = logging.getLogger("ooxml_templater.core.fetch")
        try:
            assert fetch_logger.level == logging.DEBUG
            assert any(h.level <= logging.DEBUG for h in fetch_logger.handlers)
        finally:
            fetch_logger.setLevel(logging.NOTSET)
            for handler in list(fetch_logger.handlers):
                fetch_logger.removeHandler(handler)
