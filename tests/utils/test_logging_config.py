"""Unit tests for onboarding/utils/logging_config.py."""

import logging
import uuid

import pytest

from onboarding.utils.logging_config import configure_logging, setup_logger


@pytest.fixture
def logger_name():
    """Unique logger name so handler caching doesn't leak between tests."""
    name = f"test_{uuid.uuid4().hex[:8]}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:
    def test_stderr_only_when_log_file_blank(self, logger_name):
        logger = setup_logger(logger_name, log_file="")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_handler_appends(self, logger_name, tmp_path):
        log_path = tmp_path / "logs" / "automation.log"
        log_path.parent.mkdir()
        log_path.write_text("earlier line\n", encoding="utf-8")

        logger = setup_logger(logger_name, log_file=log_path)
        logger.info("Number %s is found on WhatsApp.", "111")
        for handler in logger.handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert content.startswith("earlier line\n")
        assert f"[INFO] [{logger_name}] Number 111 is found on WhatsApp." in content

    def test_creates_parent_directories(self, logger_name, tmp_path):
        log_path = tmp_path / "deep" / "dir" / "run.log"
        setup_logger(logger_name, log_file=log_path)
        assert log_path.parent.is_dir()

    def test_log_file_from_env(self, logger_name, tmp_path, monkeypatch):
        log_path = tmp_path / "env.log"
        monkeypatch.setenv("LOG_FILE", str(log_path))
        logger = setup_logger(logger_name)
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)

    def test_level_from_env(self, logger_name, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = setup_logger(logger_name, log_file="")
        assert logger.level == logging.WARNING

    def test_explicit_level_wins(self, logger_name, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        logger = setup_logger(logger_name, log_level="DEBUG", log_file="")
        assert logger.level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self, logger_name):
        logger = setup_logger(logger_name, log_level="chatty", log_file="")
        assert logger.level == logging.INFO

    def test_no_duplicate_handlers(self, logger_name):
        first = setup_logger(logger_name, log_file="")
        second = setup_logger(logger_name, log_file="")
        assert first is second
        assert len(second.handlers) == 1

    def test_format(self, logger_name):
        logger = setup_logger(logger_name, log_file="")
        fmt = logger.handlers[0].formatter
        record = logging.LogRecord(logger_name, logging.WARNING, __file__, 1, "hello", None, None)
        line = fmt.format(record)
        assert line.endswith(f"[WARNING] [{logger_name}] hello")
        assert line.startswith("[")


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_override(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        yield
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        configure_logging()

    def test_relevels_existing_logger(self, logger_name):
        logger = setup_logger(logger_name, log_file="")
        assert logger.level == logging.INFO

        configure_logging("ERROR")

        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1

    def test_override_applies_to_new_loggers(self, logger_name):
        configure_logging("WARNING")
        assert setup_logger(logger_name, log_file="").level == logging.WARNING

    def test_picks_up_env_set_after_creation(self, logger_name, monkeypatch):
        logger = setup_logger(logger_name, log_file="")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        configure_logging()

        assert logger.level == logging.DEBUG
