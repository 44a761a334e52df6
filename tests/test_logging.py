import logging
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from wordle.logging import QUIET_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    """Close and remove all handlers from the root logger after each test."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            handler.close()
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class TestSetupLogging:
    def test_configures_stdout_handler(self):
        assert setup_logging() is None
        root = logging.getLogger()

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler_in_log_dir(self, tmp_path):
        log_dir = tmp_path / "nested" / "logs"
        log_path = setup_logging(log_dir=str(log_dir))
        root = logging.getLogger()

        assert len(root.handlers) == 2
        file_handler = root.handlers[1]
        assert isinstance(file_handler, logging.FileHandler)
        assert Path(file_handler.baseFilename).parent == log_dir
        assert log_path is not None and log_path.suffix == ".log"

    def test_log_file_has_datetime_in_name(self, tmp_path):
        fixed_time = datetime(2025, 3, 15, 10, 30, 45, tzinfo=timezone.utc)
        with patch("wordle.logging.datetime") as mock_dt:
            mock_dt.now.return_value = fixed_time
            log_path = setup_logging(log_dir=tmp_path)

        assert log_path is not None
        assert log_path.name == "2025-03-15_10-30-45.log"

    def test_writes_to_file(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path)

        logging.getLogger("wordle.test").info("Day change detected")

        assert "Day change detected" in log_path.read_text()
        assert "[wordle.test]" in log_path.read_text()

    def test_repeated_calls_do_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_level_by_name(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_chatty_libraries_are_quieted(self):
        setup_logging(level="DEBUG")

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert logging.getLogger("wordle.coordinator").isEnabledFor(logging.DEBUG)
