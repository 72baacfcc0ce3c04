"""Tests for logging setup: per-logger levels and the rotating file handler."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from logging.handlers import RotatingFileHandler

import pytest
from parkease.config import settings
from parkease.utils.logger import apply_log_levels, get_logger


@pytest.fixture
def scratch_logger():
    logger = logging.getLogger("parkease.tests.scratch")
    yield logger
    logger.setLevel(logging.NOTSET)


class TestLogLevels:
    def test_configured_overrides_are_applied(self):
        get_logger(__name__)
        for name, level in settings.LOG_LEVELS.items():
            assert logging.getLogger(name).level == logging.getLevelName(level.upper())

    def test_sqlalchemy_echo_quiet_by_default(self):
        get_logger(__name__)
        assert not logging.getLogger("sqlalchemy.engine").isEnabledFor(logging.INFO)

    def test_level_names_are_case_insensitive(self, scratch_logger):
        apply_log_levels({scratch_logger.name: "debug"})
        assert scratch_logger.level == logging.DEBUG

    def test_debug_override_reaches_handlers(self, scratch_logger):
        get_logger(__name__)
        apply_log_levels({scratch_logger.name: "DEBUG"})
        assert scratch_logger.isEnabledFor(logging.DEBUG)

        ours = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert ours
        assert all(h.level == logging.NOTSET for h in ours)


class TestFileHandler:
    def test_writes_to_configured_file_name(self):
        get_logger(__name__)
        [handler] = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert os.path.basename(handler.baseFilename) == settings.LOG_FILE
        assert handler.backupCount == 10
