"""测试日志管理器"""

import logging
import logging.handlers
import os
import tempfile

import pytest

from ohdear_health.utils.log_manager import LogManager, LogLevel, get_logger, log_manager


class TestLogManager:
    """测试LogManager类"""

    def test_singleton(self):
        assert LogManager() is log_manager

    def test_get_logger_cached(self):
        logger = get_logger('test.cached')

        assert get_logger('test.cached') is logger
        assert logger.name == 'ohdear_health.test.cached'
        assert logger.propagate is False

    def test_configure_updates_existing_loggers(self):
        logger = get_logger('test.level')

        log_manager.configure({'log_level': 'debug'})

        assert log_manager.log_level is LogLevel.DEBUG
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="无效的日志级别"):
            log_manager.configure({'log_level': 'VERBOSE'})

    def test_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = os.path.join(tmp_dir, 'logs', 'ohdear-health.log')
            logger = get_logger('test.file')

            log_manager.configure({'log_file': log_file})
            logger.info("写入日志文件")
            log_manager.flush()

            assert any(isinstance(h, logging.handlers.RotatingFileHandler)
                       for h in logger.handlers)
            with open(log_file, encoding='utf-8') as f:
                assert "写入日志文件" in f.read()

            log_manager.configure({'log_file': None})
            assert not any(isinstance(h, logging.handlers.RotatingFileHandler)
                           for h in logger.handlers)

    def test_set_level(self):
        logger = get_logger('test.set_level')

        log_manager.set_level(LogLevel.ERROR)

        assert logger.level == logging.ERROR

    def test_file_rotation_settings(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = os.path.join(tmp_dir, 'ohdear-health.log')
            logger = get_logger('test.rotation')

            log_manager.configure({'log_file': log_file, 'max_file_size': 2048,
                                   'backup_count': 2})

            file_handler = next(h for h in logger.handlers
                                if isinstance(h, logging.handlers.RotatingFileHandler))
            assert file_handler.maxBytes == 2048
            assert file_handler.backupCount == 2

            log_manager.configure({'log_file': None})
