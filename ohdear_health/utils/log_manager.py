"""
日志管理器模块

提供统一的日志记录功能，支持控制台（标准错误）和轮转文件输出，
日志级别可以由配置文件 Core.LogLevel 或命令行参数指定。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any, List
from enum import Enum


class LogLevel(Enum):
    """日志级别枚举"""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogManager:
    """
    日志管理器类

    所有组件通过 get_logger 获取日志记录器，重新配置时
    已创建的日志记录器会同步更新级别和处理器。
    """

    _instance: Optional['LogManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LogManager':
        """单例模式实现"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """初始化日志管理器"""
        if self._initialized:
            return

        self._loggers: Dict[str, logging.Logger] = {}
        self._file_format = (
            '%(asctime)s - %(name)s - %(levelname)s - '
            '[%(filename)s:%(lineno)d] - %(message)s'
        )
        self._console_format = '%(asctime)s - %(levelname)s - %(message)s'
        self._date_format = '%Y-%m-%d %H:%M:%S'

        self._log_level = LogLevel.INFO
        self._log_file: Optional[str] = None
        self._max_file_size = 10 * 1024 * 1024  # 10MB
        self._backup_count = 5

        self._initialized = True

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    def configure(self, config: Dict[str, Any]) -> None:
        """
        配置日志管理器

        Args:
            config: 日志配置字典，包含以下可选键：
                - log_level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                - log_file: 日志文件路径，为空时只输出到控制台
                - max_file_size: 最大文件大小（字节）
                - backup_count: 备份文件数量

        Raises:
            ValueError: 日志级别无效
        """
        if config.get('log_level'):
            level_str = str(config['log_level']).upper()
            if not hasattr(LogLevel, level_str):
                raise ValueError(f"无效的日志级别: {level_str}")
            self._log_level = LogLevel[level_str]

        if 'log_file' in config:
            self._log_file = config['log_file'] or None

        if 'max_file_size' in config:
            self._max_file_size = config['max_file_size']

        if 'backup_count' in config:
            self._backup_count = config['backup_count']

        for logger in self._loggers.values():
            self._setup_handlers(logger)

    def get_logger(self, name: str) -> logging.Logger:
        """
        获取指定名称的日志记录器

        Args:
            name: 日志记录器名称

        Returns:
            配置好的日志记录器实例
        """
        if name in self._loggers:
            return self._loggers[name]

        logger = logging.getLogger(f'ohdear_health.{name}')
        self._setup_handlers(logger)

        # 防止日志向上传播
        logger.propagate = False

        self._loggers[name] = logger
        return logger

    def _setup_handlers(self, logger: logging.Logger) -> None:
        """按当前配置重建日志记录器的处理器"""
        logger.setLevel(self._log_level.value)

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        for handler in self._build_handlers():
            logger.addHandler(handler)

    def _build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self._log_level.value)
        console_handler.setFormatter(
            logging.Formatter(self._console_format, datefmt=self._date_format))
        handlers.append(console_handler)

        if self._log_file:
            Path(self._log_file).parent.mkdir(parents=True, exist_ok=True)

            # 使用RotatingFileHandler实现日志轮转
            file_handler = logging.handlers.RotatingFileHandler(
                self._log_file,
                maxBytes=self._max_file_size,
                backupCount=self._backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(self._log_level.value)
            file_handler.setFormatter(
                logging.Formatter(self._file_format, datefmt=self._date_format))
            handlers.append(file_handler)

        return handlers

    def set_level(self, level: LogLevel) -> None:
        """
        设置全局日志级别

        Args:
            level: 新的日志级别
        """
        self._log_level = level

        for logger in self._loggers.values():
            logger.setLevel(level.value)
            for handler in logger.handlers:
                handler.setLevel(level.value)

    def flush(self) -> None:
        """刷新所有处理器的缓冲区"""
        for logger in self._loggers.values():
            for handler in logger.handlers:
                handler.flush()


# 全局日志管理器实例
log_manager = LogManager()


def get_logger(name: str) -> logging.Logger:
    """
    获取日志记录器的便捷函数

    Args:
        name: 日志记录器名称

    Returns:
        配置好的日志记录器实例
    """
    return log_manager.get_logger(name)


def configure_logging(config: Dict[str, Any]) -> None:
    """
    配置日志系统的便捷函数

    Args:
        config: 日志配置字典
    """
    log_manager.configure(config)
