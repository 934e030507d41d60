"""工具模块"""

from .exceptions import (OhDearHealthError, ConfigError, MetricsError, SerializationError,
                         ErrorCode)
from .log_manager import LogManager, LogLevel, get_logger, configure_logging, log_manager

__all__ = [
    'OhDearHealthError', 'ConfigError', 'MetricsError', 'SerializationError', 'ErrorCode',
    'LogManager', 'LogLevel', 'get_logger', 'configure_logging', 'log_manager'
]
