"""自定义异常类和错误处理系统"""

import traceback
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime


class ErrorCode(Enum):
    """错误代码枚举"""
    # 通用错误 (1000-1999)
    UNKNOWN_ERROR = 1000

    # 配置错误 (2000-2999)
    CONFIG_FILE_NOT_FOUND = 2000
    CONFIG_PARSE_ERROR = 2001
    CONFIG_VALIDATION_ERROR = 2002
    CONFIG_RELOAD_ERROR = 2003
    DEFAULT_SECRET = 2004

    # 指标采集错误 (3000-3999)
    DISK_QUERY_ERROR = 3000
    LOAD_QUERY_ERROR = 3001
    MEMORY_QUERY_ERROR = 3002

    # 响应错误 (4000-4999)
    SERIALIZATION_ERROR = 4000


class OhDearHealthError(Exception):
    """健康检查端点基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            'error_code': self.error_code.value,
            'error_name': self.error_code.name,
            'message': self.message,
            'details': self.details,
            'recoverable': self.recoverable,
            'timestamp': self.timestamp.isoformat(),
            'cause': str(self.cause) if self.cause else None,
            'traceback': traceback.format_exc() if self.cause else None
        }

    def format_error(self) -> str:
        """格式化错误信息"""
        error_msg = f"[{self.error_code.name}] {self.message}"
        if self.details:
            details_str = ", ".join([f"{k}={v}" for k, v in self.details.items()])
            error_msg += f" (详情: {details_str})"
        if self.cause:
            error_msg += f" (原因: {str(self.cause)})"
        return error_msg


class ConfigError(OhDearHealthError):
    """配置相关异常，启动阶段出现即终止进程"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_VALIDATION_ERROR,
        config_path: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if config_path:
            details['config_path'] = config_path
        kwargs.setdefault('recoverable', False)
        super().__init__(message, error_code, details, **kwargs)


class MetricsError(OhDearHealthError):
    """主机指标采集异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DISK_QUERY_ERROR,
        check_name: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop('details', {})
        if check_name:
            details['check_name'] = check_name
        kwargs.setdefault('recoverable', False)
        super().__init__(message, error_code, details, **kwargs)


class SerializationError(OhDearHealthError):
    """报告序列化异常"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('recoverable', False)
        super().__init__(message, ErrorCode.SERIALIZATION_ERROR, **kwargs)
