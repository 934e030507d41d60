"""错误处理器和致命错误退出"""

import os
from typing import Any, Dict, NoReturn, Optional

from .exceptions import OhDearHealthError
from .log_manager import get_logger, log_manager

logger = get_logger('error_handler')


class ErrorHandler:
    """统一错误处理器，记录错误并统计各类错误出现次数"""

    def __init__(self):
        self.error_stats: Dict[str, int] = {}

    def handle_error(
            self,
            error: Exception,
            context: Optional[Dict[str, Any]] = None
    ) -> None:
        """记录错误"""
        context = context or {}

        error_type = type(error).__name__
        self.error_stats[error_type] = self.error_stats.get(error_type, 0) + 1

        if isinstance(error, OhDearHealthError):
            logger.error(f"处理系统错误: {error.format_error()}",
                         extra={'error_details': error.to_dict(), 'context': context})
        else:
            logger.error(f"处理未知错误: {str(error)}", exc_info=True)

    def get_error_stats(self) -> Dict[str, int]:
        """获取错误统计信息"""
        return self.error_stats.copy()


def fatal_exit(error: Exception, exit_code: int = 1) -> NoReturn:
    """
    记录致命错误并立即终止进程

    不执行清理回调，与请求处理过程中的指标采集失败语义一致。

    Args:
        error: 导致退出的异常
        exit_code: 进程退出码
    """
    if isinstance(error, OhDearHealthError):
        logger.critical(f"致命错误，进程退出: {error.format_error()}")
    else:
        logger.critical(f"致命错误，进程退出: {error}", exc_info=error)

    try:
        log_manager.flush()
    finally:
        os._exit(exit_code)


# 全局错误处理器实例
error_handler = ErrorHandler()
