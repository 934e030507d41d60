"""HTTP服务模块"""

from .app import create_app, parse_listen, HEALTH_CHECK_PATH

__all__ = ['create_app', 'parse_listen', 'HEALTH_CHECK_PATH']
