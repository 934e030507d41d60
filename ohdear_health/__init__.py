"""Oh Dear 应用健康检查端点"""

__version__ = "1.0.0"
