"""服务模块"""

from .access_gate import AccessGate, SECRET_HEADER
from .config_manager import ConfigManager, ConfigProvider, find_config_file
from .health_service import HealthCheckService, PRODUCER_ORDER
from .report_aggregator import ReportAggregator, serialize_report

__all__ = ['AccessGate', 'SECRET_HEADER', 'ConfigManager', 'ConfigProvider', 'find_config_file',
           'HealthCheckService', 'PRODUCER_ORDER', 'ReportAggregator', 'serialize_report']
