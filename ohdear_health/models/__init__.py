"""数据模型模块"""

from .health_check import (CheckResult, CheckStatus, HealthCheckReport, HealthSettings,
                           Limits, ServiceTarget)

__all__ = ['CheckResult', 'CheckStatus', 'HealthCheckReport', 'HealthSettings',
           'Limits', 'ServiceTarget']
