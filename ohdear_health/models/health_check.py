"""健康检查相关的数据模型"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List


class CheckStatus(Enum):
    """检查状态枚举"""
    OK = "ok"
    WARNING = "warning"
    FAILED = "failed"


@dataclass(frozen=True)
class Limits:
    """告警阈值对，数值严格大于阈值时才升级状态"""
    warning: float = 0
    error: float = 0


@dataclass(frozen=True)
class ServiceTarget:
    """TCP服务探测目标，endpoint为完整的 host:port 地址"""
    name: str
    endpoint: str


@dataclass(frozen=True)
class CheckResult:
    """单项检查结果"""
    name: str
    label: str
    status: CheckStatus
    notification_message: str
    short_summary: str

    def to_dict(self) -> Dict[str, Any]:
        """转换为Oh Dear要求的字典格式"""
        return {
            'name': self.name,
            'label': self.label,
            'status': self.status.value,
            'notificationMessage': self.notification_message,
            'shortSummary': self.short_summary,
        }


@dataclass
class HealthCheckReport:
    """一次请求的完整检查报告"""
    finished_at: int
    check_results: List[CheckResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'finishedAt': self.finished_at,
            'checkResults': [result.to_dict() for result in self.check_results],
        }


@dataclass(frozen=True)
class HealthSettings:
    """单次请求使用的配置快照"""
    listen: str
    secret: str
    load_average: Limits = field(default_factory=Limits)
    memory_usage: Limits = field(default_factory=Limits)
    disk_usage: Limits = field(default_factory=Limits)
    tcp_services: List[ServiceTarget] = field(default_factory=list)
    fatal_metrics_errors: bool = True
