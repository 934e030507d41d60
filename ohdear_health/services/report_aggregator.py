"""检查报告汇总"""

import json
import time
from typing import Callable, Iterable, List, Optional

from ..models.health_check import CheckResult, HealthCheckReport
from ..utils.exceptions import SerializationError


class ReportAggregator:
    """按生成器调用顺序收集检查结果并生成报告"""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: 返回当前时间戳的函数，默认 time.time
        """
        self._clock = clock or time.time
        self._results: List[CheckResult] = []

    def extend(self, results: Iterable[CheckResult]) -> None:
        """追加一个生成器的结果"""
        self._results.extend(results)

    def __len__(self) -> int:
        return len(self._results)

    def build_report(self) -> HealthCheckReport:
        """
        生成报告，finishedAt 为完成时的Unix时间戳（秒）
        """
        return HealthCheckReport(finished_at=int(self._clock()),
                                 check_results=list(self._results))


def serialize_report(report: HealthCheckReport) -> str:
    """
    序列化报告为使用制表符缩进的JSON

    Raises:
        SerializationError: 序列化失败
    """
    try:
        return json.dumps(report.to_dict(), indent='\t', ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"报告序列化失败: {e}", cause=e)
