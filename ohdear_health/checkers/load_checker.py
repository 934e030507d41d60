"""系统负载检查"""

from typing import List

import psutil

from .base import BaseCheckProducer
from .classifier import classify
from .factory import register_producer
from ..models.health_check import CheckResult
from ..utils.exceptions import ErrorCode, MetricsError


@register_producer('load')
class LoadCheckProducer(BaseCheckProducer):
    """5分钟平均负载检查"""

    name = 'LoadAvg'
    label = 'Load Average Over 5 Minutes'

    async def produce(self) -> List[CheckResult]:
        try:
            _, load5, _ = await self._query(psutil.getloadavg)
        except Exception as e:
            raise MetricsError(f"获取系统负载失败: {e}",
                               error_code=ErrorCode.LOAD_QUERY_ERROR,
                               check_name=self.name, cause=e)

        status, qualifier = classify(load5, self.settings.load_average)
        self.logger.debug(f"5分钟平均负载 {load5:.2f}，状态: {status.value}")

        return [CheckResult(
            name=self.name,
            label=self.label,
            status=status,
            notification_message=f"Load Average {qualifier} ({load5:.1f})",
            short_summary=f"{load5:.1f}",
        )]
