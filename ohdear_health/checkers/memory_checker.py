"""内存使用率检查"""

from typing import List

import psutil

from .base import BaseCheckProducer
from .classifier import classify
from .factory import register_producer
from ..models.health_check import CheckResult
from ..utils.exceptions import ErrorCode, MetricsError


@register_producer('memory')
class MemoryCheckProducer(BaseCheckProducer):
    """虚拟内存使用率检查"""

    name = 'MemUsage'
    label = 'Memory Usage in Percentage'

    async def produce(self) -> List[CheckResult]:
        try:
            memory = await self._query(psutil.virtual_memory)
        except Exception as e:
            raise MetricsError(f"获取内存使用率失败: {e}",
                               error_code=ErrorCode.MEMORY_QUERY_ERROR,
                               check_name=self.name, cause=e)

        used_percent = memory.percent
        status, qualifier = classify(used_percent, self.settings.memory_usage)
        self.logger.debug(f"内存使用率 {used_percent:.1f}%，状态: {status.value}")

        return [CheckResult(
            name=self.name,
            label=self.label,
            status=status,
            notification_message=f"Memory Usage {qualifier} ({used_percent:.1f}%)",
            short_summary=f"{used_percent:.1f}%",
        )]
