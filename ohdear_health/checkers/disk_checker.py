"""磁盘使用率检查"""

from typing import List

import psutil

from .base import BaseCheckProducer
from .classifier import classify
from .factory import register_producer
from ..models.health_check import CheckResult
from ..utils.exceptions import ErrorCode, MetricsError

# 只检查真实的数据卷
CHECKED_FILESYSTEMS = ('ext3', 'ext4')


@register_producer('disk')
class DiskCheckProducer(BaseCheckProducer):
    """磁盘使用率检查，每个 ext3/ext4 分区生成一个结果"""

    name = 'UsedDiskSpace'
    label = 'Used Disk Space'

    async def produce(self) -> List[CheckResult]:
        """
        检查所有物理分区的使用率

        结果名称使用分区在完整枚举中的下标，被跳过的分区同样占用下标。

        Raises:
            MetricsError: 分区列表或使用率查询失败
        """
        try:
            partitions = await self._query(psutil.disk_partitions, False)
        except Exception as e:
            raise MetricsError(f"获取磁盘分区列表失败: {e}",
                               error_code=ErrorCode.DISK_QUERY_ERROR,
                               check_name=self.name, cause=e)

        limits = self.settings.disk_usage
        results = []

        for index, partition in enumerate(partitions):
            if partition.fstype not in CHECKED_FILESYSTEMS:
                self.logger.debug(f"跳过分区 {partition.mountpoint} ({partition.fstype})")
                continue

            try:
                usage = await self._query(psutil.disk_usage, partition.mountpoint)
            except Exception as e:
                raise MetricsError(f"获取分区 {partition.mountpoint} 使用率失败: {e}",
                                   error_code=ErrorCode.DISK_QUERY_ERROR,
                                   check_name=f"{self.name}{index}", cause=e)

            status, qualifier = classify(usage.percent, limits)
            self.logger.debug(
                f"分区 {partition.mountpoint} 使用率 {usage.percent:.1f}%，状态: {status.value}")

            results.append(CheckResult(
                name=f"{self.name}{index}",
                label=f"{self.label}: {partition.mountpoint}",
                status=status,
                notification_message=f"Disk usage {qualifier} ({usage.percent:.0f}% used)",
                short_summary=f"{usage.percent:.0f}%",
            ))

        return results
