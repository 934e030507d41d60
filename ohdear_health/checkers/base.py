"""检查项生成器基类"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, List

from ..models.health_check import CheckResult, CheckStatus, HealthSettings
from ..utils.exceptions import MetricsError
from ..utils.log_manager import get_logger


class BaseCheckProducer(ABC):
    """检查项生成器抽象基类，每个子类负责一类检查"""

    # 采集失败时生成的降级结果使用的名称和标题
    name = ''
    label = ''

    def __init__(self, settings: HealthSettings):
        """
        初始化检查项生成器

        Args:
            settings: 本次请求的配置快照
        """
        self.settings = settings
        self.check_type = self.__class__.__name__.replace('CheckProducer', '').lower()
        self.logger = get_logger(f'checker.{self.check_type}')

    @abstractmethod
    async def produce(self) -> List[CheckResult]:
        """
        执行检查并返回结果

        Returns:
            List[CheckResult]: 按自然顺序排列的检查结果

        Raises:
            MetricsError: 主机指标采集失败
        """

    async def _query(self, func: Callable[..., Any], *args: Any) -> Any:
        """在线程池中执行阻塞的指标查询，避免阻塞事件循环"""
        return await asyncio.to_thread(func, *args)

    def failure_results(self, error: MetricsError) -> List[CheckResult]:
        """
        指标采集失败时的降级结果

        Args:
            error: 采集异常

        Returns:
            List[CheckResult]: 单个失败状态的检查结果
        """
        return [CheckResult(
            name=self.name,
            label=self.label,
            status=CheckStatus.FAILED,
            notification_message=f"{self.label} could not be measured: {error.cause or error.message}",
            short_summary="Unavailable",
        )]
