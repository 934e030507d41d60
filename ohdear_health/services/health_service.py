"""健康检查请求处理流程"""

import asyncio
from typing import Callable, Optional

from .config_manager import ConfigProvider
from .report_aggregator import ReportAggregator
from ..checkers.factory import CheckProducerFactory, check_producer_factory
from ..models.health_check import CheckStatus, HealthCheckReport, HealthSettings
from ..utils.error_handler import error_handler
from ..utils.exceptions import ConfigError, MetricsError
from ..utils.log_manager import get_logger

# 生成器固定调用顺序，决定报告中结果的顺序
PRODUCER_ORDER = ('disk', 'load', 'memory', 'tcp')


class HealthCheckService:
    """
    每次请求的检查流程：重新加载配置 -> 依次执行生成器 -> 汇总报告

    服务本身不保存请求之间的状态，可以被并发调用。
    """

    def __init__(self,
                 config_provider: ConfigProvider,
                 factory: CheckProducerFactory = check_producer_factory,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            config_provider: 配置提供者
            factory: 检查项生成器工厂
            clock: 报告时间戳使用的时钟，默认 time.time
        """
        self.config_provider = config_provider
        self.factory = factory
        self.clock = clock
        self.logger = get_logger('health_service')

    def current_settings(self) -> HealthSettings:
        """最近一次成功加载的配置，用于请求鉴权"""
        return self.config_provider.get_settings()

    def reload_settings(self) -> HealthSettings:
        """
        重新读取配置，失败时继续使用上一次成功加载的配置
        """
        try:
            return self.config_provider.reload_config()
        except ConfigError as e:
            error_handler.handle_error(e, {'stage': 'reload'})
            self.logger.warning("配置重新加载失败，继续使用上一次的配置")
            return self.config_provider.get_settings()

    async def run_checks(self, settings: HealthSettings) -> HealthCheckReport:
        """
        按固定顺序执行所有检查

        Args:
            settings: 本次请求的配置快照

        Returns:
            HealthCheckReport: 检查报告

        Raises:
            MetricsError: 指标采集失败且配置为致命错误
        """
        aggregator = ReportAggregator(self.clock)

        for check_type in PRODUCER_ORDER:
            producer = self.factory.create_producer(check_type, settings)
            try:
                results = await producer.produce()
            except MetricsError as e:
                if settings.fatal_metrics_errors:
                    raise
                error_handler.handle_error(e, {'check_type': check_type})
                results = producer.failure_results(e)

            self.logger.debug(f"{check_type} 检查生成 {len(results)} 个结果")
            aggregator.extend(results)

        report = aggregator.build_report()
        failed = sum(1 for r in report.check_results if r.status is not CheckStatus.OK)
        self.logger.info(f"健康检查完成，共 {len(aggregator)} 项，异常 {failed} 项")
        return report

    async def evaluate(self) -> HealthCheckReport:
        """重新加载配置并执行一次完整的检查"""
        settings = await asyncio.to_thread(self.reload_settings)
        return await self.run_checks(settings)
