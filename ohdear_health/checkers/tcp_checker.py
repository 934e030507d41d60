"""TCP服务可用性检查"""

import asyncio
from typing import List, Tuple

from .base import BaseCheckProducer
from .factory import register_producer
from ..models.health_check import CheckResult, CheckStatus, ServiceTarget

DIAL_TIMEOUT = 1.0


def parse_endpoint(endpoint: str) -> Tuple[str, int]:
    """
    解析 host:port 形式的地址，支持 [::1]:6379 形式的IPv6地址

    主机名为空时连接本机。

    Raises:
        ValueError: 地址格式无效
    """
    host, separator, port = endpoint.rpartition(':')
    if not separator or not port.isdigit():
        raise ValueError(f"缺少端口号: {endpoint!r}")

    port_number = int(port)
    if port_number > 65535:
        raise ValueError(f"端口号超出范围: {endpoint!r}")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    elif ':' in host:
        raise ValueError(f"IPv6地址需要使用方括号: {endpoint!r}")

    return host or '127.0.0.1', port_number


@register_producer('tcp')
class TcpCheckProducer(BaseCheckProducer):
    """TCP服务可用性检查，每个配置的服务生成一个结果"""

    async def produce(self) -> List[CheckResult]:
        """并发探测所有服务，结果保持配置顺序"""
        targets = self.settings.tcp_services
        reachable = await asyncio.gather(*(self._dial(target) for target in targets))
        return [self._build_result(target, ok) for target, ok in zip(targets, reachable)]

    async def _dial(self, target: ServiceTarget) -> bool:
        """
        尝试建立一次TCP连接，连接成功后立即关闭

        Returns:
            bool: 是否在超时时间内连接成功
        """
        try:
            host, port = parse_endpoint(target.endpoint)
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=DIAL_TIMEOUT)
        except asyncio.TimeoutError:
            self.logger.warning(f"服务 {target.name} ({target.endpoint}) 连接超时")
            return False
        except (OSError, ValueError) as e:
            self.logger.warning(f"服务 {target.name} ({target.endpoint}) 无法连接: {e}")
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            self.logger.debug(f"关闭到 {target.endpoint} 的连接时出错: {e}")

        self.logger.debug(f"服务 {target.name} ({target.endpoint}) 连接成功")
        return True

    @staticmethod
    def _build_result(target: ServiceTarget, reachable: bool) -> CheckResult:
        if reachable:
            return CheckResult(
                name=target.name,
                label=f"{target.name} Service Availability",
                status=CheckStatus.OK,
                notification_message=f"Service {target.name} is available",
                short_summary="Available",
            )

        return CheckResult(
            name=target.name,
            label=f"{target.name} Service Availability",
            status=CheckStatus.FAILED,
            notification_message=f"Service {target.name} is not connectable",
            short_summary="Can't Connect",
        )
