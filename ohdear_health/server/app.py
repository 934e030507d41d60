"""健康检查HTTP端点"""

from typing import Callable, Optional, Tuple

from aiohttp import web

from ..services.access_gate import AccessGate, SECRET_HEADER
from ..services.health_service import HealthCheckService
from ..services.report_aggregator import serialize_report
from ..utils.error_handler import fatal_exit
from ..utils.exceptions import MetricsError, SerializationError
from ..utils.log_manager import get_logger

HEALTH_CHECK_PATH = '/health-check'

SERVICE_KEY = web.AppKey('health_service', HealthCheckService)
GATE_KEY = web.AppKey('access_gate', AccessGate)
FATAL_HANDLER_KEY = web.AppKey('fatal_handler', object)

logger = get_logger('server')


def parse_listen(listen: str) -> Tuple[Optional[str], int]:
    """
    解析监听地址，例如 ':8991'、'127.0.0.1:8991'、'[::1]:8991'

    Returns:
        Tuple[Optional[str], int]: 主机和端口，主机为None时监听所有地址

    Raises:
        ValueError: 地址格式无效
    """
    host, separator, port = listen.rpartition(':')
    if not separator or not port.isdigit() or int(port) > 65535:
        raise ValueError(f"无效的监听地址: {listen!r}")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]

    return host or None, int(port)


async def health_check_handler(request: web.Request) -> web.Response:
    """
    处理健康检查请求，不限制请求方法

    鉴权失败返回403，指标采集或序列化失败时终止进程。
    """
    service = request.app[SERVICE_KEY]
    gate = request.app[GATE_KEY]

    header_values = request.headers.getall(SECRET_HEADER, [])
    if not gate.is_allowed(header_values, service.current_settings().secret):
        logger.warning(
            f"拒绝来自 {request.remote} 的请求，密钥请求头数量: {len(header_values)}")
        return web.json_response({'message': 'Forbidden'}, status=403)

    try:
        report = await service.evaluate()
        body = serialize_report(report)
    except (MetricsError, SerializationError) as e:
        request.app[FATAL_HANDLER_KEY](e)
        raise web.HTTPInternalServerError()

    return web.Response(text=body, content_type='application/json')


def create_app(service: HealthCheckService,
               gate: Optional[AccessGate] = None,
               on_fatal: Callable[[Exception], None] = fatal_exit) -> web.Application:
    """
    创建aiohttp应用

    Args:
        service: 健康检查服务
        gate: 共享密钥校验器
        on_fatal: 致命错误处理函数，默认记录日志后终止进程

    Returns:
        web.Application: 配置好路由的应用
    """
    app = web.Application()
    app[SERVICE_KEY] = service
    app[GATE_KEY] = gate or AccessGate()
    app[FATAL_HANDLER_KEY] = on_fatal
    app.router.add_route('*', HEALTH_CHECK_PATH, health_check_handler)
    return app
