#!/usr/bin/env python3
"""
Oh Dear 健康检查端点主程序入口

加载配置，启动HTTP服务，处理信号实现优雅关闭。
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import Optional, Dict, Any

from aiohttp import web

from ohdear_health import __version__
from ohdear_health.server.app import create_app, parse_listen, HEALTH_CHECK_PATH
from ohdear_health.services.config_manager import (ConfigManager, find_config_file,
                                                   CONFIG_FILE_NAME)
from ohdear_health.services.health_service import HealthCheckService
from ohdear_health.services.report_aggregator import serialize_report
from ohdear_health.utils.error_handler import error_handler
from ohdear_health.utils.exceptions import OhDearHealthError, ConfigError
from ohdear_health.utils.log_manager import log_manager, get_logger


class HealthEndpointApp:
    """健康检查端点主应用程序类"""

    def __init__(self, config_path: str, listen: Optional[str] = None):
        """初始化应用程序

        Args:
            config_path: 配置文件路径
            listen: 监听地址，覆盖配置文件中的 Core.Listen
        """
        self.config_path = config_path
        self.listen_override = listen
        self.logger: Optional[logging.Logger] = None
        self.is_running = False
        self.shutdown_event = asyncio.Event()

        self.config_manager: Optional[ConfigManager] = None
        self.health_service: Optional[HealthCheckService] = None
        self.runner: Optional[web.AppRunner] = None

    def initialize(self, log_overrides: Optional[Dict[str, Any]] = None):
        """加载配置并初始化组件

        Args:
            log_overrides: 命令行指定的日志配置，优先于配置文件

        Raises:
            ConfigError: 配置文件缺失、格式错误或未修改默认密钥
        """
        self.config_manager = ConfigManager(self.config_path)
        self.config_manager.load_config()

        configure_app_logging(self.config_manager.get_core_config(), log_overrides)
        self.logger = get_logger('main')

        self.health_service = HealthCheckService(self.config_manager)
        self.logger.info(f"配置文件加载完成: {self.config_path}")

    @property
    def listen(self) -> str:
        return self.listen_override or self.config_manager.get_settings().listen

    async def start(self):
        """启动HTTP服务并等待关闭信号"""
        if self.is_running:
            self.logger.warning("应用程序已经在运行")
            return

        host, port = parse_listen(self.listen)

        app = create_app(self.health_service)
        self.runner = web.AppRunner(app, access_log=get_logger('access'))
        await self.runner.setup()

        try:
            site = web.TCPSite(self.runner, host, port)
            await site.start()

            self.is_running = True
            self.logger.info(f"开始监听 {self.listen}，端点: {HEALTH_CHECK_PATH}")

            await self.shutdown_event.wait()
        finally:
            await self.stop()

    async def stop(self):
        """停止HTTP服务"""
        if self.runner is None:
            return

        self.logger.info("正在停止健康检查端点...")
        await self.runner.cleanup()
        self.runner = None
        self.is_running = False

        error_stats = error_handler.get_error_stats()
        if error_stats:
            self.logger.info(f"运行期间错误统计: {error_stats}")
        self.logger.info("健康检查端点已停止")

    def shutdown(self):
        """触发应用程序关闭"""
        if self.logger:
            self.logger.info("收到关闭信号")
        self.shutdown_event.set()


def configure_app_logging(core_config: Dict[str, Any],
                          overrides: Optional[Dict[str, Any]] = None):
    """根据 Core.LogLevel / Core.LogFile 等配置日志系统

    Args:
        core_config: Core配置（键名为小写）
        overrides: 命令行覆盖的日志配置
    """
    log_config = {
        'log_level': core_config.get('loglevel') or 'INFO',
        'log_file': core_config.get('logfile'),
    }
    if core_config.get('logmaxbytes') is not None:
        log_config['max_file_size'] = core_config['logmaxbytes']
    if core_config.get('logbackupcount') is not None:
        log_config['backup_count'] = core_config['logbackupcount']
    for key, value in (overrides or {}).items():
        if value:
            log_config[key] = value

    log_manager.configure(log_config)


def create_argument_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog='ohdear-health',
        description='Oh Dear 应用健康检查端点 - 报告磁盘、负载、内存和TCP服务状态',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
示例用法:
  %(prog)s                                # 使用当前目录下的 {CONFIG_FILE_NAME}.yaml
  %(prog)s /etc/ohdear-health.yaml        # 使用指定配置文件启动
  %(prog)s --validate config.yaml         # 验证配置文件并退出
  %(prog)s --check-once config.yaml       # 执行一次检查并输出JSON报告
  %(prog)s --listen 127.0.0.1:8991        # 覆盖监听地址
        """
    )

    parser.add_argument(
        'config_file',
        nargs='?',
        help=f'YAML配置文件路径，默认在当前目录查找 {CONFIG_FILE_NAME}.yaml'
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--validate',
        action='store_true',
        help='验证配置文件格式并退出'
    )

    parser.add_argument(
        '--check-once',
        action='store_true',
        help='执行一次健康检查，输出JSON报告后退出'
    )

    parser.add_argument(
        '--listen',
        help='监听地址（覆盖 Core.Listen）'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='设置日志级别（覆盖 Core.LogLevel）'
    )

    parser.add_argument(
        '--log-file',
        help='日志文件路径（覆盖 Core.LogFile）'
    )

    return parser


def validate_config_file(config_path: str) -> bool:
    """验证配置文件

    Args:
        config_path: 配置文件路径

    Returns:
        验证是否成功
    """
    try:
        print(f"正在验证配置文件: {config_path}")

        config_manager = ConfigManager(config_path)
        config_manager.load_config()
        settings = config_manager.get_settings()

        print("✅ 配置文件验证成功!")
        print(f"   - 监听地址: {settings.listen}")
        print(f"   - 负载阈值: {settings.load_average.warning} / {settings.load_average.error}")
        print(f"   - 内存阈值: {settings.memory_usage.warning} / {settings.memory_usage.error}")
        print(f"   - 磁盘阈值: {settings.disk_usage.warning} / {settings.disk_usage.error}")
        print(f"   - TCP服务数量: {len(settings.tcp_services)}")
        for target in settings.tcp_services:
            print(f"     * {target.name} ({target.endpoint})")

        return True

    except ConfigError as e:
        print(f"❌ 配置文件验证失败: {e}")
        return False


async def check_once(config_path: str) -> str:
    """执行一次健康检查

    Args:
        config_path: 配置文件路径

    Returns:
        JSON格式的检查报告

    Raises:
        OhDearHealthError: 配置加载或指标采集失败
    """
    config_manager = ConfigManager(config_path)
    config_manager.load_config()

    service = HealthCheckService(config_manager)
    report = await service.run_checks(config_manager.get_settings())
    return serialize_report(report)


def resolve_config_path(config_file: Optional[str]) -> Optional[str]:
    """确定配置文件路径，未指定时在当前目录查找默认文件"""
    if config_file:
        return config_file
    return find_config_file(os.getcwd())


async def serve(app: HealthEndpointApp):
    """运行HTTP服务直到收到 SIGINT 或 SIGTERM"""
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, app.shutdown)

    await app.start()


def main(argv=None) -> int:
    """主函数

    Returns:
        进程退出码
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    config_path = resolve_config_path(args.config_file)
    if not config_path:
        print(f"找不到配置文件 {CONFIG_FILE_NAME}.yaml", file=sys.stderr)
        return 1

    if args.validate:
        return 0 if validate_config_file(config_path) else 1

    if args.check_once:
        try:
            print(asyncio.run(check_once(config_path)))
        except OhDearHealthError as e:
            print(f"健康检查失败: {e.format_error()}", file=sys.stderr)
            return 1
        return 0

    app = HealthEndpointApp(config_path, listen=args.listen)
    try:
        app.initialize({'log_level': args.log_level, 'log_file': args.log_file})
        asyncio.run(serve(app))
    except ConfigError as e:
        print(f"配置错误: {e.format_error()}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"启动失败: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"无法监听 {app.listen}: {e}", file=sys.stderr)
        return 1
    finally:
        log_manager.flush()

    return 0


def run():
    """命令行入口"""
    sys.exit(main())


if __name__ == "__main__":
    run()
