"""配置管理器"""

import os
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

import yaml

from ..models.health_check import HealthSettings, Limits, ServiceTarget
from ..utils.config_validator import ConfigValidator
from ..utils.exceptions import ConfigError, ErrorCode
from ..utils.log_manager import get_logger

CONFIG_FILE_NAME = 'ohdear-health'
CONFIG_FILE_EXTENSIONS = ('.yaml', '.yml')
DEFAULT_LISTEN = ':8991'

LIMIT_SECTIONS = {
    'loadaverage': 'LoadAverage',
    'memoryusagepercent': 'MemoryUsagePercent',
    'diskusagepercent': 'DiskUsagePercent',
}


def find_config_file(search_dir: str = '.') -> Optional[str]:
    """
    在目录中查找默认配置文件 ohdear-health.yaml / ohdear-health.yml

    Returns:
        Optional[str]: 配置文件路径，找不到时返回None
    """
    for extension in CONFIG_FILE_EXTENSIONS:
        candidate = os.path.join(search_dir, CONFIG_FILE_NAME + extension)
        if os.path.isfile(candidate):
            return candidate
    return None


def _lower_keys(value: Any) -> Any:
    """递归地把字典键名转换为小写，配置键名不区分大小写"""
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lower_keys(item) for item in value]
    return value


class ConfigProvider(ABC):
    """配置提供者接口，每次请求前重新读取配置"""

    @abstractmethod
    def reload_config(self) -> HealthSettings:
        """
        重新读取配置源

        Raises:
            ConfigError: 配置读取或验证失败
        """

    @abstractmethod
    def get_settings(self) -> HealthSettings:
        """返回最近一次成功加载的配置快照"""


class ConfigManager(ConfigProvider):
    """配置管理器，负责YAML配置文件的加载、解析和验证"""

    def __init__(self, config_path: str):
        """
        初始化配置管理器

        Args:
            config_path: 配置文件路径
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._settings: Optional[HealthSettings] = None
        self.logger = get_logger('config_manager')

    def load_config(self) -> Dict[str, Any]:
        """
        加载YAML配置文件

        Returns:
            Dict[str, Any]: 键名已转换为小写的配置字典

        Raises:
            ConfigError: 配置加载或验证失败
        """
        self.logger.debug(f"加载配置文件: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                raw_config = yaml.safe_load(file)
        except FileNotFoundError:
            self.logger.error(f"配置文件不存在: {self.config_path}")
            raise ConfigError(f"配置文件不存在: {self.config_path}",
                              error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                              config_path=self.config_path)
        except PermissionError:
            self.logger.error(f"没有权限读取配置文件: {self.config_path}")
            raise ConfigError(f"没有权限读取配置文件: {self.config_path}",
                              error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                              config_path=self.config_path)
        except yaml.YAMLError as e:
            self.logger.error(f"YAML格式错误: {e}")
            raise ConfigError(f"YAML格式错误: {e}",
                              error_code=ErrorCode.CONFIG_PARSE_ERROR,
                              config_path=self.config_path, cause=e)
        except OSError as e:
            self.logger.error(f"读取配置文件失败: {e}")
            raise ConfigError(f"读取配置文件失败: {e}",
                              error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                              config_path=self.config_path, cause=e)
        except Exception as e:
            self.logger.error(f"加载配置文件失败: {e}", exc_info=True)
            raise ConfigError(f"加载配置文件失败: {e}",
                              error_code=ErrorCode.CONFIG_PARSE_ERROR,
                              config_path=self.config_path, cause=e)

        if raw_config is None:
            raise ConfigError("配置文件为空", config_path=self.config_path)

        config = _lower_keys(raw_config)
        settings = self._build_settings(config)

        # 整体替换，并发读取的请求总能拿到完整的快照
        self.config = config
        self._settings = settings

        self.logger.debug(
            f"配置加载成功，包含 {len(settings.tcp_services)} 个TCP服务")
        return self.config

    def _build_settings(self, config: Dict[str, Any]) -> HealthSettings:
        """
        验证配置并生成配置快照

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(config, dict):
            raise ConfigError("配置文件根节点必须是字典类型")

        core = config.get('core') or {}
        ConfigValidator.validate_core_config(core)

        secret = core.get('secret', '')
        ConfigValidator.validate_secret(secret)

        limits = {}
        for key, section in LIMIT_SECTIONS.items():
            limits[key] = self._build_limits(section, config.get(key))

        return HealthSettings(
            listen=core.get('listen') or DEFAULT_LISTEN,
            secret=secret,
            load_average=limits['loadaverage'],
            memory_usage=limits['memoryusagepercent'],
            disk_usage=limits['diskusagepercent'],
            tcp_services=self._build_tcp_services(config.get('tcpservices')),
            fatal_metrics_errors=core.get('fatalmetricserrors') is not False,
        )

    def _build_limits(self, section: str, limits_config: Any) -> Limits:
        if limits_config is None:
            self.logger.warning(f"缺少 {section} 阈值配置，使用 Warning=0, Error=0")
            return Limits()

        ConfigValidator.validate_limits_config(section, limits_config)
        return Limits(
            warning=limits_config.get('warning') or 0,
            error=limits_config.get('error') or 0,
        )

    @staticmethod
    def _build_tcp_services(services_config: Any) -> List[ServiceTarget]:
        if services_config is None:
            return []

        ConfigValidator.validate_tcp_services_config(services_config)
        return [
            ServiceTarget(name=str(service['description']), endpoint=str(service['port']))
            for service in services_config
        ]

    def get_core_config(self) -> Dict[str, Any]:
        """
        获取Core配置

        Returns:
            Dict[str, Any]: Core配置字典
        """
        return self.config.get('core') or {}

    def get_settings(self) -> HealthSettings:
        """
        获取最近一次成功加载的配置快照

        Raises:
            ConfigError: 配置尚未加载
        """
        if self._settings is None:
            raise ConfigError("配置尚未加载", config_path=self.config_path)
        return self._settings

    def reload_config(self) -> HealthSettings:
        """
        重新加载配置文件

        Returns:
            HealthSettings: 新的配置快照

        Raises:
            ConfigError: 配置重新加载失败，此前的配置保持不变
        """
        try:
            self.load_config()
        except ConfigError as e:
            raise ConfigError(f"重新加载配置失败: {e.message}",
                              error_code=ErrorCode.CONFIG_RELOAD_ERROR,
                              config_path=self.config_path,
                              cause=e, recoverable=True)
        return self.get_settings()
