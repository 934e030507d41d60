"""配置验证工具"""

from typing import Dict, Any

from .exceptions import ConfigError, ErrorCode

DEFAULT_SECRET = 'set-secret-in-config-file'


class ConfigValidator:
    """配置验证器，所有键名已统一转换为小写"""

    @staticmethod
    def validate_core_config(core_config: Any) -> None:
        """
        验证Core配置

        Args:
            core_config: Core配置

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(core_config, dict):
            raise ConfigError("Core 配置必须是字典类型")

        listen = core_config.get('listen')
        if listen is not None and not isinstance(listen, str):
            raise ConfigError("Core.Listen 必须是字符串，例如 ':8991'")

        secret = core_config.get('secret')
        if secret is not None and not isinstance(secret, str):
            raise ConfigError("Core.Secret 必须是字符串")

        log_level = core_config.get('loglevel')
        if log_level is not None:
            valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
            if str(log_level).upper() not in valid_levels:
                raise ConfigError(f"Core.LogLevel 必须是以下值之一: {valid_levels}")

        max_bytes = core_config.get('logmaxbytes')
        if max_bytes is not None and (isinstance(max_bytes, bool)
                                      or not isinstance(max_bytes, int) or max_bytes <= 0):
            raise ConfigError("Core.LogMaxBytes 必须是正整数")

        backup_count = core_config.get('logbackupcount')
        if backup_count is not None and (isinstance(backup_count, bool)
                                         or not isinstance(backup_count, int) or backup_count < 0):
            raise ConfigError("Core.LogBackupCount 必须是非负整数")

        fatal = core_config.get('fatalmetricserrors')
        if fatal is not None and not isinstance(fatal, bool):
            raise ConfigError("Core.FatalMetricsErrors 必须是布尔值")

    @staticmethod
    def validate_secret(secret: str) -> None:
        """
        验证共享密钥已经修改

        Raises:
            ConfigError: 仍在使用默认密钥
        """
        if not secret or secret == DEFAULT_SECRET:
            raise ConfigError("必须在配置文件中设置 Core.Secret",
                              error_code=ErrorCode.DEFAULT_SECRET)

    @staticmethod
    def validate_limits_config(section: str, limits_config: Any) -> None:
        """
        验证阈值配置

        Args:
            section: 配置段名称
            limits_config: 阈值配置

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(limits_config, dict):
            raise ConfigError(f"{section} 配置必须是字典类型")

        for key in ('warning', 'error'):
            value = limits_config.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{section}.{key.capitalize()} 必须是数值")

    @staticmethod
    def validate_tcp_services_config(services_config: Any) -> None:
        """
        验证TCP服务列表配置

        Args:
            services_config: TCP服务列表

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(services_config, list):
            raise ConfigError("TCPServices 配置必须是列表类型")

        for index, service in enumerate(services_config):
            if not isinstance(service, dict):
                raise ConfigError(f"TCPServices[{index}] 必须是字典类型")

            for field in ('description', 'port'):
                if service.get(field) in (None, ''):
                    raise ConfigError(
                        f"TCPServices[{index}] 缺少必需的配置项: {field.capitalize()}")
