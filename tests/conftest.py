"""测试共用的配置和主机指标替身"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from ohdear_health.models.health_check import HealthSettings, Limits, ServiceTarget
from ohdear_health.services.config_manager import ConfigProvider
from ohdear_health.utils.log_manager import log_manager

TEST_SECRET = 'test-secret'


class StaticConfigProvider(ConfigProvider):
    """返回固定配置的配置提供者，记录重新加载次数"""

    def __init__(self, settings: HealthSettings):
        self.settings = settings
        self.reload_count = 0

    def reload_config(self) -> HealthSettings:
        self.reload_count += 1
        return self.settings

    def get_settings(self) -> HealthSettings:
        return self.settings


def make_settings(**overrides) -> HealthSettings:
    """构造测试用配置快照"""
    values = {
        'listen': ':8991',
        'secret': TEST_SECRET,
        'load_average': Limits(warning=2, error=5),
        'memory_usage': Limits(warning=80, error=90),
        'disk_usage': Limits(warning=80, error=90),
        'tcp_services': [],
    }
    values.update(overrides)
    return HealthSettings(**values)


@pytest.fixture(autouse=True)
def restore_logging():
    """测试结束后把日志处理器重新绑定到当前的标准错误输出"""
    yield
    log_manager.configure({'log_level': 'INFO', 'log_file': None,
                           'max_file_size': 10 * 1024 * 1024, 'backup_count': 5})


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def host_metrics():
    """
    替换psutil查询：
    / (ext4, 42.4%)，/boot/efi (vfat, 跳过)，/data (ext3, 91%)，
    5分钟负载 3.2，内存使用率 55.5%
    """
    partitions = [
        SimpleNamespace(device='/dev/sda2', mountpoint='/', fstype='ext4', opts='rw'),
        SimpleNamespace(device='/dev/sda1', mountpoint='/boot/efi', fstype='vfat', opts='rw'),
        SimpleNamespace(device='/dev/sdb1', mountpoint='/data', fstype='ext3', opts='rw'),
    ]
    usage = {'/': 42.4, '/data': 91.0}

    with patch('psutil.disk_partitions', return_value=partitions) as disk_partitions, \
            patch('psutil.disk_usage',
                  side_effect=lambda mountpoint: SimpleNamespace(percent=usage[mountpoint])), \
            patch('psutil.getloadavg', return_value=(1.0, 3.2, 2.5)), \
            patch('psutil.virtual_memory', return_value=SimpleNamespace(percent=55.5)):
        yield SimpleNamespace(partitions=partitions, usage=usage,
                              disk_partitions=disk_partitions)


@pytest.fixture
def make_settings_fn():
    """返回构造配置快照的函数"""
    return make_settings


@pytest.fixture
def provider_factory():
    """返回构造固定配置提供者的函数"""
    return StaticConfigProvider
