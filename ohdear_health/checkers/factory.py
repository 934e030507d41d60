"""检查项生成器工厂"""

from typing import Dict, List, Type

from .base import BaseCheckProducer
from ..models.health_check import HealthSettings


class CheckProducerFactory:
    """检查项生成器工厂类，按检查类型创建生成器"""

    def __init__(self):
        """初始化工厂"""
        self._producers: Dict[str, Type[BaseCheckProducer]] = {}

    def register_producer(self, check_type: str, producer_class: Type[BaseCheckProducer]):
        """
        注册检查项生成器类

        Args:
            check_type: 检查类型名称
            producer_class: 生成器类

        Raises:
            TypeError: 生成器类没有继承 BaseCheckProducer
            ValueError: 检查类型已经注册
        """
        if not issubclass(producer_class, BaseCheckProducer):
            raise TypeError(f"生成器类 {producer_class.__name__} 必须继承自 BaseCheckProducer")

        if check_type in self._producers:
            raise ValueError(f"检查类型 '{check_type}' 已经注册了生成器")

        self._producers[check_type] = producer_class

    def create_producer(self, check_type: str, settings: HealthSettings) -> BaseCheckProducer:
        """
        创建检查项生成器实例

        Args:
            check_type: 检查类型
            settings: 本次请求的配置快照

        Returns:
            BaseCheckProducer: 生成器实例

        Raises:
            KeyError: 检查类型不支持
        """
        if check_type not in self._producers:
            raise KeyError(f"不支持的检查类型: '{check_type}'")

        return self._producers[check_type](settings)

    def get_supported_types(self) -> List[str]:
        """获取支持的检查类型列表，按注册顺序排列"""
        return list(self._producers.keys())


# 全局工厂实例
check_producer_factory = CheckProducerFactory()


def register_producer(check_type: str):
    """
    装饰器：注册检查项生成器类

    Args:
        check_type: 检查类型名称
    """
    def decorator(producer_class: Type[BaseCheckProducer]):
        check_producer_factory.register_producer(check_type, producer_class)
        return producer_class

    return decorator
