"""检查项生成器模块"""

from .base import BaseCheckProducer
from .classifier import classify
from .disk_checker import DiskCheckProducer
from .factory import CheckProducerFactory, check_producer_factory, register_producer
from .load_checker import LoadCheckProducer
from .memory_checker import MemoryCheckProducer
from .tcp_checker import TcpCheckProducer

__all__ = ['BaseCheckProducer', 'classify', 'CheckProducerFactory', 'check_producer_factory',
           'register_producer', 'DiskCheckProducer', 'LoadCheckProducer',
           'MemoryCheckProducer', 'TcpCheckProducer']
