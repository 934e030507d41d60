"""阈值分级"""

from typing import Tuple

from ..models.health_check import CheckStatus, Limits


def classify(value: float, limits: Limits) -> Tuple[CheckStatus, str]:
    """
    根据阈值对数值分级，等于阈值时不升级

    Args:
        value: 采集到的数值
        limits: 告警阈值对

    Returns:
        Tuple[CheckStatus, str]: 状态和用于消息的描述
    """
    if value > limits.error:
        return CheckStatus.FAILED, "is critical"
    if value > limits.warning:
        return CheckStatus.WARNING, "is high"
    return CheckStatus.OK, "is fine"
