"""测试阈值分级"""

import random

import pytest

from ohdear_health.checkers.classifier import classify
from ohdear_health.models.health_check import CheckStatus, Limits


class TestClassify:
    """测试classify函数"""

    @pytest.mark.parametrize('value,expected', [
        (0.0, (CheckStatus.OK, 'is fine')),
        (2.0, (CheckStatus.OK, 'is fine')),
        (2.01, (CheckStatus.WARNING, 'is high')),
        (5.0, (CheckStatus.WARNING, 'is high')),
        (5.01, (CheckStatus.FAILED, 'is critical')),
        (-1.0, (CheckStatus.OK, 'is fine')),
    ])
    def test_classify_values(self, value, expected):
        """测试典型数值的分级"""
        assert classify(value, Limits(warning=2, error=5)) == expected

    def test_value_equal_to_error_is_warning(self):
        """测试等于错误阈值时不升级为failed"""
        status, _ = classify(90, Limits(warning=80, error=90))
        assert status is CheckStatus.WARNING

    def test_value_equal_to_warning_is_ok(self):
        """测试等于警告阈值时保持ok"""
        status, _ = classify(80, Limits(warning=80, error=90))
        assert status is CheckStatus.OK

    def test_inverted_limits(self):
        """测试 warning > error 的配置仍然可以分级"""
        limits = Limits(warning=90, error=80)

        assert classify(85, limits)[0] is CheckStatus.FAILED
        assert classify(95, limits)[0] is CheckStatus.FAILED
        assert classify(70, limits)[0] is CheckStatus.OK

    def test_random_values(self):
        """测试随机数值和阈值的分级规则"""
        rng = random.Random(20240601)

        for _ in range(2000):
            warning = rng.uniform(-100, 100)
            error = warning + rng.uniform(0, 100)
            value = rng.uniform(-200, 300)

            status, _ = classify(value, Limits(warning=warning, error=error))

            if value > error:
                assert status is CheckStatus.FAILED
            elif value > warning:
                assert status is CheckStatus.WARNING
            else:
                assert status is CheckStatus.OK
