"""测试数据模型"""

import dataclasses

import pytest

from ohdear_health.models.health_check import (CheckResult, CheckStatus, HealthCheckReport,
                                               HealthSettings, Limits, ServiceTarget)


class TestCheckResult:
    """测试CheckResult数据模型"""

    def test_to_dict(self):
        result = CheckResult(
            name='MemUsage',
            label='Memory Usage in Percentage',
            status=CheckStatus.WARNING,
            notification_message='Memory Usage is high (85.0%)',
            short_summary='85.0%'
        )

        assert result.to_dict() == {
            'name': 'MemUsage',
            'label': 'Memory Usage in Percentage',
            'status': 'warning',
            'notificationMessage': 'Memory Usage is high (85.0%)',
            'shortSummary': '85.0%',
        }

    def test_immutable(self):
        result = CheckResult('a', 'b', CheckStatus.OK, 'c', 'd')

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.status = CheckStatus.FAILED


class TestHealthCheckReport:
    """测试HealthCheckReport数据模型"""

    def test_to_dict_key_order(self):
        report = HealthCheckReport(
            finished_at=1700000000,
            check_results=[CheckResult('a', 'b', CheckStatus.FAILED, 'c', 'd')]
        )

        data = report.to_dict()

        assert list(data.keys()) == ['finishedAt', 'checkResults']
        assert data['checkResults'][0]['status'] == 'failed'

    def test_empty_report(self):
        assert HealthCheckReport(finished_at=0).to_dict() == {'finishedAt': 0, 'checkResults': []}


class TestSettings:
    """测试配置相关模型"""

    def test_status_values(self):
        assert [s.value for s in CheckStatus] == ['ok', 'warning', 'failed']

    def test_limits_default(self):
        assert Limits() == Limits(warning=0, error=0)

    def test_settings_defaults(self):
        settings = HealthSettings(listen=':8991', secret='x')

        assert settings.load_average == Limits()
        assert settings.tcp_services == []
        assert settings.fatal_metrics_errors is True

    def test_service_target(self):
        target = ServiceTarget(name='Redis', endpoint='127.0.0.1:6379')

        assert target.name == 'Redis'
        assert target.endpoint == '127.0.0.1:6379'
