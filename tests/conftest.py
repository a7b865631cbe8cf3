"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ran_estimate.config.settings import Settings
from ran_estimate.estimator.base import PerformanceEstimator
from ran_estimate.metrics.sink import PrometheusMetricsSink
from ran_estimate.models.base import DuplexMode, RanConfigRequest
from ran_estimate.service import SimulationService
from ran_estimate.storage.base import InMemoryRepository


@pytest.fixture
def sample_config_payload():
    """示例RAN配置（请求体形式）"""
    return {
        "frequency": 3.5e9,
        "bandwidth": 20e6,
        "duplexMode": "TDD",
        "transmitPower": 20,
    }


@pytest.fixture
def tdd_request():
    return RanConfigRequest(frequency=3.5e9, bandwidth=20e6,
                            duplex_mode=DuplexMode.TDD, transmit_power=20)


@pytest.fixture
def fdd_request():
    return RanConfigRequest(frequency=3.5e9, bandwidth=20e6,
                            duplex_mode=DuplexMode.FDD, transmit_power=20)


@pytest.fixture
def test_settings(tmp_path):
    """指向不存在的ns-3目录、使用内存存储的设置"""
    return Settings(
        storage_backend="memory",
        ns3_dir=str(tmp_path / "no-ns3"),
        ns3_timeout=1.0,
        use_ns3=False,
    )


@pytest.fixture
def metrics_sink():
    return PrometheusMetricsSink(default_collectors=False)


@pytest.fixture
def memory_service(metrics_sink):
    return SimulationService(PerformanceEstimator(), InMemoryRepository(), metrics_sink)
