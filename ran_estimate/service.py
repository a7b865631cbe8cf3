"""
仿真提交流程

估算 -> 记录指标 -> 持久化。HTTP接口和命令行共用这一流程。
"""

import logging
from typing import List, Optional

from .estimator.base import PerformanceEstimator
from .metrics.sink import MetricsSink, NullMetricsSink
from .models.base import RanConfigRequest, RanConfiguration, SimulationResult
from .storage.base import ConfigRepository, StorageError

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """估算成功但保存失败，异常中保留估算结果"""

    def __init__(self, message: str, result: SimulationResult):
        super().__init__(message)
        self.result = result


class SimulationService:
    """RAN配置提交服务"""

    def __init__(self, estimator: PerformanceEstimator, repository: ConfigRepository,
                 metrics: Optional[MetricsSink] = None):
        self.estimator = estimator
        self.repository = repository
        self.metrics = metrics or NullMetricsSink()

    def submit(self, request: RanConfigRequest) -> RanConfiguration:
        """
        估算并保存一条配置

        Raises:
            SubmissionError: 保存失败，估算结果在 error.result 中
        """
        outcome = self.estimator.estimate(request)
        logger.info(
            "Simulation completed: frequency=%s Hz, bandwidth=%s Hz, duplexMode=%s, "
            "transmitPower=%s dBm, throughput=%s bps, latency=%s s",
            request.frequency, request.bandwidth, request.duplex_mode.value,
            request.transmit_power, outcome.result.throughput, outcome.result.latency,
            extra={"source": outcome.source},
        )

        # 估算成功即更新指标，与是否保存成功无关
        self.metrics.record_estimate(request, outcome.result, source=outcome.source)

        try:
            return self.repository.insert(request, outcome.result)
        except StorageError as e:
            raise SubmissionError(str(e), outcome.result) from e

    def list_configurations(self) -> List[RanConfiguration]:
        return self.repository.list()

    def get_configuration(self, config_id: str) -> Optional[RanConfiguration]:
        return self.repository.get(config_id)
