"""
基础估算器

提供RAN性能估算的核心公式以及估算器主类。
核心公式基于简化的香农容量，并叠加固定的双工、MIMO和信令开销修正系数。
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models.base import DuplexMode, RanConfigRequest, SimulationResult
from .external import ExternalSimulator, ExternalSimulatorError

logger = logging.getLogger(__name__)

# SNR参考点：20 dBm 发射功率对应 10 dB
REFERENCE_SNR_DB = 10.0
REFERENCE_TX_POWER_DBM = 20.0

TDD_EFFICIENCY = 0.8
FDD_EFFICIENCY = 0.95

MIMO_BAND_EDGE_HZ = 6e9
MIMO_FACTOR_SUB6 = 4
MIMO_FACTOR_MMWAVE = 8

OVERHEAD_FACTOR = 0.85

BASE_LATENCY_S = 0.001
TDD_SWITCHING_LATENCY_S = 0.0005
REFERENCE_BANDWIDTH_HZ = 100e6
MIN_LATENCY_S = 0.0005

SOURCE_BUILTIN = "builtin"
SOURCE_EXTERNAL = "external"
SOURCE_FALLBACK = "fallback"

# 10^x 超过该指数时 log2(1 + 10^x) 与 x * log2(10) 在双精度下相同
SNR_EXPONENT_LIMIT = 300.0


def shannon_efficiency(snr_db: float) -> float:
    """给定SNR (dB) 下的香农频谱效率 (bps/Hz)，对任意有限SNR都不会溢出"""
    exponent = snr_db / 10
    if exponent > SNR_EXPONENT_LIMIT:
        return exponent * math.log2(10)
    return math.log2(1 + math.pow(10, exponent))


def estimate_performance(frequency: float, bandwidth: float,
                         duplex_mode: DuplexMode, transmit_power: float) -> SimulationResult:
    """
    估算吞吐量和延迟

    纯函数，不做参数校验。调用方需保证 frequency > 0、bandwidth > 0。

    Args:
        frequency: 载波频率 (Hz)
        bandwidth: 系统带宽 (Hz)
        duplex_mode: 双工模式
        transmit_power: 发射功率 (dBm)

    Returns:
        吞吐量 (bps) 与延迟 (s)
    """
    is_tdd = duplex_mode == DuplexMode.TDD

    snr_db = REFERENCE_SNR_DB + (transmit_power - REFERENCE_TX_POWER_DBM) / 2
    spectral_efficiency = shannon_efficiency(snr_db)

    duplex_efficiency = TDD_EFFICIENCY if is_tdd else FDD_EFFICIENCY
    mimo_factor = MIMO_FACTOR_SUB6 if frequency < MIMO_BAND_EDGE_HZ else MIMO_FACTOR_MMWAVE

    throughput = (bandwidth * spectral_efficiency * duplex_efficiency
                  * mimo_factor * OVERHEAD_FACTOR)

    latency = BASE_LATENCY_S
    if is_tdd:
        latency += TDD_SWITCHING_LATENCY_S
    latency *= (REFERENCE_BANDWIDTH_HZ / bandwidth) * 0.5
    latency = max(MIN_LATENCY_S, latency)

    return SimulationResult(throughput=throughput, latency=latency)


def estimate_config(config: RanConfigRequest) -> SimulationResult:
    """对一个已校验的配置执行公式估算"""
    return estimate_performance(
        frequency=config.frequency,
        bandwidth=config.bandwidth,
        duplex_mode=config.duplex_mode,
        transmit_power=config.transmit_power,
    )


@dataclass(frozen=True)
class SimulationOutcome:
    """估算结果及其来源（builtin / external / fallback）"""
    result: SimulationResult
    source: str


class PerformanceEstimator:
    """性能估算器主类"""

    def __init__(self, simulator: Optional[ExternalSimulator] = None,
                 use_external: bool = False):
        self.simulator = simulator
        self.use_external = use_external

    @property
    def external_enabled(self) -> bool:
        return self.use_external and self.simulator is not None

    def estimate(self, config: RanConfigRequest) -> SimulationOutcome:
        """
        估算配置性能

        启用外部仿真器时优先调用它；外部调用的任何失败都会回退到内置公式，
        调用方拿到的结果结构完全一致。
        """
        if not self.external_enabled:
            return SimulationOutcome(estimate_config(config), SOURCE_BUILTIN)

        try:
            result = self.simulator.run(config)
        except ExternalSimulatorError as e:
            logger.warning(
                "External simulator failed (%s), using built-in estimate: %s",
                e.reason, e,
                extra={"reason": e.reason, "source": SOURCE_FALLBACK},
            )
            return SimulationOutcome(estimate_config(config), SOURCE_FALLBACK)

        logger.info("External simulator result: throughput=%s bps, latency=%s s",
                    result.throughput, result.latency)
        return SimulationOutcome(result, SOURCE_EXTERNAL)


def compare_providers(estimator: PerformanceEstimator,
                      config: RanConfigRequest) -> Dict[str, Any]:
    """
    对比内置公式与外部仿真器的结果

    用于确认外部仿真器是否真的在工作：结果相同通常意味着发生了回退。
    """
    builtin = estimate_config(config)

    if estimator.simulator is None:
        external = SimulationOutcome(builtin, SOURCE_FALLBACK)
    else:
        forced = PerformanceEstimator(estimator.simulator, use_external=True)
        external = forced.estimate(config)

    return {
        "config": config.to_params(),
        "builtin_result": builtin.model_dump(),
        "external_result": external.result.model_dump(),
        "external_source": external.source,
        "are_different": builtin != external.result,
    }
