"""
RAN-Estimate: 5G 无线接入网性能估算工具

根据载波频率、带宽、双工模式和发射功率估算吞吐量与延迟，
可选调用外部ns-3仿真器，并将结果持久化、导出为Prometheus指标。
"""

__version__ = "0.1.0"

from .estimator.base import PerformanceEstimator, SimulationOutcome, estimate_performance
from .estimator.external import ExternalSimulatorError, Ns3Simulator
from .models.base import DuplexMode, RanConfigRequest, RanConfiguration, SimulationResult
from .service import SimulationService, SubmissionError

__all__ = [
    "PerformanceEstimator",
    "SimulationOutcome",
    "estimate_performance",
    "ExternalSimulatorError",
    "Ns3Simulator",
    "DuplexMode",
    "RanConfigRequest",
    "RanConfiguration",
    "SimulationResult",
    "SimulationService",
    "SubmissionError",
]
