"""
估算引擎模块

提供核心的RAN性能估算公式，以及可选的外部仿真器调用与回退逻辑。
"""

from .base import (
    PerformanceEstimator,
    SimulationOutcome,
    compare_providers,
    estimate_config,
    estimate_performance,
)
from .external import ExternalSimulator, ExternalSimulatorError, Ns3Simulator

__all__ = [
    "PerformanceEstimator",
    "SimulationOutcome",
    "compare_providers",
    "estimate_config",
    "estimate_performance",
    "ExternalSimulator",
    "ExternalSimulatorError",
    "Ns3Simulator",
]
