"""
数据模型模块

定义RAN配置、仿真结果和持久化记录。
"""

from .base import (
    DuplexMode,
    SimulationResult,
    RanConfigRequest,
    SimulationOutput,
    RanConfiguration,
)

__all__ = [
    "DuplexMode",
    "SimulationResult",
    "RanConfigRequest",
    "SimulationOutput",
    "RanConfiguration",
]
