"""
RAN配置数据模型

定义请求、仿真结果以及持久化记录的结构。
对外（JSON）使用驼峰字段名，Python内部使用下划线字段名。
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MIN_BANDWIDTH_HZ = 1.0
MAX_BANDWIDTH_HZ = 1e12
MIN_TX_POWER_DBM = -300.0
MAX_TX_POWER_DBM = 300.0


class DuplexMode(str, Enum):
    """双工模式"""
    TDD = "TDD"
    FDD = "FDD"


class SimulationResult(BaseModel):
    """仿真结果"""
    model_config = ConfigDict(frozen=True)

    throughput: float = Field(description="吞吐量 (bps)")
    latency: float = Field(description="延迟 (s)")


class RanConfigRequest(BaseModel):
    """RAN配置请求，四个字段均为必填"""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    # 带宽与功率的上下限保证估算结果为有限值
    frequency: float = Field(gt=0, description="载波频率 (Hz)")
    bandwidth: float = Field(ge=MIN_BANDWIDTH_HZ, le=MAX_BANDWIDTH_HZ, description="系统带宽 (Hz)")
    duplex_mode: DuplexMode = Field(alias="duplexMode", description="双工模式 (TDD/FDD)")
    transmit_power: float = Field(ge=MIN_TX_POWER_DBM, le=MAX_TX_POWER_DBM, alias="transmitPower",
                                  description="发射功率 (dBm)")

    def to_params(self) -> dict:
        """以驼峰字段名导出四个配置参数"""
        return self.model_dump(by_alias=True, mode="json")


class SimulationOutput(RanConfigRequest):
    """外部仿真器输出文件的结构"""

    results: SimulationResult


class RanConfiguration(RanConfigRequest):
    """持久化的RAN配置记录，创建后不可修改"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(description="记录ID")
    simulation_result: SimulationResult = Field(alias="simulationResult")
    created_at: datetime = Field(alias="createdAt", description="创建时间")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
