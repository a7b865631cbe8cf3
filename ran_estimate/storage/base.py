"""
配置存储基础类

配置记录只允许创建和读取。
"""

import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from ..models.base import RanConfigRequest, RanConfiguration, SimulationResult


class StorageError(Exception):
    """存储后端错误"""
    pass


class ConfigRepository(ABC):
    """配置仓库基础类"""

    @abstractmethod
    def insert(self, request: RanConfigRequest, result: SimulationResult) -> RanConfiguration:
        """保存一条配置记录，返回包含ID和创建时间的记录"""
        pass

    @abstractmethod
    def list(self) -> List[RanConfiguration]:
        """按创建时间倒序列出所有记录"""
        pass

    @abstractmethod
    def get(self, config_id: str) -> Optional[RanConfiguration]:
        """按ID读取记录，不存在时返回None"""
        pass


class InMemoryRepository(ConfigRepository):
    """内存仓库，用于测试和无数据库的演示模式"""

    def __init__(self):
        self._records: List[RanConfiguration] = []
        self._lock = threading.Lock()

    def insert(self, request: RanConfigRequest, result: SimulationResult) -> RanConfiguration:
        record = RanConfiguration(
            id=uuid.uuid4().hex,
            frequency=request.frequency,
            bandwidth=request.bandwidth,
            duplex_mode=request.duplex_mode,
            transmit_power=request.transmit_power,
            simulation_result=result,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._records.append(record)
        return record

    def list(self) -> List[RanConfiguration]:
        with self._lock:
            return list(reversed(self._records))

    def get(self, config_id: str) -> Optional[RanConfiguration]:
        with self._lock:
            for record in self._records:
                if record.id == config_id:
                    return record
        return None
