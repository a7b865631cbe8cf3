"""
存储模块

提供配置记录的持久化，支持MongoDB和内存两种后端。
"""

from .base import ConfigRepository, InMemoryRepository, StorageError
from .mongo import MongoRepository


def create_repository(settings) -> ConfigRepository:
    """根据设置创建配置仓库"""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemoryRepository()
    if backend == "mongo":
        return MongoRepository.from_settings(settings)
    raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")


__all__ = [
    "ConfigRepository",
    "InMemoryRepository",
    "MongoRepository",
    "StorageError",
    "create_repository",
]
