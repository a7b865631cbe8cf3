"""
MongoDB 配置仓库
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from ..models.base import RanConfigRequest, RanConfiguration, SimulationResult
from .base import ConfigRepository, StorageError

logger = logging.getLogger(__name__)


class MongoRepository(ConfigRepository):
    """基于 pymongo 的配置仓库"""

    def __init__(self, uri: str = "mongodb://localhost:27017",
                 database: str = "5g-ran-portal", collection: str = "ranconfigs",
                 timeout_ms: int = 5000, client: Optional[MongoClient] = None,
                 collection_obj: Any = None):
        if collection_obj is not None:
            self.collection = collection_obj
            return

        # MongoClient 延迟连接，首次读写时才会真正访问服务器
        self.client = client or MongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms * 2,
            tz_aware=True,
        )
        self.collection = self.client[database][collection]

    @classmethod
    def from_settings(cls, settings) -> "MongoRepository":
        return cls(
            uri=settings.mongo_uri,
            database=settings.mongo_database,
            collection=settings.mongo_collection,
            timeout_ms=settings.mongo_timeout_ms,
        )

    def insert(self, request: RanConfigRequest, result: SimulationResult) -> RanConfiguration:
        document = {
            **request.to_params(),
            "simulationResult": result.model_dump(),
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            inserted = self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to store RAN configuration: %s", e)
            raise StorageError(f"cannot store configuration: {e}") from e

        document["_id"] = inserted.inserted_id
        return self._from_document(document)

    def list(self) -> List[RanConfiguration]:
        try:
            documents = list(self.collection.find().sort("createdAt", DESCENDING))
        except PyMongoError as e:
            logger.error("Failed to fetch RAN configurations: %s", e)
            raise StorageError(f"cannot fetch configurations: {e}") from e
        return [self._from_document(doc) for doc in documents]

    def get(self, config_id: str) -> Optional[RanConfiguration]:
        if not ObjectId.is_valid(config_id):
            return None
        try:
            document = self.collection.find_one({"_id": ObjectId(config_id)})
        except PyMongoError as e:
            logger.error("Failed to fetch RAN configuration %s: %s", config_id, e)
            raise StorageError(f"cannot fetch configuration: {e}") from e
        if document is None:
            return None
        return self._from_document(document)

    @staticmethod
    def _from_document(document: Dict[str, Any]) -> RanConfiguration:
        created_at = document["createdAt"]
        # 未开启 tz_aware 的客户端返回naive时间，按UTC处理
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return RanConfiguration(
            id=str(document["_id"]),
            frequency=document["frequency"],
            bandwidth=document["bandwidth"],
            duplex_mode=document["duplexMode"],
            transmit_power=document["transmitPower"],
            simulation_result=SimulationResult(**document["simulationResult"]),
            created_at=created_at,
        )
