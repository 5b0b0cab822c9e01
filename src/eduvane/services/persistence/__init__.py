"""사용자 프로필/제출물 저장소"""

from .base import BasePersistenceService
from .factory import get_persistence_service
from .json_store import JsonFilePersistence
from .memory import InMemoryPersistence

__all__ = [
    "BasePersistenceService",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "get_persistence_service",
]
