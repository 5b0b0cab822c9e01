"""저장소 서비스 팩토리"""

from eduvane.errors import ConfigurationError
from eduvane.settings import settings

from .base import BasePersistenceService
from .json_store import JsonFilePersistence
from .memory import InMemoryPersistence


def get_persistence_service() -> BasePersistenceService:
    """설정에 따라 적절한 저장소 서비스 반환"""
    if settings.persistence_backend == "json":
        return JsonFilePersistence(settings.data_dir)
    elif settings.persistence_backend == "memory":
        return InMemoryPersistence()
    else:
        raise ConfigurationError(f"지원하지 않는 저장소 백엔드: {settings.persistence_backend}")
