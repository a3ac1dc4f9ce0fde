# microplastic/observation/repository.py
from datetime import datetime, timedelta
from typing import Optional

from .domains import LegacyOceanData


class RealDataCache:
    """실데이터 캐시 엔트리"""
    def __init__(self, data: LegacyOceanData, timestamp: datetime):
        self.data = data
        self.timestamp = timestamp

    def is_expired(self, ttl_minutes: int = 5) -> bool:
        """캐시 만료 여부 확인"""
        return datetime.now() - self.timestamp > timedelta(minutes=ttl_minutes)


class ObservationRepository:
    """실데이터 저장소 - 메모리 캐시 전담"""

    def __init__(self, ttl_minutes: int = 5):
        self._ttl_minutes = ttl_minutes
        self._cache: Optional[RealDataCache] = None

    def get_cached(self) -> Optional[LegacyOceanData]:
        """유효한 캐시 데이터 조회"""
        if self._cache and not self._cache.is_expired(self._ttl_minutes):
            return self._cache.data
        return None

    def cache(self, data: LegacyOceanData) -> None:
        self._cache = RealDataCache(data, datetime.now())

    def clear(self) -> None:
        self._cache = None
