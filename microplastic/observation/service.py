# microplastic/observation/service.py
import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal

from microplastic.dataset.domains import utc_now_iso
from microplastic.exceptions import UpstreamUnavailableException
from .client import OCEAN_OBS_SOURCE, WATER_QUALITY_SOURCE, OceanDataClient
from .domains import (
    ComprehensiveOceanData,
    FetchStatus,
    LegacyMetadata,
    LegacyOceanData,
    LegacyRegion,
    LegacySnapshot,
    SourceResult,
)
from .repository import ObservationRepository
from .research import RESEARCH_SOURCES, fetch_research_samples

logger = logging.getLogger(__name__)

REAL_DATA_VERSION = "2.0.0-real"
BASE_SPECIES_COUNT = 120
SOURCE_NAMES = (OCEAN_OBS_SOURCE, WATER_QUALITY_SOURCE, RESEARCH_SOURCES[0])


def _round_half_up(value: float, step: str) -> Decimal:
    return Decimal(value).quantize(Decimal(step), rounding=ROUND_HALF_UP)


class ObservationService:
    """실제 해양 관측 데이터 서비스 - 수집/변환/캐시 전담"""

    def __init__(self, client: OceanDataClient, repository: ObservationRepository):
        self._client = client
        self._repository = repository

    async def fetch_comprehensive(self) -> ComprehensiveOceanData:
        """세 소스를 동시에 수집 (실패한 소스는 상태만 기록)"""
        results = await asyncio.gather(
            self._client.fetch_ocean_observations(),
            self._client.fetch_water_quality(),
            fetch_research_samples(),
            return_exceptions=True,
        )
        ocean, quality, research = (
            result if isinstance(result, SourceResult)
            else SourceResult.failed(source, str(result) or result.__class__.__name__)
            for source, result in zip(SOURCE_NAMES, results)
        )

        data_sources = []
        for result in (ocean, quality):
            if result.status is not FetchStatus.FAILED:
                data_sources.append(result.source)
        if research.status is not FetchStatus.FAILED:
            data_sources.extend(RESEARCH_SOURCES)

        for result in (ocean, quality, research):
            if result.status is FetchStatus.FAILED:
                logger.warning(f"데이터 소스 수집 실패: {result.source} ({result.error})")

        return ComprehensiveOceanData(
            ocean_observations=ocean.records,
            water_quality=quality.records,
            microplastic_samples=research.records,
            source_statuses={r.source: r.status for r in (ocean, quality, research)},
            data_sources=data_sources,
            last_updated=utc_now_iso(),
        )

    @staticmethod
    def to_legacy_format(data: ComprehensiveOceanData) -> LegacyOceanData:
        """대시보드 호환 형식으로 변환"""
        concentrations = [s.concentration for s in data.microplastic_samples]
        mean = sum(concentrations) / len(concentrations) if concentrations else 0.0
        # 영향 어종 수는 소수 첫째 자리로 반올림한 평균 농도로 추정
        rounded_mean = _round_half_up(mean, "0.1")
        species = _round_half_up(BASE_SPECIES_COUNT * (1 + float(rounded_mean) / 10), "1")

        snapshot = LegacySnapshot(
            risk="높음",
            concentration=str(rounded_mean),
            species=int(species),
            points=len(data.ocean_observations) + len(data.water_quality),
            risk_change="+8%",
            conc_change="+12%",
            species_change="+15%",
            points_change="+3%",
        )
        return LegacyOceanData(
            regions={"all": LegacyRegion(name="전체 해역", time_ranges={"1month": snapshot})},
            real_time_data=data,
            metadata=LegacyMetadata(
                version=REAL_DATA_VERSION,
                last_updated=data.last_updated,
                data_source="실제 해양 관측 데이터",
                is_real_data=True,
            ),
        )

    async def get_real_data(self, refresh: bool = False) -> LegacyOceanData:
        """캐시된 실데이터 조회 (refresh=True면 캐시 무시)"""
        if not refresh:
            cached = self._repository.get_cached()
            if cached is not None:
                logger.debug("실데이터 캐시 사용")
                return cached

        data = await self.fetch_comprehensive()
        if not data.is_valid:
            raise UpstreamUnavailableException("유효한 실제 데이터를 가져올 수 없습니다.")

        legacy = self.to_legacy_format(data)
        self._repository.cache(legacy)
        logger.info(f"실데이터 갱신 완료: {data.statistics()}")
        return legacy

    async def refresh(self) -> ComprehensiveOceanData:
        """캐시를 무시하고 다시 수집한 원본 데이터 반환 (유효하면 캐시 갱신)"""
        data = await self.fetch_comprehensive()
        if data.is_valid:
            self._repository.cache(self.to_legacy_format(data))
        else:
            logger.warning("새로고침 결과에 유효한 데이터가 없습니다")
        return data
