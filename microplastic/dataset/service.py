# microplastic/dataset/service.py
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from microplastic.exceptions import (
    DuplicateSpeciesException,
    SpeciesNotFoundException,
)
from . import views
from .domains import (
    Dataset,
    DatasetOverview,
    MonthlyPoint,
    RegionSnapshot,
    SnapshotPatch,
    SourceShare,
    Species,
    SpeciesDraft,
    SpeciesPatch,
    utc_now_iso,
)
from .repository import DatasetRepository

logger = logging.getLogger(__name__)


class DatasetService:
    """미세플라스틱 데이터셋 서비스 - 조회/수정 전담"""

    def __init__(self, repository: DatasetRepository):
        self._repository = repository

    # === 지역 ===
    async def get_region_snapshot(self, region: str, time_range: str) -> RegionSnapshot:
        """지역·기간 데이터 조회"""
        dataset = await self._repository.load()
        snapshot = views.lookup_snapshot(dataset, region, time_range)
        return RegionSnapshot(
            region=region,
            region_name=dataset.regions[region].name,
            time_range=time_range,
            snapshot=snapshot,
        )

    async def update_region_snapshot(
        self, region: str, time_range: str, patch: SnapshotPatch
    ) -> RegionSnapshot:
        """지역·기간 데이터 부분 업데이트"""
        async with self._repository.with_lock() as dataset:
            snapshot = views.lookup_snapshot(dataset, region, time_range)
            updated = snapshot.model_copy(update=patch.changes())
            dataset.regions[region].time_ranges[time_range] = updated

        logger.info(f"지역 데이터 업데이트: {region}/{time_range} {list(patch.changes())}")
        return RegionSnapshot(
            region=region,
            region_name=dataset.regions[region].name,
            time_range=time_range,
            snapshot=updated,
        )

    # === 어종 ===
    async def list_species(
        self, sort_by: str = "impact", order: str = "desc", limit: int = 0
    ) -> Tuple[List[Species], int]:
        """정렬된 어종 목록과 전체 어종 수"""
        dataset = await self._repository.load()
        return views.sort_species(dataset.species, sort_by, order, limit), len(dataset.species)

    async def get_species(self, species_id: int) -> Species:
        dataset = await self._repository.load()
        return dataset.species[self._species_index(dataset, species_id)]

    async def create_species(self, draft: SpeciesDraft) -> Species:
        """새 어종 추가 (id는 기존 최대값 + 1)"""
        async with self._repository.with_lock() as dataset:
            self._ensure_unique_name(dataset, draft.species)
            species = Species(
                id=dataset.next_species_id(),
                last_updated=utc_now_iso(),
                **draft.model_dump(exclude_none=True),
            )
            dataset.species.append(species)

        logger.info(f"새 어종 추가: {species.species} (id={species.id})")
        return species

    async def update_species(self, species_id: int, patch: SpeciesPatch) -> Species:
        """어종 데이터 부분 업데이트"""
        changes = patch.changes()
        async with self._repository.with_lock() as dataset:
            index = self._species_index(dataset, species_id)
            if "species" in changes:
                self._ensure_unique_name(dataset, changes["species"], exclude_id=species_id)
            updated = dataset.species[index].model_copy(
                update={**changes, "last_updated": utc_now_iso()}
            )
            dataset.species[index] = updated

        logger.info(f"어종 업데이트: id={species_id} {list(changes)}")
        return updated

    async def delete_species(self, species_id: int) -> Species:
        async with self._repository.with_lock() as dataset:
            deleted = dataset.species.pop(self._species_index(dataset, species_id))

        logger.info(f"어종 삭제: {deleted.species} (id={species_id})")
        return deleted

    # === 오염원 / 차트 ===
    async def get_pollution_sources(self, region: str) -> List[SourceShare]:
        dataset = await self._repository.load()
        return views.lookup_sources(dataset, region)

    async def get_chart_data(self, region: str, time_range: str) -> List[MonthlyPoint]:
        """지역 계수를 적용한 월별 차트 데이터 (계수가 없는 지역은 원본 값)"""
        dataset = await self._repository.load()
        return views.scale_chart_data(dataset.chart_data, region)

    # === 관리자 ===
    async def get_overview(self) -> DatasetOverview:
        """전체 데이터 통계"""
        dataset = await self._repository.load()
        return DatasetOverview(
            regions=len(dataset.regions),
            species=len(dataset.species),
            pollution_sources=len(dataset.pollution_sources),
            chart_data_points=len(dataset.chart_data),
            total_records=dataset.metadata.total_records,
            last_updated=dataset.metadata.last_updated,
            version=dataset.metadata.version,
            recent_species=views.recent_species(dataset, limit=5),
            risk_distribution=views.risk_distribution(dataset),
        )

    async def create_backup(self) -> Path:
        return await self._repository.create_backup()

    # === 내부 검증 ===
    @staticmethod
    def _species_index(dataset: Dataset, species_id: int) -> int:
        index = dataset.find_species_index(species_id)
        if index is None:
            raise SpeciesNotFoundException(f"어종을 찾을 수 없습니다: id={species_id}")
        return index

    @staticmethod
    def _ensure_unique_name(dataset: Dataset, name: str, exclude_id: Optional[int] = None) -> None:
        for species in dataset.species:
            if species.species == name and species.id != exclude_id:
                raise DuplicateSpeciesException(f"이미 존재하는 어종입니다: {name}")
