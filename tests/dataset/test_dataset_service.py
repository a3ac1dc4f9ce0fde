# tests/dataset/test_dataset_service.py
import asyncio
import pytest

from microplastic.dataset.domains import RiskLevel, SnapshotPatch, SpeciesDraft, SpeciesPatch
from microplastic.dataset.service import DatasetService
from microplastic.exceptions import (
    DuplicateSpeciesException,
    RegionNotFoundException,
    SpeciesNotFoundException,
)


def _draft(name: str = "방어") -> SpeciesDraft:
    return SpeciesDraft(
        species=name,
        impact=55,
        previous_population=2000,
        current_population=1800,
        population_change=-10.0,
        trend="악화",
    )


@pytest.mark.asyncio
class TestRegionOperations:
    """지역 데이터 조회/수정 테스트"""

    async def test_get_region_snapshot(self, dataset_service: DatasetService):
        # when
        result = await dataset_service.get_region_snapshot("east", "5years")

        # then
        assert result.region_name == "동해"
        assert result.snapshot.risk is RiskLevel.VERY_LOW

    async def test_update_region_snapshot_merges_fields(self, dataset_service: DatasetService):
        # given
        patch = SnapshotPatch(risk="높음", points=30)

        # when
        result = await dataset_service.update_region_snapshot("south", "1year", patch)

        # then
        assert result.snapshot.risk is RiskLevel.HIGH
        assert result.snapshot.points == 30
        assert result.snapshot.concentration == "2.3"
        reloaded = await dataset_service.get_region_snapshot("south", "1year")
        assert reloaded.snapshot == result.snapshot

    async def test_update_unknown_region(self, dataset_service: DatasetService):
        with pytest.raises(RegionNotFoundException):
            await dataset_service.update_region_snapshot("north", "1year", SnapshotPatch(points=1))


@pytest.mark.asyncio
class TestSpeciesOperations:
    """어종 CRUD 테스트"""

    async def test_list_species(self, dataset_service: DatasetService):
        # when
        species, total = await dataset_service.list_species(limit=3)

        # then
        assert total == 6
        assert [s.species for s in species] == ["고등어", "명태", "갈치"]

    async def test_create_species_assigns_next_id(self, dataset_service: DatasetService):
        # when
        created = await dataset_service.create_species(_draft())

        # then
        assert created.id == 7
        assert created.last_updated.endswith("Z")
        assert (await dataset_service.get_species(7)).species == "방어"

    async def test_create_duplicate_species(self, dataset_service: DatasetService):
        with pytest.raises(DuplicateSpeciesException):
            await dataset_service.create_species(_draft("고등어"))

    async def test_update_species(self, dataset_service: DatasetService):
        # given
        before = await dataset_service.get_species(3)

        # when
        updated = await dataset_service.update_species(3, SpeciesPatch(impact=90, habitat="연안"))

        # then
        assert updated.id == 3
        assert updated.impact == 90
        assert updated.habitat == "연안"
        assert updated.species == before.species
        assert updated.last_updated >= before.last_updated

    async def test_rename_onto_existing_name(self, dataset_service: DatasetService):
        with pytest.raises(DuplicateSpeciesException):
            await dataset_service.update_species(2, SpeciesPatch(species="고등어"))

    async def test_rename_to_own_name_is_allowed(self, dataset_service: DatasetService):
        updated = await dataset_service.update_species(1, SpeciesPatch(species="고등어"))
        assert updated.species == "고등어"

    async def test_delete_species(self, dataset_service: DatasetService):
        # when
        deleted = await dataset_service.delete_species(6)

        # then
        assert deleted.species == "멸치"
        _, total = await dataset_service.list_species()
        assert total == 5
        with pytest.raises(SpeciesNotFoundException):
            await dataset_service.get_species(6)

    async def test_delete_unknown_species(self, dataset_service: DatasetService):
        with pytest.raises(SpeciesNotFoundException):
            await dataset_service.delete_species(999)

    async def test_concurrent_creates_get_distinct_ids(self, dataset_service: DatasetService):
        """동시 추가 요청도 직렬화되어 id가 겹치지 않음"""
        # when
        created = await asyncio.gather(*(dataset_service.create_species(_draft(f"어종{i}")) for i in range(5)))

        # then
        assert sorted(s.id for s in created) == [7, 8, 9, 10, 11]
        _, total = await dataset_service.list_species()
        assert total == 11


@pytest.mark.asyncio
class TestChartAndAdmin:
    """차트/오염원/관리자 기능 테스트"""

    async def test_chart_data_unknown_keys_return_unscaled(self, dataset_service: DatasetService):
        """계수가 없는 지역이나 기간이어도 원본 월별 데이터 반환"""
        # given
        original = await dataset_service.get_chart_data("all", "1year")

        # when
        north = await dataset_service.get_chart_data("north", "1year")
        west = await dataset_service.get_chart_data("west", "2weeks")

        # then
        assert north == original
        assert len(north) == 12
        assert north[0].concentration == 1.8
        assert west[0].concentration == 2.3

    async def test_chart_data_scaled(self, dataset_service: DatasetService):
        points = await dataset_service.get_chart_data("east", "1year")
        assert len(points) == 12
        assert points[0].concentration == 1.3

    async def test_pollution_sources(self, dataset_service: DatasetService):
        sources = await dataset_service.get_pollution_sources("jeju")
        assert sources[0].name == "관광 폐기물"

    async def test_overview(self, dataset_service: DatasetService):
        # when
        overview = await dataset_service.get_overview()

        # then
        assert overview.regions == 5
        assert overview.species == 6
        assert overview.pollution_sources == 5
        assert overview.chart_data_points == 12
        assert overview.total_records == 43
        assert len(overview.recent_species) == 5
        assert sum(overview.risk_distribution.values()) == 20

    async def test_create_backup(self, dataset_service: DatasetService):
        backup_path = await dataset_service.create_backup()
        assert backup_path.exists()
