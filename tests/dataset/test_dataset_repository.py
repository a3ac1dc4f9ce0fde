# tests/dataset/test_dataset_repository.py
import json
import pytest
from unittest.mock import MagicMock

from microplastic.dataset.repository import JsonFileDatasetRepository
from microplastic.dataset.seed import build_default_dataset, build_real_dataset
from microplastic.exceptions import StorageUnavailableException


@pytest.mark.asyncio
class TestJsonFileDatasetRepository:
    """JSON 파일 저장소 테스트"""

    async def test_first_load_creates_default_file(self, dataset_repository):
        """데이터 파일이 없으면 기본 데이터 생성 후 저장"""
        # given
        assert not dataset_repository.data_path.exists()

        # when
        dataset = await dataset_repository.load()

        # then
        assert dataset_repository.data_path.exists()
        assert len(dataset.species) == 6
        assert dataset.regions.keys() == build_default_dataset().regions.keys()

    async def test_factory_called_only_once(self, test_settings):
        """두 번째 조회부터는 파일에서 읽음"""
        # given
        factory = MagicMock(side_effect=build_default_dataset)
        repository = JsonFileDatasetRepository(test_settings.DATA_PATH, default_factory=factory)

        # when
        await repository.load()
        await repository.load()

        # then
        factory.assert_called_once()

    async def test_save_then_load_preserves_document(self, dataset_repository):
        """저장 후 다시 읽으면 lastUpdated 외에는 동일"""
        # given
        await dataset_repository.load()
        before = json.loads(dataset_repository.data_path.read_text(encoding="utf-8"))

        # when
        await dataset_repository.save(await dataset_repository.load())

        # then
        after = json.loads(dataset_repository.data_path.read_text(encoding="utf-8"))
        before["metadata"].pop("lastUpdated")
        after["metadata"].pop("lastUpdated")
        assert before == after

    async def test_real_dataset_round_trip(self, test_settings):
        """관측소 목록과 출처 정보도 그대로 저장"""
        # given
        repository = JsonFileDatasetRepository(test_settings.DATA_PATH, default_factory=build_real_dataset)

        # when
        created = await repository.load()
        loaded = await repository.load()

        # then
        assert loaded == created
        assert len(loaded.monitoring_stations) == 14
        document = json.loads(repository.data_path.read_text(encoding="utf-8"))
        assert document["metadata"]["isRealData"] is True
        assert len(document["monitoringStations"]) == 14

    async def test_file_format(self, dataset_repository):
        """UTF-8, 2칸 들여쓰기, 한글 그대로 저장"""
        # when
        await dataset_repository.load()

        # then
        content = dataset_repository.data_path.read_text(encoding="utf-8")
        assert "전체 해역" in content
        assert '\n  "regions": {' in content

    async def test_corrupted_file_raises_storage_error(self, dataset_repository):
        # given
        dataset_repository.data_path.parent.mkdir(parents=True, exist_ok=True)
        dataset_repository.data_path.write_text("{ not json", encoding="utf-8")

        # when & then
        with pytest.raises(StorageUnavailableException):
            await dataset_repository.load()

    async def test_invalid_document_raises_storage_error(self, dataset_repository):
        # given
        dataset_repository.data_path.parent.mkdir(parents=True, exist_ok=True)
        dataset_repository.data_path.write_text(json.dumps({"regions": {}}), encoding="utf-8")

        # when & then
        with pytest.raises(StorageUnavailableException):
            await dataset_repository.load()

    async def test_with_lock_saves_changes(self, dataset_repository):
        # when
        async with dataset_repository.with_lock() as dataset:
            dataset.species.pop()

        # then
        reloaded = await dataset_repository.load()
        assert len(reloaded.species) == 5

    async def test_with_lock_discards_changes_on_error(self, dataset_repository):
        # given
        await dataset_repository.load()

        # when
        with pytest.raises(RuntimeError):
            async with dataset_repository.with_lock() as dataset:
                dataset.species.clear()
                raise RuntimeError("중단")

        # then
        reloaded = await dataset_repository.load()
        assert len(reloaded.species) == 6

    async def test_create_backup(self, dataset_repository, test_settings):
        # when
        backup_path = await dataset_repository.create_backup()

        # then
        assert backup_path.parent == test_settings.BACKUP_DIR
        assert backup_path.name.startswith("backup-")
        assert ":" not in backup_path.name
        backup = json.loads(backup_path.read_text(encoding="utf-8"))
        assert len(backup["species"]) == 6

    async def test_no_temp_files_left(self, dataset_repository):
        # when
        await dataset_repository.load()

        # then
        leftovers = [p for p in dataset_repository.data_path.parent.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []
