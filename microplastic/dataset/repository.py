# microplastic/dataset/repository.py
import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, Optional

from pydantic import ValidationError

from microplastic.exceptions import StorageUnavailableException
from .domains import Dataset, utc_now_iso
from .seed import build_default_dataset

logger = logging.getLogger(__name__)


class DatasetRepository(ABC):
    """데이터셋 저장소 인터페이스 - 데이터 주권 담당"""

    def __init__(self):
        self._write_lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> Dataset:
        """데이터셋 조회 (없으면 기본 데이터 생성)"""

    @abstractmethod
    async def save(self, dataset: Dataset) -> None:
        """데이터셋 전체 저장"""

    @abstractmethod
    async def create_backup(self) -> Path:
        """현재 데이터셋 백업"""

    @asynccontextmanager
    async def with_lock(self) -> AsyncIterator[Dataset]:
        """조회-수정-저장 구간 직렬화

        블록이 정상 종료되면 저장하고, 예외가 발생하면 변경 내용을 버린다.
        """
        async with self._write_lock:
            dataset = await self.load()
            yield dataset
            await self.save(dataset)


class JsonFileDatasetRepository(DatasetRepository):
    """JSON 파일 하나에 전체 데이터셋을 저장하는 저장소"""

    def __init__(
        self,
        data_path: Path,
        backup_dir: Optional[Path] = None,
        default_factory: Callable[[], Dataset] = build_default_dataset,
    ):
        super().__init__()
        self._data_path = Path(data_path)
        self._backup_dir = Path(backup_dir) if backup_dir else self._data_path.parent / "backups"
        self._default_factory = default_factory

    @property
    def data_path(self) -> Path:
        return self._data_path

    # === 조회 ===
    async def load(self) -> Dataset:
        try:
            content = await asyncio.to_thread(self._data_path.read_text, encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"데이터 파일이 없습니다. 기본 데이터를 생성합니다: {self._data_path}")
            dataset = self._default_factory()
            await self.save(dataset)
            logger.info("기본 데이터가 생성되었습니다")
            return dataset
        except OSError as e:
            logger.error(f"데이터 읽기 오류: {e}", exc_info=True)
            raise StorageUnavailableException("데이터를 읽을 수 없습니다.") from e

        try:
            return Dataset.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"데이터 형식 오류: {e}")
            raise StorageUnavailableException("저장된 데이터 형식이 올바르지 않습니다.") from e

    # === 저장 ===
    async def save(self, dataset: Dataset) -> None:
        dataset.metadata.last_updated = utc_now_iso()
        try:
            await asyncio.to_thread(self._write_document, self._data_path, dataset)
        except OSError as e:
            logger.error(f"데이터 쓰기 오류: {e}", exc_info=True)
            raise StorageUnavailableException("데이터를 저장할 수 없습니다.") from e

    async def create_backup(self) -> Path:
        dataset = await self.load()
        timestamp = utc_now_iso().replace(":", "-").replace(".", "-")
        backup_path = self._backup_dir / f"backup-{timestamp}.json"
        try:
            await asyncio.to_thread(self._write_document, backup_path, dataset)
        except OSError as e:
            logger.error(f"백업 오류: {e}", exc_info=True)
            raise StorageUnavailableException("백업 생성 중 오류가 발생했습니다.") from e
        logger.info(f"백업 파일 생성: {backup_path}")
        return backup_path

    @staticmethod
    def _write_document(path: Path, dataset: Dataset) -> None:
        """임시 파일에 쓴 뒤 교체 (쓰기 도중 실패해도 기존 파일 유지)"""
        path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(dataset.to_document(), ensure_ascii=False, indent=2)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
