# microplastic/dataset/container.py
from dependency_injector import containers, providers

from microplastic.settings import AppSettings
from .repository import JsonFileDatasetRepository
from .service import DatasetService


class DatasetContainer(containers.DeclarativeContainer):
    """Dataset 모듈 DI Container"""

    # === Settings ===
    settings = providers.Singleton(AppSettings)

    # === Repository 계층 (외부 노출 금지) ===
    repository = providers.Singleton(
        JsonFileDatasetRepository,
        data_path=settings.provided.DATA_PATH,
        backup_dir=settings.provided.BACKUP_DIR,
    )

    # === Service 계층 (유일한 외부 인터페이스) ===
    service = providers.Singleton(
        DatasetService,
        repository=repository
    )


def create_dataset_container() -> DatasetContainer:
    """Dataset Container 생성"""
    return DatasetContainer()
