# microplastic/dataset/__init__.py
from .domains import Dataset, Species, TimeRangeSnapshot
from .repository import DatasetRepository, JsonFileDatasetRepository
from .seed import build_default_dataset
from .service import DatasetService
from .container import create_dataset_container

__all__ = [
    "Dataset",
    "Species",
    "TimeRangeSnapshot",
    "DatasetRepository",
    "JsonFileDatasetRepository",
    "build_default_dataset",
    "DatasetService",
    "create_dataset_container",
]
