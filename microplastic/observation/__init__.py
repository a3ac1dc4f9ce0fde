# microplastic/observation/__init__.py
from .domains import ComprehensiveOceanData, FetchStatus, LegacyOceanData, SourceResult
from .client import OceanDataClient
from .service import ObservationService
from .container import create_observation_container

__all__ = [
    "ComprehensiveOceanData",
    "FetchStatus",
    "LegacyOceanData",
    "SourceResult",
    "OceanDataClient",
    "ObservationService",
    "create_observation_container",
]
