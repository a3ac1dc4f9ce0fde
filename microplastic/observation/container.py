# microplastic/observation/container.py
from dependency_injector import containers, providers

from microplastic.settings import AppSettings
from .client import OceanDataClient
from .repository import ObservationRepository
from .service import ObservationService


class ObservationContainer(containers.DeclarativeContainer):
    """Observation 모듈 DI Container"""

    settings = providers.Singleton(AppSettings)

    client = providers.Singleton(
        OceanDataClient,
        api_key=settings.provided.DATA_GO_KR_API_KEY,
        ocean_obs_url=settings.provided.OCEAN_OBS_URL,
        water_quality_url=settings.provided.WATER_QUALITY_URL,
        timeout=settings.provided.FETCH_TIMEOUT,
    )

    repository = providers.Singleton(
        ObservationRepository,
        ttl_minutes=settings.provided.REAL_DATA_CACHE_TTL_MINUTES,
    )

    service = providers.Singleton(
        ObservationService,
        client=client,
        repository=repository
    )


def create_observation_container() -> ObservationContainer:
    """Observation Container 생성"""
    return ObservationContainer()
