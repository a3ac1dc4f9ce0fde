# webapp/container.py
import logging
from typing import Optional

from dependency_injector import containers, providers

# 모듈별 Container import만
from microplastic.dataset.container import create_dataset_container
from microplastic.observation.container import create_observation_container
from microplastic.settings import AppSettings, get_settings


logger = logging.getLogger(__name__)

class MicroplasticApiContainer(containers.DeclarativeContainer):
    """미세플라스틱 대시보드 API 애플리케이션 컨테이너"""

    # === Settings ===
    settings = providers.Singleton(AppSettings)

    # === Module Containers ===
    dataset_container = providers.DependenciesContainer()
    observation_container = providers.DependenciesContainer()

    # === Service Layer ===
    dataset_service = providers.Singleton(
        lambda container: container.service(),
        container=dataset_container
    )

    observation_service = providers.Singleton(
        lambda container: container.service(),
        container=observation_container
    )

def create_container(settings: Optional[AppSettings] = None) -> MicroplasticApiContainer:
    """컨테이너 생성 및 초기화"""
    settings = settings or get_settings()
    container = MicroplasticApiContainer()

    # 모듈별 Container 생성
    dataset_container = create_dataset_container()
    observation_container = create_observation_container()

    # 모든 모듈이 같은 설정을 공유
    container.settings.override(providers.Object(settings))
    dataset_container.settings.override(providers.Object(settings))
    observation_container.settings.override(providers.Object(settings))

    # Container 등록
    container.dataset_container.override(dataset_container)
    container.observation_container.override(observation_container)

    logger.debug(f"컨테이너 생성 완료 (DATA_PATH={settings.DATA_PATH})")
    return container
