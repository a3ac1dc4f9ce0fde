# webapp/dependency.py
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from webapp.container import MicroplasticApiContainer

# === 핵심 서비스 의존성만 ===
@inject
def get_dataset_service(
    service = Depends(Provide[MicroplasticApiContainer.dataset_service])
):
    """데이터셋 서비스 의존성"""
    return service

@inject
def get_observation_service(
    service = Depends(Provide[MicroplasticApiContainer.observation_service])
):
    """실데이터 서비스 의존성"""
    return service

@inject
def get_app_settings(
    settings = Depends(Provide[MicroplasticApiContainer.settings])
):
    """애플리케이션 설정"""
    return settings
