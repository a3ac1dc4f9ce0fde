# webapp/routers/admin.py
import logging
import platform
from fastapi import APIRouter, Depends

from webapp.dtos import (
    AdminResponse,
    AdminStatsDTO,
    BackupDTO,
    BackupResponse,
    DatasetStatsDTO,
    SystemInfoDTO,
)
from webapp.dependency import get_app_settings, get_dataset_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=AdminResponse,
    response_model_exclude_none=True,
    summary="데이터 통계 조회",
)
async def get_admin_stats(
    dataset_service = Depends(get_dataset_service),
    settings = Depends(get_app_settings)
) -> AdminResponse:
    overview = await dataset_service.get_overview()
    return AdminResponse(
        data=AdminStatsDTO(
            stats=DatasetStatsDTO(
                regions=overview.regions,
                species=overview.species,
                pollution_sources=overview.pollution_sources,
                chart_data_points=overview.chart_data_points,
                total_records=overview.total_records,
                last_updated=overview.last_updated,
                version=overview.version,
            ),
            recent_species=overview.recent_species,
            risk_distribution=overview.risk_distribution,
            system_info=SystemInfoDTO(
                runtime=f"Python {platform.python_version()}",
                environment=settings.ENVIRONMENT,
            ),
        )
    )

@router.post(
    "",
    response_model=BackupResponse,
    summary="데이터 백업",
)
async def create_backup(
    dataset_service = Depends(get_dataset_service)
) -> BackupResponse:
    backup_path = await dataset_service.create_backup()
    return BackupResponse(
        data=BackupDTO(backup_file=backup_path.name),
        message="백업이 성공적으로 생성되었습니다.",
    )
