# webapp/routers/real_data.py
import logging
from fastapi import APIRouter, Depends, Query

from webapp.dtos import RealDataRefreshResponse, RealDataResponse
from webapp.dependency import get_observation_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=RealDataResponse,
    response_model_exclude_none=True,
    summary="실제 해양 관측 데이터 조회",
    responses={503: {"description": "유효한 실제 데이터를 가져올 수 없음"}},
)
async def get_real_data(
    refresh: bool = Query(False, description="true면 캐시를 무시하고 다시 수집"),
    observation_service = Depends(get_observation_service)
) -> RealDataResponse:
    legacy = await observation_service.get_real_data(refresh=refresh)
    raw = legacy.real_time_data
    return RealDataResponse(
        data=legacy,
        raw_data=raw,
        statistics=raw.statistics(),
        source_status=raw.source_statuses,
    )

@router.post(
    "",
    response_model=RealDataRefreshResponse,
    response_model_exclude_none=True,
    summary="실제 데이터 새로고침",
)
async def refresh_real_data(
    observation_service = Depends(get_observation_service)
) -> RealDataRefreshResponse:
    """캐시를 무시하고 원본 수집 결과 반환 (유효성 검사 없음)"""
    logger.info("실데이터 강제 새로고침 요청")
    raw = await observation_service.refresh()
    return RealDataRefreshResponse(
        data=raw,
        statistics=raw.statistics(),
        source_status=raw.source_statuses,
        message="실제 데이터가 성공적으로 새로고침되었습니다.",
    )
