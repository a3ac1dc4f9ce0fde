# webapp/routers/regions.py
import logging
from fastapi import APIRouter, Depends, Query

from microplastic.dataset.domains import SnapshotPatch
from webapp.dtos import RegionResponse
from webapp.dependency import get_dataset_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=RegionResponse,
    response_model_exclude_none=True,
    summary="지역 데이터 조회",
    description="지역·기간별 위험도, 농도, 영향 어종 수, 모니터링 지점 수를 조회합니다.",
)
async def get_region(
    region: str = Query("all", examples=["west"]),
    time_range: str = Query("1year", alias="timeRange", examples=["3months"]),
    dataset_service = Depends(get_dataset_service)
) -> RegionResponse:
    result = await dataset_service.get_region_snapshot(region, time_range)
    return RegionResponse(
        data=result.snapshot,
        region=result.region,
        region_name=result.region_name,
        time_range=result.time_range,
    )

@router.put(
    "",
    response_model=RegionResponse,
    response_model_exclude_none=True,
    summary="지역 데이터 수정",
)
async def update_region(
    patch: SnapshotPatch,
    region: str = Query(...),
    time_range: str = Query(..., alias="timeRange"),
    dataset_service = Depends(get_dataset_service)
) -> RegionResponse:
    """요청에 포함된 필드만 업데이트"""
    result = await dataset_service.update_region_snapshot(region, time_range, patch)
    return RegionResponse(
        data=result.snapshot,
        region=result.region,
        region_name=result.region_name,
        time_range=result.time_range,
        message="지역 데이터가 성공적으로 업데이트되었습니다.",
    )
