# webapp/routers/pollution_sources.py
from fastapi import APIRouter, Depends, Query

from webapp.dtos import PollutionSourcesResponse
from webapp.dependency import get_dataset_service

router = APIRouter()

@router.get(
    "",
    response_model=PollutionSourcesResponse,
    summary="오염원 비율 조회",
)
async def get_pollution_sources(
    region: str = Query("all", examples=["south"]),
    dataset_service = Depends(get_dataset_service)
) -> PollutionSourcesResponse:
    sources = await dataset_service.get_pollution_sources(region)
    return PollutionSourcesResponse(data=sources, region=region)
