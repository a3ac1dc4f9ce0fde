# webapp/routers/chart_data.py
from fastapi import APIRouter, Depends, Query

from webapp.dtos import ChartDataResponse
from webapp.dependency import get_dataset_service

router = APIRouter()

@router.get(
    "",
    response_model=ChartDataResponse,
    summary="월별 차트 데이터 조회",
    description="지역별 계수를 적용한 12개월 농도/입자 수/위험도 데이터를 조회합니다.",
)
async def get_chart_data(
    region: str = Query("all", examples=["east"]),
    time_range: str = Query("1year", alias="timeRange"),
    dataset_service = Depends(get_dataset_service)
) -> ChartDataResponse:
    points = await dataset_service.get_chart_data(region, time_range)
    return ChartDataResponse(data=points, region=region, time_range=time_range)
