# webapp/routers/species.py
import logging
from fastapi import APIRouter, Depends, Path, Query

from microplastic.dataset.domains import SpeciesDraft, SpeciesPatch
from webapp.dtos import SpeciesListResponse, SpeciesResponse
from webapp.dependency import get_dataset_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "",
    response_model=SpeciesListResponse,
    response_model_exclude_none=True,
    summary="어종 목록 조회",
)
async def list_species(
    sort_by: str = Query("impact", alias="sortBy", examples=["currentPopulation"]),
    order: str = Query("desc", examples=["asc"]),
    limit: int = Query(0, ge=0, description="0이면 전체"),
    dataset_service = Depends(get_dataset_service)
) -> SpeciesListResponse:
    """정렬·개수 제한이 적용된 어종 목록"""
    species, total = await dataset_service.list_species(sort_by, order, limit)
    return SpeciesListResponse(data=species, total=total)

@router.post(
    "",
    status_code=201,
    response_model=SpeciesResponse,
    response_model_exclude_none=True,
    summary="새 어종 추가",
)
async def create_species(
    draft: SpeciesDraft,
    dataset_service = Depends(get_dataset_service)
) -> SpeciesResponse:
    species = await dataset_service.create_species(draft)
    return SpeciesResponse(data=species, message="새 어종이 성공적으로 추가되었습니다.")

@router.get(
    "/{species_id}",
    response_model=SpeciesResponse,
    response_model_exclude_none=True,
    summary="어종 조회",
)
async def get_species(
    species_id: int = Path(..., examples=[1]),
    dataset_service = Depends(get_dataset_service)
) -> SpeciesResponse:
    return SpeciesResponse(data=await dataset_service.get_species(species_id))

@router.put(
    "/{species_id}",
    response_model=SpeciesResponse,
    response_model_exclude_none=True,
    summary="어종 수정",
)
async def update_species(
    patch: SpeciesPatch,
    species_id: int = Path(..., examples=[1]),
    dataset_service = Depends(get_dataset_service)
) -> SpeciesResponse:
    species = await dataset_service.update_species(species_id, patch)
    return SpeciesResponse(data=species, message="어종 데이터가 성공적으로 업데이트되었습니다.")

@router.delete(
    "/{species_id}",
    response_model=SpeciesResponse,
    response_model_exclude_none=True,
    summary="어종 삭제",
)
async def delete_species(
    species_id: int = Path(..., examples=[1]),
    dataset_service = Depends(get_dataset_service)
) -> SpeciesResponse:
    deleted = await dataset_service.delete_species(species_id)
    return SpeciesResponse(data=deleted, message="어종이 성공적으로 삭제되었습니다.")
