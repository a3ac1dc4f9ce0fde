# microplastic/dataset/views.py
"""데이터셋에서 화면용 데이터를 만드는 순수 함수들 (입력 데이터는 변경하지 않음)"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from functools import cmp_to_key
from typing import Any, Dict, List, Sequence

from pydantic.alias_generators import to_camel

from microplastic.exceptions import (
    RegionNotFoundException,
    TimeRangeNotFoundException,
)
from .domains import Dataset, MonthlyPoint, RiskLevel, SourceShare, Species, TimeRangeSnapshot

logger = logging.getLogger(__name__)

RISK_MIN = 0
RISK_MAX = 100


@dataclass(frozen=True)
class ScalingFactor:
    """지역별 차트 보정 계수"""
    concentration: float
    particles: float
    risk: float


IDENTITY_SCALING = ScalingFactor(concentration=1.0, particles=1.0, risk=1.0)

REGION_SCALING: Dict[str, ScalingFactor] = {
    "west": ScalingFactor(concentration=1.3, particles=1.2, risk=1.1),
    "east": ScalingFactor(concentration=0.7, particles=0.8, risk=0.8),
    "south": ScalingFactor(concentration=0.9, particles=0.95, risk=0.9),
    "jeju": ScalingFactor(concentration=0.85, particles=0.9, risk=0.85),
}

# API 파라미터(camelCase)와 필드명(snake_case) 모두 허용
SORTABLE_FIELDS: Dict[str, str] = {
    **{name: name for name in Species.model_fields},
    **{to_camel(name): name for name in Species.model_fields},
}


def _round_half_up(value: float, digits: int = 0) -> Decimal:
    return Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


# === 지역별 차트 ===
def scale_chart_data(points: Sequence[MonthlyPoint], region: str) -> List[MonthlyPoint]:
    """지역 계수를 적용한 월별 차트 데이터

    농도는 소수 첫째 자리, 입자 수와 위험도는 정수로 반올림한다.
    위험도는 모든 지역에서 0~100 범위로 제한한다.
    """
    factor = REGION_SCALING.get(region, IDENTITY_SCALING)
    scaled = []
    for point in points:
        risk = int(_round_half_up(point.risk * factor.risk))
        scaled.append(
            point.model_copy(
                update={
                    "concentration": float(_round_half_up(point.concentration * factor.concentration, 1)),
                    "particles": int(_round_half_up(point.particles * factor.particles)),
                    "risk": min(max(risk, RISK_MIN), RISK_MAX),
                }
            )
        )
    return scaled


# === 어종 정렬 ===
def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _text(value: Any) -> str:
    return "" if value is None else str(value).casefold()


def _compare_values(a: Any, b: Any) -> int:
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    a_text, b_text = _text(a), _text(b)
    return (a_text > b_text) - (a_text < b_text)


def sort_species(
    species: Sequence[Species],
    sort_by: str = "impact",
    order: str = "desc",
    limit: int = 0,
) -> List[Species]:
    """어종 정렬 및 개수 제한

    동일 값은 입력 순서를 유지하고, 알 수 없는 필드면 정렬하지 않는다.
    order가 "desc"가 아니면 오름차순으로 정렬한다.
    """
    field = SORTABLE_FIELDS.get(sort_by)
    if field is None:
        logger.debug(f"정렬할 수 없는 필드, 입력 순서 유지: {sort_by}")
        result = list(species)
    else:
        direction = -1 if order == "desc" else 1

        def compare(a: Species, b: Species) -> int:
            return direction * _compare_values(getattr(a, field), getattr(b, field))

        result = sorted(species, key=cmp_to_key(compare))

    if limit > 0:
        result = result[:limit]
    return result


# === 조회 ===
def lookup_snapshot(dataset: Dataset, region: str, time_range: str) -> TimeRangeSnapshot:
    """지역·기간 데이터 조회"""
    region_data = dataset.regions.get(region)
    if region_data is None:
        raise RegionNotFoundException(f"지역을 찾을 수 없습니다: {region}")

    snapshot = region_data.time_ranges.get(time_range)
    if snapshot is None:
        raise TimeRangeNotFoundException(f"기간을 찾을 수 없습니다: {time_range}")
    return snapshot


def lookup_sources(dataset: Dataset, region: str) -> List[SourceShare]:
    """지역별 오염원 조회"""
    sources = dataset.pollution_sources.get(region)
    if sources is None:
        raise RegionNotFoundException(f"지역을 찾을 수 없습니다: {region}")
    return sources


# === 관리자 통계 ===
def risk_distribution(dataset: Dataset) -> Dict[str, int]:
    """위험도별 지역·기간 데이터 수"""
    counts: Dict[RiskLevel, int] = {}
    for region in dataset.regions.values():
        for snapshot in region.time_ranges.values():
            counts[snapshot.risk] = counts.get(snapshot.risk, 0) + 1
    return {risk.value: counts[risk] for risk in sorted(counts, key=lambda r: r.rank)}


def _timestamp_key(value: str) -> float:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return float("-inf")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def recent_species(dataset: Dataset, limit: int = 5) -> List[Species]:
    """최근 업데이트된 어종 (저장된 순서는 변경하지 않음)"""
    ordered = sorted(dataset.species, key=lambda s: _timestamp_key(s.last_updated), reverse=True)
    return ordered[:limit]
