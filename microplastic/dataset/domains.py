# microplastic/dataset/domains.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

TIME_RANGES = ("1month", "3months", "1year", "5years")

PERCENT_CHANGE_PATTERN = r"^[+-]?\d+(\.\d+)?%$"
CONCENTRATION_PATTERN = r"^\d+(\.\d+)?$"

Number = Union[int, float]


def utc_now_iso() -> str:
    """ISO-8601 UTC 타임스탬프 (예: 2024-11-15T03:21:07.123Z)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """JSON 문서의 camelCase 키와 매핑되는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentModel(CamelModel):
    """저장된 문서에 있는 알 수 없는 키를 보존하는 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class PatchModel(CamelModel):
    """부분 업데이트 - 알려진 필드만 허용"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    NULLABLE_FIELDS: ClassVar[frozenset] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_null(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.NULLABLE_FIELDS:
                raise ValueError(f"{to_camel(name)} 값은 null일 수 없습니다")
        return self

    def changes(self) -> Dict[str, Any]:
        """요청에 포함된 필드만 반환"""
        return self.model_dump(exclude_unset=True)


# ===== 지역 / 기간 =====
class RiskLevel(str, Enum):
    """위험도 (낮은 순서대로 정의)"""
    VERY_LOW = "매우낮음"
    LOW = "낮음"
    MEDIUM = "중간"
    HIGH = "높음"
    VERY_HIGH = "매우높음"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)


class TimeRangeSnapshot(DocumentModel):
    """특정 지역·기간의 오염 현황"""
    risk: RiskLevel
    concentration: str = Field(pattern=CONCENTRATION_PATTERN, description="농도 (mg/L)")
    species: int = Field(ge=0, description="영향 어종 수")
    points: int = Field(ge=0, description="모니터링 지점 수")
    risk_change: str = Field(pattern=PERCENT_CHANGE_PATTERN)
    conc_change: str = Field(pattern=PERCENT_CHANGE_PATTERN)
    species_change: str = Field(pattern=PERCENT_CHANGE_PATTERN)
    points_change: str = Field(pattern=PERCENT_CHANGE_PATTERN)


class SnapshotPatch(PatchModel):
    """지역·기간 데이터 부분 업데이트"""
    risk: Optional[RiskLevel] = None
    concentration: Optional[str] = Field(None, pattern=CONCENTRATION_PATTERN)
    species: Optional[int] = Field(None, ge=0)
    points: Optional[int] = Field(None, ge=0)
    risk_change: Optional[str] = Field(None, pattern=PERCENT_CHANGE_PATTERN)
    conc_change: Optional[str] = Field(None, pattern=PERCENT_CHANGE_PATTERN)
    species_change: Optional[str] = Field(None, pattern=PERCENT_CHANGE_PATTERN)
    points_change: Optional[str] = Field(None, pattern=PERCENT_CHANGE_PATTERN)


class Region(DocumentModel):
    """해역"""
    name: str
    time_ranges: Dict[str, TimeRangeSnapshot]

    @field_validator("time_ranges")
    @classmethod
    def validate_time_ranges(cls, v: Dict[str, TimeRangeSnapshot]) -> Dict[str, TimeRangeSnapshot]:
        missing = [key for key in TIME_RANGES if key not in v]
        if missing:
            raise ValueError(f"기간 데이터가 누락되었습니다: {', '.join(missing)}")
        return v


# ===== 어종 =====
class Species(DocumentModel):
    """미세플라스틱 영향 어종"""
    id: int
    species: str = Field(min_length=1, description="어종명")
    impact: int = Field(ge=0, le=100, description="영향도 점수")
    previous_population: int = Field(ge=0)
    current_population: int = Field(ge=0)
    population_change: Number = Field(description="개체수 변화율 (%)")
    trend: str
    last_updated: str
    scientific_name: Optional[str] = None
    habitat: Optional[str] = None


class SpeciesDraft(PatchModel):
    """새 어종 추가 요청 (id, lastUpdated는 서버에서 부여)"""
    species: str = Field(min_length=1)
    impact: int = Field(ge=0, le=100)
    previous_population: int = Field(ge=0)
    current_population: int = Field(ge=0)
    population_change: Number
    trend: str
    scientific_name: Optional[str] = None
    habitat: Optional[str] = None

    NULLABLE_FIELDS: ClassVar[frozenset] = frozenset({"scientific_name", "habitat"})


class SpeciesPatch(PatchModel):
    """어종 데이터 부분 업데이트"""
    species: Optional[str] = Field(None, min_length=1)
    impact: Optional[int] = Field(None, ge=0, le=100)
    previous_population: Optional[int] = Field(None, ge=0)
    current_population: Optional[int] = Field(None, ge=0)
    population_change: Optional[Number] = None
    trend: Optional[str] = None
    scientific_name: Optional[str] = None
    habitat: Optional[str] = None

    NULLABLE_FIELDS: ClassVar[frozenset] = frozenset({"scientific_name", "habitat"})


# ===== 오염원 / 차트 =====
class SourceShare(DocumentModel):
    """오염원 비율"""
    name: str
    percentage: Number

    @field_validator("percentage")
    @classmethod
    def validate_percentage(cls, v: Number) -> Number:
        if not 0 <= v <= 100:
            raise ValueError("비율은 0~100 사이여야 합니다")
        return v


class MonthlyPoint(DocumentModel):
    """월별 차트 데이터"""
    month: str
    concentration: Number = Field(description="농도 (정수로 저장된 값은 정수 유지)")
    particles: int = Field(ge=0)
    risk: int

    @field_validator("concentration")
    @classmethod
    def validate_concentration(cls, v: Number) -> Number:
        if v < 0:
            raise ValueError("농도는 0 이상이어야 합니다")
        return v


class MonitoringStation(DocumentModel):
    """해양 관측소"""
    id: str
    name: str
    coordinates: Dict[str, float]
    region: str
    type: str
    established: str


# ===== 전체 문서 =====
class DatasetMetadata(DocumentModel):
    """데이터셋 메타데이터"""
    version: str
    last_updated: str
    total_records: int = Field(ge=0)
    auto_generated: Optional[bool] = None
    is_real_data: Optional[bool] = None
    data_sources: Optional[List[str]] = None
    disclaimer: Optional[str] = None


class Dataset(DocumentModel):
    """JSON 파일 하나에 저장되는 전체 데이터셋"""
    regions: Dict[str, Region]
    species: List[Species]
    pollution_sources: Dict[str, List[SourceShare]]
    chart_data: List[MonthlyPoint] = Field(min_length=12, max_length=12)
    monitoring_stations: Optional[List[MonitoringStation]] = None
    metadata: DatasetMetadata

    @model_validator(mode="after")
    def validate_references(self):
        unknown = [key for key in self.pollution_sources if key not in self.regions]
        if unknown:
            raise ValueError(f"존재하지 않는 지역의 오염원 데이터입니다: {', '.join(unknown)}")

        ids = [s.id for s in self.species]
        if len(ids) != len(set(ids)):
            raise ValueError("어종 id가 중복되었습니다")

        names = [s.species for s in self.species]
        if len(names) != len(set(names)):
            raise ValueError("어종명이 중복되었습니다")

        for station in self.monitoring_stations or []:
            if station.region not in self.regions:
                raise ValueError(f"존재하지 않는 지역의 관측소입니다: {station.id}")
        return self

    def count_records(self) -> int:
        """지역 × 기간 + 어종 + 오염원 지역 + 차트 포인트 (+ 관측소) 수"""
        return (
            len(self.regions) * len(TIME_RANGES)
            + len(self.species)
            + len(self.pollution_sources)
            + len(self.chart_data)
            + len(self.monitoring_stations or [])
        )

    def next_species_id(self) -> int:
        return max((s.id for s in self.species), default=0) + 1

    def find_species_index(self, species_id: int) -> Optional[int]:
        for index, species in enumerate(self.species):
            if species.id == species_id:
                return index
        return None

    def to_document(self) -> Dict[str, Any]:
        """JSON 저장용 dict (camelCase 키)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ===== 조회 결과 =====
@dataclass
class RegionSnapshot:
    """지역·기간 조회 결과"""
    region: str
    region_name: str
    time_range: str
    snapshot: TimeRangeSnapshot


@dataclass
class DatasetOverview:
    """관리자용 데이터셋 통계"""
    regions: int
    species: int
    pollution_sources: int
    chart_data_points: int
    total_records: int
    last_updated: str
    version: str
    recent_species: List[Species] = field(default_factory=list)
    risk_distribution: Dict[str, int] = field(default_factory=dict)
