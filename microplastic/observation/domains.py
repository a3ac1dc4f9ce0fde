# microplastic/observation/domains.py
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===== 관측 레코드 =====
class OceanObservation(CamelModel):
    """국립해양조사원 실시간 관측소 데이터"""
    station_id: str
    station_name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    water_temp: Optional[float] = None
    salinity: Optional[float] = None
    ph: Optional[float] = None
    dissolved_oxygen: Optional[float] = None
    turbidity: Optional[float] = None
    timestamp: str


class WaterQuality(CamelModel):
    """환경부 해양수질측정망 데이터"""
    site_name: str
    cod: Optional[float] = None
    bod: Optional[float] = None
    total_nitrogen: Optional[float] = None
    total_phosphorus: Optional[float] = None
    suspended_solids: Optional[float] = None
    heavy_metals: Dict[str, Optional[float]] = Field(default_factory=dict)
    timestamp: str


class MicroplasticSample(CamelModel):
    """연구기관 미세플라스틱 조사 결과"""
    location: str
    latitude: float
    longitude: float
    concentration: float = Field(ge=0, description="농도 (mg/L)")
    particle_count: int = Field(ge=0, description="입자 수 (개/L)")
    polymer_types: List[str]
    depth: str
    source: str
    sample_date: str


# ===== 수집 결과 =====
class FetchStatus(str, Enum):
    SUCCEEDED = "succeeded"
    EMPTY = "empty"
    FAILED = "failed"


class SourceResult(CamelModel):
    """데이터 소스별 수집 결과"""
    source: str
    status: FetchStatus
    records: List[Any] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, source: str, records: List[Any]) -> "SourceResult":
        status = FetchStatus.SUCCEEDED if records else FetchStatus.EMPTY
        return cls(source=source, status=status, records=records)

    @classmethod
    def failed(cls, source: str, error: str) -> "SourceResult":
        return cls(source=source, status=FetchStatus.FAILED, error=error)


class ComprehensiveOceanData(CamelModel):
    """전체 소스 통합 결과"""
    ocean_observations: List[OceanObservation] = Field(default_factory=list)
    water_quality: List[WaterQuality] = Field(default_factory=list)
    microplastic_samples: List[MicroplasticSample] = Field(default_factory=list)
    source_statuses: Dict[str, FetchStatus] = Field(default_factory=dict)
    data_sources: List[str] = Field(default_factory=list)
    last_updated: str

    @property
    def is_valid(self) -> bool:
        """세 소스 중 하나라도 데이터가 있으면 유효"""
        return bool(self.ocean_observations or self.water_quality or self.microplastic_samples)

    def statistics(self) -> Dict[str, int]:
        return {
            "oceanStations": len(self.ocean_observations),
            "qualityMeasurements": len(self.water_quality),
            "microplasticSamples": len(self.microplastic_samples),
            "dataSources": len(self.data_sources),
        }


# ===== 기존 대시보드 형식 =====
class LegacySnapshot(CamelModel):
    risk: str
    concentration: str
    species: int
    points: int
    risk_change: str
    conc_change: str
    species_change: str
    points_change: str


class LegacyRegion(CamelModel):
    name: str
    time_ranges: Dict[str, LegacySnapshot]


class LegacyMetadata(CamelModel):
    version: str
    last_updated: str
    data_source: str
    is_real_data: bool


class LegacyOceanData(CamelModel):
    """대시보드 호환 형식"""
    regions: Dict[str, LegacyRegion]
    real_time_data: ComprehensiveOceanData
    metadata: LegacyMetadata

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
