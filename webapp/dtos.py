# webapp/dtos.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from microplastic.dataset.domains import (
    MonthlyPoint,
    SourceShare,
    Species,
    TimeRangeSnapshot,
    utc_now_iso,
)
from microplastic.observation.domains import (
    ComprehensiveOceanData,
    FetchStatus,
    LegacyOceanData,
)

class CamelModel(BaseModel):
    """FastAPI의 모든 Request, Response 모델에 CamelCase를 적용"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ===== 공통 응답 =====
class ApiResponse(CamelModel):
    """성공 응답 공통 필드"""
    success: bool = True
    timestamp: str = Field(default_factory=utc_now_iso)

class ErrorResponse(CamelModel):
    """오류 응답"""
    success: bool = False
    error: str
    code: str
    timestamp: str = Field(default_factory=utc_now_iso)

# ===== 지역 =====
class RegionResponse(ApiResponse):
    data: TimeRangeSnapshot
    region: str
    region_name: str
    time_range: str
    message: Optional[str] = None

# ===== 어종 =====
class SpeciesListResponse(ApiResponse):
    data: List[Species]
    total: int = Field(description="전체 어종 수 (limit 적용 전)")

class SpeciesResponse(ApiResponse):
    data: Species
    message: Optional[str] = None

# ===== 오염원 / 차트 =====
class PollutionSourcesResponse(ApiResponse):
    data: List[SourceShare]
    region: str

class ChartDataResponse(ApiResponse):
    data: List[MonthlyPoint]
    region: str
    time_range: str

# ===== 실데이터 =====
class RealDataResponse(ApiResponse):
    data: LegacyOceanData
    raw_data: ComprehensiveOceanData
    statistics: Dict[str, int]
    source_status: Dict[str, FetchStatus]

class RealDataRefreshResponse(ApiResponse):
    data: ComprehensiveOceanData
    statistics: Dict[str, int]
    source_status: Dict[str, FetchStatus]
    message: str

# ===== 관리자 =====
class DatasetStatsDTO(CamelModel):
    regions: int
    species: int
    pollution_sources: int
    chart_data_points: int
    total_records: int
    last_updated: str
    version: str

class SystemInfoDTO(CamelModel):
    runtime: str
    environment: str
    timestamp: str = Field(default_factory=utc_now_iso)

class AdminStatsDTO(CamelModel):
    stats: DatasetStatsDTO
    recent_species: List[Species]
    risk_distribution: Dict[str, int]
    system_info: SystemInfoDTO

class AdminResponse(ApiResponse):
    data: AdminStatsDTO

class BackupDTO(CamelModel):
    backup_file: str

class BackupResponse(ApiResponse):
    data: BackupDTO
    message: str

# ===== 헬스체크 =====
class HealthResponse(CamelModel):
    status: str = "healthy"
    version: str
    environment: str
    timestamp: str = Field(default_factory=utc_now_iso)

def error_content(message: str, code: str) -> Dict[str, Any]:
    """오류 응답 JSON"""
    return ErrorResponse(error=message, code=code).model_dump(by_alias=True)
