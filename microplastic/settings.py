"""
애플리케이션 설정 관리
데이터 파일 경로, 외부 해양 데이터 API, 로깅 설정을 환경 변수로 관리하는 모듈
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """미세플라스틱 대시보드 API 설정"""

    # === 데이터 저장소 ===
    DATA_PATH: Path = Path("data") / "microplastic-data.json"
    BACKUP_DIR: Path = Path("data") / "backups"

    # === 공공데이터포털 (data.go.kr) ===
    DATA_GO_KR_API_KEY: str = ""
    OCEAN_OBS_URL: str = "http://apis.data.go.kr/1360000/OceanInfoService/getOceanObsInfo"
    WATER_QUALITY_URL: str = "http://apis.data.go.kr/1480523/WaterQualityService/getWaterQualityList"
    FETCH_TIMEOUT: float = 10.0
    REAL_DATA_CACHE_TTL_MINUTES: int = 5

    # === 실행 환경 ===
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """설정 객체 반환 (최초 호출 시 생성)"""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings
