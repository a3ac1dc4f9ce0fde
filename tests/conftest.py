# tests/conftest.py
import pytest
import logging
from pathlib import Path

import httpx

from microplastic.dataset.repository import JsonFileDatasetRepository
from microplastic.dataset.seed import build_default_dataset
from microplastic.dataset.service import DatasetService
from microplastic.observation.client import OceanDataClient
from microplastic.observation.repository import ObservationRepository
from microplastic.observation.service import ObservationService
from microplastic.settings import AppSettings

OCEAN_OBS_URL = "http://test.local/ocean"
WATER_QUALITY_URL = "http://test.local/quality"


@pytest.fixture(scope="session", autouse=True)
def initialize_test_logger():
    """테스트 로거 초기화"""
    logger = logging.getLogger()
    logger.setLevel("INFO")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="[%(levelname)5s][%(filename)s:%(lineno)s] %(message)s",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# === Settings ===
@pytest.fixture
def test_settings(tmp_path: Path) -> AppSettings:
    """임시 디렉터리를 사용하는 설정"""
    return AppSettings(
        DATA_PATH=tmp_path / "microplastic-data.json",
        BACKUP_DIR=tmp_path / "backups",
        DATA_GO_KR_API_KEY="",
        OCEAN_OBS_URL=OCEAN_OBS_URL,
        WATER_QUALITY_URL=WATER_QUALITY_URL,
        ENVIRONMENT="test",
    )


# === Repository Fixtures ===
@pytest.fixture
def dataset_repository(test_settings: AppSettings) -> JsonFileDatasetRepository:
    """Dataset Repository (임시 파일)"""
    return JsonFileDatasetRepository(test_settings.DATA_PATH, test_settings.BACKUP_DIR)


@pytest.fixture
def observation_repository() -> ObservationRepository:
    return ObservationRepository(ttl_minutes=5)


# === Service Fixtures ===
@pytest.fixture
def dataset_service(dataset_repository) -> DatasetService:
    """Dataset Service"""
    return DatasetService(repository=dataset_repository)


# === 외부 API Mock ===
def ocean_payload(items):
    """data.go.kr 응답 형식"""
    return {"response": {"header": {"resultCode": "00"}, "body": {"items": {"item": items}}}}


@pytest.fixture
def sample_ocean_items():
    return [
        {"stnId": "DT_0001", "stnNm": "인천", "lat": "37.45", "lon": "126.59", "wtTemp": "14.2",
         "salinity": "31.2", "ph": "8.1", "do": "7.9", "turb": "3.2"},
        {"stnNm": "부산", "lat": "35.09", "lon": "129.03", "wtTemp": "17.5"},
    ]


@pytest.fixture
def sample_quality_items():
    return [
        {"siteName": "인천 북항", "cod": "2.1", "bod": "1.5", "tn": "0.45", "tp": "0.05",
         "ss": "8.2", "pb": "0.002", "hg": "", "cd": "0.001"},
    ]


@pytest.fixture
def make_client():
    """MockTransport 기반 OceanDataClient 생성기"""
    def _make(handler, api_key: str = "test-key") -> OceanDataClient:
        return OceanDataClient(
            api_key=api_key,
            ocean_obs_url=OCEAN_OBS_URL,
            water_quality_url=WATER_QUALITY_URL,
            timeout=1.0,
            transport=httpx.MockTransport(handler),
        )
    return _make


@pytest.fixture
def upstream_handler(sample_ocean_items, sample_quality_items):
    """두 API 모두 정상 응답"""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/ocean":
            return httpx.Response(200, json=ocean_payload(sample_ocean_items))
        return httpx.Response(200, json=ocean_payload(sample_quality_items))
    return handler


@pytest.fixture
def observation_service(make_client, upstream_handler, observation_repository) -> ObservationService:
    return ObservationService(client=make_client(upstream_handler), repository=observation_repository)


# === Domain Object Fixtures ===
@pytest.fixture
def default_dataset():
    """기본 데이터셋"""
    return build_default_dataset()


@pytest.fixture(autouse=True)
def test_info(request):
    """테스트 정보 출력"""
    logger = logging.getLogger()
    logger.info(f"테스트 시작: {request.node.name}")
    yield
    logger.info(f"테스트 완료: {request.node.name}")
