"""
공공데이터포털(data.go.kr) 해양 관측 API 클라이언트
국립해양조사원 실시간 관측망 / 환경부 해양수질측정망 호출을 담당
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from microplastic.dataset.domains import utc_now_iso
from .domains import OceanObservation, SourceResult, WaterQuality

logger = logging.getLogger(__name__)

OCEAN_OBS_SOURCE = "국립해양조사원 실시간 관측망"
WATER_QUALITY_SOURCE = "환경부 해양수질측정망"

# 전송 오류, JSON/레코드 파싱 오류, 예상과 다른 응답 구조
FETCH_ERRORS = (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError)


def _extract_items(payload: Any) -> List[Dict[str, Any]]:
    """response.body.items.item 추출 (단건이면 dict로 내려옴, 형식이 다르면 빈 목록)"""
    if not isinstance(payload, dict):
        return []
    response = payload.get("response")
    if not isinstance(response, dict):
        return []
    body = response.get("body")
    if not isinstance(body, dict):
        return []
    items = body.get("items")
    if not isinstance(items, dict):
        return []

    item = items.get("item")
    if isinstance(item, dict):
        return [item]
    if isinstance(item, list):
        return [entry for entry in item if isinstance(entry, dict)]
    return []


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def parse_observations(items: List[Dict[str, Any]], timestamp: str) -> List[OceanObservation]:
    return [
        OceanObservation(
            station_id=_to_text(item.get("stnId"), f"station_{index}"),
            station_name=_to_text(item.get("stnNm"), "알 수 없음"),
            latitude=_to_float(item.get("lat")),
            longitude=_to_float(item.get("lon")),
            water_temp=_to_float(item.get("wtTemp")),
            salinity=_to_float(item.get("salinity")),
            ph=_to_float(item.get("ph")),
            dissolved_oxygen=_to_float(item.get("do")),
            turbidity=_to_float(item.get("turb")),
            timestamp=timestamp,
        )
        for index, item in enumerate(items)
    ]


def parse_water_quality(items: List[Dict[str, Any]], timestamp: str) -> List[WaterQuality]:
    return [
        WaterQuality(
            site_name=_to_text(item.get("siteName"), "알 수 없음"),
            cod=_to_float(item.get("cod")),
            bod=_to_float(item.get("bod")),
            total_nitrogen=_to_float(item.get("tn")),
            total_phosphorus=_to_float(item.get("tp")),
            suspended_solids=_to_float(item.get("ss")),
            heavy_metals={
                "lead": _to_float(item.get("pb")),
                "mercury": _to_float(item.get("hg")),
                "cadmium": _to_float(item.get("cd")),
            },
            timestamp=timestamp,
        )
        for item in items
    ]


class OceanDataClient:
    """
    해양 관측 API 클라이언트

    각 fetch 메서드는 예외를 올리지 않고 소스별 SourceResult로 결과를 돌려준다.
    """

    def __init__(
        self,
        api_key: str,
        ocean_obs_url: str,
        water_quality_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.ocean_obs_url = ocean_obs_url
        self.water_quality_url = water_quality_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _get_items(self, url: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        async with self._client() as client:
            response = await client.get(url, params={"serviceKey": self.api_key, **params})
            response.raise_for_status()
            return _extract_items(response.json())

    # === 국립해양조사원 ===
    async def fetch_ocean_observations(self) -> SourceResult:
        """실시간 해양 관측 데이터 조회"""
        if not self.api_key:
            logger.warning("DATA_GO_KR_API_KEY가 설정되지 않아 해양 관측 데이터를 건너뜁니다")
            return SourceResult.failed(OCEAN_OBS_SOURCE, "API 키가 설정되지 않았습니다")

        params = {
            "numOfRows": 100,
            "pageNo": 1,
            "dataType": "JSON",
            "base_date": datetime.now().strftime("%Y%m%d"),
        }
        try:
            items = await self._get_items(self.ocean_obs_url, params)
            observations = parse_observations(items, utc_now_iso())
        except FETCH_ERRORS as e:
            logger.error(f"해양 관측 데이터 조회 실패: {e}")
            return SourceResult.failed(OCEAN_OBS_SOURCE, str(e) or e.__class__.__name__)

        logger.info(f"해양 관측 데이터 {len(observations)}건 수집")
        return SourceResult.succeeded(OCEAN_OBS_SOURCE, observations)

    # === 환경부 ===
    async def fetch_water_quality(self) -> SourceResult:
        """해양 수질 측정 데이터 조회"""
        if not self.api_key:
            logger.warning("DATA_GO_KR_API_KEY가 설정되지 않아 수질 데이터를 건너뜁니다")
            return SourceResult.failed(WATER_QUALITY_SOURCE, "API 키가 설정되지 않았습니다")

        params = {"numOfRows": 50, "pageNo": 1, "dataType": "JSON"}
        try:
            items = await self._get_items(self.water_quality_url, params)
            measurements = parse_water_quality(items, utc_now_iso())
        except FETCH_ERRORS as e:
            logger.error(f"수질 데이터 조회 실패: {e}")
            return SourceResult.failed(WATER_QUALITY_SOURCE, str(e) or e.__class__.__name__)

        logger.info(f"수질 데이터 {len(measurements)}건 수집")
        return SourceResult.succeeded(WATER_QUALITY_SOURCE, measurements)
