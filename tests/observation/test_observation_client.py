# tests/observation/test_observation_client.py
import httpx
import pytest

from microplastic.observation.client import OCEAN_OBS_SOURCE, WATER_QUALITY_SOURCE
from microplastic.observation.domains import FetchStatus


def _payload(items):
    return {"response": {"body": {"items": {"item": items}}}}


@pytest.mark.asyncio
class TestOceanDataClient:
    """data.go.kr 클라이언트 테스트"""

    async def test_fetch_ocean_observations(self, make_client, upstream_handler):
        # given
        client = make_client(upstream_handler)

        # when
        result = await client.fetch_ocean_observations()

        # then
        assert result.source == OCEAN_OBS_SOURCE
        assert result.status is FetchStatus.SUCCEEDED
        first, second = result.records
        assert first.station_id == "DT_0001"
        assert first.water_temp == 14.2
        assert first.dissolved_oxygen == 7.9
        assert second.station_id == "station_1"
        assert second.salinity is None

    async def test_request_parameters(self, make_client):
        # given
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=_payload([]))

        client = make_client(handler, api_key="my-key")

        # when
        await client.fetch_ocean_observations()
        await client.fetch_water_quality()

        # then
        ocean, quality = captured
        assert ocean.url.params["serviceKey"] == "my-key"
        assert ocean.url.params["numOfRows"] == "100"
        assert ocean.url.params["dataType"] == "JSON"
        assert len(ocean.url.params["base_date"]) == 8
        assert quality.url.params["numOfRows"] == "50"

    async def test_single_item_as_dict(self, make_client):
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_payload({"siteName": "목포", "cod": "1.8", "hg": "0.0001"}))

        # when
        result = await make_client(handler).fetch_water_quality()

        # then
        assert result.source == WATER_QUALITY_SOURCE
        assert len(result.records) == 1
        assert result.records[0].cod == 1.8
        assert result.records[0].heavy_metals["mercury"] == 0.0001

    async def test_empty_response(self, make_client):
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"response": {"body": {"items": ""}}})

        # when
        result = await make_client(handler).fetch_ocean_observations()

        # then
        assert result.status is FetchStatus.EMPTY
        assert result.records == []

    @pytest.mark.parametrize(
        "body",
        [
            [{"stnId": "DT_0001"}],
            {"response": "SERVICE ERROR"},
            {"response": {"body": ["unexpected"]}},
            {"response": {"body": {"items": {"item": "none"}}}},
        ],
    )
    async def test_unexpected_shape_yields_no_records(self, make_client, body):
        """응답 구조가 다르면 예외 없이 빈 결과"""
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        # when
        result = await make_client(handler).fetch_ocean_observations()

        # then
        assert result.status is FetchStatus.EMPTY
        assert result.records == []

    async def test_non_dict_items_are_skipped(self, make_client):
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_payload(["broken", {"siteName": "여수", "cod": "2.4"}, 3]))

        # when
        result = await make_client(handler).fetch_water_quality()

        # then
        assert result.status is FetchStatus.SUCCEEDED
        assert [r.site_name for r in result.records] == ["여수"]

    async def test_http_error_is_tagged_as_failed(self, make_client):
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="error")

        # when
        result = await make_client(handler).fetch_ocean_observations()

        # then
        assert result.status is FetchStatus.FAILED
        assert result.error

    async def test_invalid_json_is_tagged_as_failed(self, make_client):
        # given
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<OpenAPI_ServiceResponse>")

        # when
        result = await make_client(handler).fetch_water_quality()

        # then
        assert result.status is FetchStatus.FAILED

    async def test_missing_api_key_skips_request(self, make_client):
        # given
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_payload([]))

        # when
        result = await make_client(handler, api_key="").fetch_ocean_observations()

        # then
        assert result.status is FetchStatus.FAILED
        assert calls == []
