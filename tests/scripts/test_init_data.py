# tests/scripts/test_init_data.py
import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "init_data.py"


@pytest.fixture
def init_script(monkeypatch, test_settings):
    """임시 설정을 사용하도록 초기화 스크립트 로드"""
    spec = importlib.util.spec_from_file_location("init_data_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "get_settings", lambda: test_settings)
    return module


@pytest.mark.asyncio
class TestInitData:
    """데이터 초기화 스크립트 테스트"""

    async def test_default_dataset(self, init_script, test_settings):
        # when
        created = await init_script.init_data()

        # then
        assert created is True
        document = json.loads(test_settings.DATA_PATH.read_text(encoding="utf-8"))
        assert document["metadata"]["totalRecords"] == 43
        assert "monitoringStations" not in document

    async def test_real_dataset(self, init_script, test_settings):
        """--real 옵션이면 관측소·연구 결과 기반 데이터셋 생성"""
        # when
        created = await init_script.init_data(real=True)

        # then
        assert created is True
        document = json.loads(test_settings.DATA_PATH.read_text(encoding="utf-8"))
        assert document["metadata"]["isRealData"] is True
        assert document["metadata"]["version"] == "2.0.0-real"
        assert len(document["metadata"]["dataSources"]) == 6
        assert document["metadata"]["disclaimer"]
        assert len(document["monitoringStations"]) == 14

    async def test_existing_file_requires_force(self, init_script, test_settings):
        # given
        await init_script.init_data()

        # when
        skipped = await init_script.init_data(real=True)
        forced = await init_script.init_data(force=True, real=True)

        # then
        assert skipped is False
        assert forced is True
        document = json.loads(test_settings.DATA_PATH.read_text(encoding="utf-8"))
        assert document["metadata"]["isRealData"] is True
