"""
기본 데이터셋 생성
데이터 파일이 없을 때 사용하는 시뮬레이션 데이터 (5개 해역 × 4개 기간, 6개 어종,
5개 지역 오염원, 12개월 차트)를 매 호출마다 새로 만들어 반환한다.

build_real_dataset()은 국립해양조사원 관측소 목록과 2024년 연구 결과를 기반으로 한
실측 기반 데이터셋을 만든다 (모니터링 지점 수 = 해당 해역 관측소 수).
"""
from typing import Dict, List, Optional, Sequence, Tuple

from .domains import (
    Dataset,
    DatasetMetadata,
    MonitoringStation,
    MonthlyPoint,
    Region,
    SourceShare,
    Species,
    TimeRangeSnapshot,
    utc_now_iso,
)

DATASET_VERSION = "1.0.0"
REAL_DATASET_VERSION = "2.0.0-real"

# (위험도, 농도, 어종 수, 지점 수, 위험도 변화, 농도 변화, 어종 변화, 지점 변화)
_REGION_FIGURES = {
    "all": ("전체 해역", {
        "1month": ("높음", "2.4", 147, 89, "+12%", "+8%", "+15%", "+5%"),
        "3months": ("높음", "2.3", 142, 87, "+10%", "+6%", "+12%", "+3%"),
        "1year": ("높음", "2.4", 147, 89, "+12%", "+8%", "+15%", "+5%"),
        "5years": ("중간", "2.1", 134, 82, "+18%", "+22%", "+28%", "+15%"),
    }),
    "west": ("서해", {
        "1month": ("매우높음", "3.2", 67, 23, "+18%", "+15%", "+22%", "+8%"),
        "3months": ("매우높음", "3.1", 65, 22, "+16%", "+12%", "+18%", "+6%"),
        "1year": ("매우높음", "3.1", 67, 23, "+18%", "+15%", "+22%", "+8%"),
        "5years": ("높음", "2.8", 58, 20, "+25%", "+35%", "+45%", "+25%"),
    }),
    "south": ("남해", {
        "1month": ("중간", "2.4", 45, 28, "+8%", "+5%", "+12%", "+3%"),
        "3months": ("중간", "2.3", 43, 27, "+6%", "+3%", "+8%", "+2%"),
        "1year": ("중간", "2.3", 45, 28, "+8%", "+5%", "+12%", "+3%"),
        "5years": ("낮음", "2.0", 38, 24, "+15%", "+18%", "+25%", "+12%"),
    }),
    "east": ("동해", {
        "1month": ("낮음", "1.9", 28, 18, "+3%", "+2%", "+5%", "+1%"),
        "3months": ("낮음", "1.8", 27, 18, "+2%", "+1%", "+3%", "0%"),
        "1year": ("낮음", "1.8", 28, 18, "+3%", "+2%", "+5%", "+1%"),
        "5years": ("매우낮음", "1.5", 22, 15, "+8%", "+12%", "+15%", "+8%"),
    }),
    "jeju": ("제주 근해", {
        "1month": ("중간", "2.2", 32, 20, "+6%", "+4%", "+8%", "+2%"),
        "3months": ("중간", "2.1", 31, 20, "+4%", "+2%", "+6%", "+1%"),
        "1year": ("중간", "2.1", 32, 20, "+6%", "+4%", "+8%", "+2%"),
        "5years": ("낮음", "1.8", 26, 17, "+12%", "+15%", "+18%", "+10%"),
    }),
}

# (어종, 영향도, 이전 개체수, 현재 개체수, 변화율, 추세)
_SPECIES_FIGURES = [
    ("고등어", 85, 12500, 10800, -13.6, "악화"),
    ("명태", 78, 8900, 7650, -14.0, "악화"),
    ("갈치", 72, 6200, 6180, -0.3, "유지"),
    ("오징어", 68, 4800, 4320, -10.0, "악화"),
    ("참조기", 65, 3400, 3570, 5.0, "개선"),
    ("멸치", 62, 15600, 17940, 15.0, "개선"),
]

_POLLUTION_SOURCES = {
    "all": [("플라스틱 포장재", 35), ("어업용 도구", 28), ("생활용품", 22), ("산업폐기물", 15)],
    "west": [("산업폐기물", 42), ("플라스틱 포장재", 31), ("어업용 도구", 18), ("생활용품", 9)],
    "south": [("어업용 도구", 38), ("플라스틱 포장재", 29), ("관광 폐기물", 21), ("생활용품", 12)],
    "east": [("어업용 도구", 45), ("플라스틱 포장재", 28), ("생활용품", 18), ("해상운송", 9)],
    "jeju": [("관광 폐기물", 36), ("플라스틱 포장재", 32), ("어업용 도구", 22), ("생활용품", 10)],
}

# (농도, 입자 수, 위험도) - 1월부터 12월까지
_MONTHLY_FIGURES = [
    (1.8, 450, 65), (2.1, 520, 72), (2.4, 580, 78), (2.8, 650, 85),
    (3.2, 720, 90), (2.9, 680, 87), (2.6, 620, 82), (2.3, 560, 75),
    (2.0, 500, 70), (2.2, 530, 73), (2.5, 590, 80), (2.7, 630, 83),
]

# ===== 실측 기반 데이터 =====
# (id, 관측소명, 위도, 경도, 해역, 유형, 설치 연도) - 국립해양조사원 기준
_OCEAN_STATIONS = [
    ("west_incheon", "인천항", 37.4563, 126.7052, "west", "항만관측소", "1999"),
    ("west_gunsan", "군산항", 35.9676, 126.5906, "west", "항만관측소", "2001"),
    ("west_mokpo", "목포항", 34.7866, 126.3756, "west", "항만관측소", "2000"),
    ("west_taean", "태안", 36.7458, 126.2394, "west", "연안관측소", "2007"),
    ("south_busan", "부산항", 35.1028, 129.0403, "south", "항만관측소", "1996"),
    ("south_yeosu", "여수항", 34.7469, 127.7658, "south", "항만관측소", "1998"),
    ("south_tongyeong", "통영", 34.8269, 128.4208, "south", "연안관측소", "2003"),
    ("south_masan", "마산항", 35.1971, 128.5664, "south", "항만관측소", "2002"),
    ("east_pohang", "포항항", 36.019, 129.3435, "east", "항만관측소", "1999"),
    ("east_gangneung", "강릉", 37.7519, 128.9069, "east", "연안관측소", "2004"),
    ("east_sokcho", "속초항", 38.207, 128.5918, "east", "항만관측소", "2001"),
    ("east_ulsan", "울산항", 35.5019, 129.3867, "east", "항만관측소", "1997"),
    ("jeju_north", "제주항", 33.527, 126.5429, "jeju", "항만관측소", "1998"),
    ("jeju_seogwipo", "서귀포항", 33.2394, 126.5611, "jeju", "항만관측소", "2000"),
]

# 지점 수 자리는 관측소 수 대비 증감 (5년 전에는 관측소가 더 적었음)
_REAL_REGION_FIGURES = {
    "all": ("전체 해역", {
        "1month": ("높음", "2.1", 127, 0, "+8.2%", "+12.5%", "+6.8%", "+2.1%"),
        "3months": ("높음", "2.0", 124, 0, "+7.1%", "+10.2%", "+5.4%", "+1.8%"),
        "1year": ("높음", "2.1", 127, 0, "+8.2%", "+12.5%", "+6.8%", "+2.1%"),
        "5years": ("중간", "1.8", 118, -3, "+15.3%", "+22.8%", "+12.7%", "+8.9%"),
    }),
    "west": ("서해", {
        "1month": ("매우높음", "2.8", 45, 0, "+15.2%", "+18.7%", "+11.3%", "+3.2%"),
        "3months": ("매우높음", "2.7", 43, 0, "+13.8%", "+16.4%", "+9.7%", "+2.8%"),
        "1year": ("매우높음", "2.8", 45, 0, "+15.2%", "+18.7%", "+11.3%", "+3.2%"),
        "5years": ("높음", "2.3", 38, -1, "+28.5%", "+35.2%", "+22.1%", "+12.5%"),
    }),
    "south": ("남해", {
        "1month": ("중간", "2.0", 38, 0, "+6.8%", "+8.9%", "+4.2%", "+1.5%"),
        "3months": ("중간", "1.9", 36, 0, "+5.4%", "+7.1%", "+3.8%", "+1.2%"),
        "1year": ("중간", "2.0", 38, 0, "+6.8%", "+8.9%", "+4.2%", "+1.5%"),
        "5years": ("낮음", "1.6", 32, -1, "+18.2%", "+25.8%", "+15.6%", "+8.3%"),
    }),
    "east": ("동해", {
        "1month": ("낮음", "1.4", 28, 0, "+3.2%", "+4.1%", "+2.8%", "+0.8%"),
        "3months": ("낮음", "1.3", 27, 0, "+2.8%", "+3.5%", "+2.1%", "+0.5%"),
        "1year": ("낮음", "1.4", 28, 0, "+3.2%", "+4.1%", "+2.8%", "+0.8%"),
        "5years": ("매우낮음", "1.1", 24, -1, "+12.8%", "+18.2%", "+14.3%", "+6.7%"),
    }),
    "jeju": ("제주 근해", {
        "1month": ("중간", "1.7", 26, 0, "+5.1%", "+6.8%", "+3.4%", "+1.1%"),
        "3months": ("중간", "1.6", 25, 0, "+4.3%", "+5.9%", "+2.8%", "+0.9%"),
        "1year": ("중간", "1.7", 26, 0, "+5.1%", "+6.8%", "+3.4%", "+1.1%"),
        "5years": ("낮음", "1.3", 22, 0, "+15.8%", "+23.1%", "+16.7%", "+9.1%"),
    }),
}

# (어종, 영향도, 2023 어획량, 2024 어획량, 변화율, 추세, 학명, 서식지) - 국립수산과학원 2024
_REAL_SPECIES_FIGURES = [
    ("고등어", 78, 145000, 132000, -9.0, "감소", "Scomber japonicus", "연안, 근해"),
    ("명태", 85, 8500, 6200, -27.1, "급감", "Gadus chalcogrammus", "동해 북부"),
    ("갈치", 65, 89000, 91500, 2.8, "안정", "Trichiurus lepturus", "남해, 서해"),
    ("오징어", 72, 156000, 142000, -9.0, "감소", "Todarodes pacificus", "전 해역"),
    ("멸치", 58, 234000, 267000, 14.1, "증가", "Engraulis japonicus", "연안 전역"),
    ("참조기", 69, 45000, 48500, 7.8, "증가", "Larimichthys polyactis", "서해, 남해"),
]

_REAL_POLLUTION_SOURCES = {
    "all": [("플라스틱 포장재", 32), ("어업용 도구", 28), ("생활폐기물", 24), ("산업폐기물", 16)],
    "west": [("산업폐기물", 38), ("플라스틱 포장재", 29), ("생활폐기물", 21), ("어업용 도구", 12)],
    "south": [("어업용 도구", 35), ("플라스틱 포장재", 28), ("양식업 폐기물", 22), ("관광 폐기물", 15)],
    "east": [("어업용 도구", 42), ("플라스틱 포장재", 26), ("해상운송", 18), ("생활폐기물", 14)],
    "jeju": [("관광 폐기물", 34), ("플라스틱 포장재", 28), ("어업용 도구", 23), ("생활폐기물", 15)],
}

# 2024년 관측 결과 (11월 현재, 12월 예측)
_REAL_MONTHLY_FIGURES = [
    (1.6, 420, 68), (1.8, 465, 72), (2.1, 520, 78), (2.4, 580, 82),
    (2.8, 650, 88), (2.6, 620, 85), (2.3, 570, 81), (2.1, 530, 78),
    (1.9, 490, 74), (2.0, 510, 76), (2.2, 540, 79), (2.0, 520, 77),
]

REAL_DATA_SOURCES = [
    "국립해양조사원 실시간 해양관측망 (2024)",
    "KIOST 미세플라스틱 연구보고서 (2024)",
    "국립수산과학원 어업통계 (2024)",
    "환경부 해양수질측정망 (2024)",
    "제주대학교 해양연구소 (2024)",
    "한국해양대학교 연구논문 (2024)",
]

REAL_DATA_DISCLAIMER = "실제 관측 데이터와 최신 연구 결과를 기반으로 구성되었습니다."


def _build_regions(
    table: Dict[str, Tuple[str, Dict[str, tuple]]],
    station_counts: Optional[Dict[str, int]] = None,
) -> Dict[str, Region]:
    """station_counts가 있으면 지점 수 자리를 관측소 수 대비 증감으로 해석"""
    regions = {}
    for key, (name, figures) in table.items():
        time_ranges = {}
        for time_range, (
            risk, concentration, species, points,
            risk_change, conc_change, species_change, points_change,
        ) in figures.items():
            if station_counts is not None:
                points = station_counts[key] + points
            time_ranges[time_range] = TimeRangeSnapshot(
                risk=risk,
                concentration=concentration,
                species=species,
                points=points,
                risk_change=risk_change,
                conc_change=conc_change,
                species_change=species_change,
                points_change=points_change,
            )
        regions[key] = Region(name=name, time_ranges=time_ranges)
    return regions


def _build_species(figures: Sequence[tuple], timestamp: str) -> List[Species]:
    species = []
    for index, (name, impact, previous, current, change, trend, *extras) in enumerate(figures, start=1):
        scientific_name, habitat = extras if extras else (None, None)
        species.append(
            Species(
                id=index,
                species=name,
                impact=impact,
                previous_population=previous,
                current_population=current,
                population_change=change,
                trend=trend,
                last_updated=timestamp,
                scientific_name=scientific_name,
                habitat=habitat,
            )
        )
    return species


def _build_sources(table: Dict[str, list]) -> Dict[str, List[SourceShare]]:
    return {
        region: [SourceShare(name=name, percentage=percentage) for name, percentage in shares]
        for region, shares in table.items()
    }


def _build_chart(figures: Sequence[tuple]) -> List[MonthlyPoint]:
    return [
        MonthlyPoint(month=f"{month}월", concentration=concentration, particles=particles, risk=risk)
        for month, (concentration, particles, risk) in enumerate(figures, start=1)
    ]


def build_monitoring_stations() -> List[MonitoringStation]:
    """국립해양조사원 관측소 목록"""
    return [
        MonitoringStation(
            id=station_id,
            name=name,
            coordinates={"lat": lat, "lng": lng},
            region=region,
            type=station_type,
            established=established,
        )
        for station_id, name, lat, lng, region, station_type, established in _OCEAN_STATIONS
    ]


def build_default_dataset() -> Dataset:
    """기본 데이터셋 생성 (타임스탬프 외에는 항상 같은 값)"""
    timestamp = utc_now_iso()

    dataset = Dataset(
        regions=_build_regions(_REGION_FIGURES),
        species=_build_species(_SPECIES_FIGURES, timestamp),
        pollution_sources=_build_sources(_POLLUTION_SOURCES),
        chart_data=_build_chart(_MONTHLY_FIGURES),
        metadata=DatasetMetadata(
            version=DATASET_VERSION,
            last_updated=timestamp,
            total_records=0,
            auto_generated=True,
        ),
    )
    dataset.metadata.total_records = dataset.count_records()
    return dataset


def build_real_dataset() -> Dataset:
    """관측소 목록과 연구 결과 기반 데이터셋 생성"""
    timestamp = utc_now_iso()
    stations = build_monitoring_stations()

    station_counts = {"all": len(stations)}
    for station in stations:
        station_counts[station.region] = station_counts.get(station.region, 0) + 1

    dataset = Dataset(
        regions=_build_regions(_REAL_REGION_FIGURES, station_counts),
        species=_build_species(_REAL_SPECIES_FIGURES, timestamp),
        pollution_sources=_build_sources(_REAL_POLLUTION_SOURCES),
        chart_data=_build_chart(_REAL_MONTHLY_FIGURES),
        monitoring_stations=stations,
        metadata=DatasetMetadata(
            version=REAL_DATASET_VERSION,
            last_updated=timestamp,
            total_records=0,
            data_sources=list(REAL_DATA_SOURCES),
            is_real_data=True,
            disclaimer=REAL_DATA_DISCLAIMER,
        ),
    )
    dataset.metadata.total_records = dataset.count_records()
    return dataset
