# microplastic/observation/research.py
"""연구기관 공개 미세플라스틱 조사 결과 (정적 자료)"""
from typing import List

from .domains import MicroplasticSample, SourceResult

RESEARCH_SOURCES = ["KIOST 미세플라스틱 연구", "국립수산과학원 해양환경조사"]

_SURFACE = "표층 (0-5m)"

_SAMPLES = [
    ("서해 (인천 연안)", 37.4563, 126.7052, 2.8, 680, ["PE", "PP", "PS"], "KIOST 2024 연구보고서", "2024-11-15"),
    ("남해 (부산 연안)", 35.1796, 129.0756, 2.1, 520, ["PET", "PE", "PP"], "국립수산과학원 2024", "2024-11-10"),
    ("동해 (포항 연안)", 36.0190, 129.3435, 1.6, 380, ["PP", "PE"], "한국해양대학교 2024", "2024-11-08"),
    ("제주 근해", 33.4996, 126.5312, 1.9, 450, ["PE", "PS", "PET"], "제주대학교 해양연구소 2024", "2024-11-12"),
]


def research_samples() -> List[MicroplasticSample]:
    return [
        MicroplasticSample(
            location=location,
            latitude=lat,
            longitude=lon,
            concentration=concentration,
            particle_count=particles,
            polymer_types=list(polymers),
            depth=_SURFACE,
            source=source,
            sample_date=sample_date,
        )
        for location, lat, lon, concentration, particles, polymers, source, sample_date in _SAMPLES
    ]


async def fetch_research_samples() -> SourceResult:
    """정적 연구 자료를 수집 결과 형태로 반환"""
    return SourceResult.succeeded(RESEARCH_SOURCES[0], research_samples())
