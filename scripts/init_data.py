#!/usr/bin/env python3
"""
기본 데이터 초기화 스크립트
미세플라스틱 데이터셋을 DATA_PATH에 생성하고 요약 정보를 출력
--real 옵션을 주면 관측소 목록과 연구 결과 기반 데이터셋을 생성
"""
import argparse
import asyncio
import logging
import sys

from microplastic.dataset.domains import TIME_RANGES
from microplastic.dataset.repository import JsonFileDatasetRepository
from microplastic.dataset.seed import build_default_dataset, build_real_dataset
from microplastic.settings import get_settings

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def init_data(force: bool = False, real: bool = False) -> bool:
    """데이터 파일 생성 (real=True면 연구 결과 기반 데이터셋)"""
    settings = get_settings()
    repository = JsonFileDatasetRepository(settings.DATA_PATH, settings.BACKUP_DIR)

    if repository.data_path.exists() and not force:
        logger.error(f"❌ 데이터 파일이 이미 존재합니다: {repository.data_path} (덮어쓰려면 --force)")
        return False

    if real:
        logger.info("🔄 실제 관측 기반 데이터 생성 시작")
        dataset = build_real_dataset()
    else:
        logger.info("🔄 기본 데이터 생성 시작")
        dataset = build_default_dataset()
    await repository.save(dataset)

    logger.info(f"✅ 데이터 파일 생성 완료: {repository.data_path}")
    logger.info("📊 데이터 요약:")
    logger.info(f"   - 지역: {len(dataset.regions)}개 × 기간 {len(TIME_RANGES)}개")
    logger.info(f"   - 어종: {len(dataset.species)}개")
    logger.info(f"   - 오염원 지역: {len(dataset.pollution_sources)}개")
    logger.info(f"   - 차트 데이터: {len(dataset.chart_data)}개월")
    if dataset.monitoring_stations:
        logger.info(f"   - 관측소: {len(dataset.monitoring_stations)}개")
    logger.info(f"   - 전체 레코드: {dataset.count_records()}개")
    logger.info(f"   - 버전: {dataset.metadata.version}")
    for source in dataset.metadata.data_sources or []:
        logger.info(f"   - 출처: {source}")
    return True


def main():
    parser = argparse.ArgumentParser(description="미세플라스틱 데이터 초기화")
    parser.add_argument("--force", action="store_true", help="기존 데이터 파일 덮어쓰기")
    parser.add_argument("--real", action="store_true", help="관측소·연구 결과 기반 데이터셋 생성")
    args = parser.parse_args()

    success = asyncio.run(init_data(force=args.force, real=args.real))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
