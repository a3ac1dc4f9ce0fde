# webapp/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from microplastic.exceptions import (
    ClientException,
    ConflictException,
    MicroplasticException,
    NotFoundException,
    ServerException,
    UpstreamUnavailableException,
)
from microplastic.settings import AppSettings, get_settings
from webapp.container import create_container
from webapp.dtos import HealthResponse, error_content
from webapp.routers import admin, chart_data, pollution_sources, real_data, regions, species

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

ROUTER_MODULES = [
    "webapp.dependency",
    "webapp.routers.regions",
    "webapp.routers.species",
    "webapp.routers.pollution_sources",
    "webapp.routers.chart_data",
    "webapp.routers.real_data",
    "webapp.routers.admin",
]

def _setup_lifespan(container):
    """애플리케이션 생명주기 설정"""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = container.settings()
        logger.info(f"Setting up Microplastic Dashboard API ({settings.ENVIRONMENT})")
        logger.info(f"데이터 파일: {settings.DATA_PATH}")
        app.container = container
        yield
        logger.info("Tearing down Microplastic Dashboard API")
    return lifespan

def _create_fastapi_app(lifespan_manager) -> FastAPI:
    """FastAPI 앱 인스턴스 생성"""
    return FastAPI(
        title="Microplastic Dashboard API",
        description="해양 미세플라스틱 오염 현황 대시보드 데이터 API",
        version=APP_VERSION,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        lifespan=lifespan_manager,
        generate_unique_id_function=lambda route: route.name,
    )

def _setup_container_and_wiring(settings: AppSettings):
    """DI 컨테이너 설정 및 와이어링"""
    container = create_container(settings)
    container.wire(modules=ROUTER_MODULES)
    return container

def _describe_validation_errors(exc: RequestValidationError) -> str:
    """검증 오류를 한국어 메시지로 변환 (첫 번째 오류 기준)"""
    errors = exc.errors()
    if not errors:
        return "요청 값이 올바르지 않습니다."
    first = errors[0]
    field = str(first["loc"][-1]) if first.get("loc") else ""
    if first["type"] == "missing":
        return f"필수 필드가 누락되었습니다: {field}"
    if first["type"] == "extra_forbidden":
        return f"알 수 없는 필드입니다: {field}"
    return f"요청 값이 올바르지 않습니다: {field} ({first['msg']})"

def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """애플리케이션 생성 및 설정"""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # 컨테이너 설정
    container = _setup_container_and_wiring(settings)

    # 생명주기 관리자 설정
    lifespan_manager = _setup_lifespan(container)

    # FastAPI 앱 생성
    app = _create_fastapi_app(lifespan_manager)
    app.container = container

    # 라우터 등록
    app.include_router(regions.router, prefix="/api/regions", tags=["regions"])
    app.include_router(species.router, prefix="/api/species", tags=["species"])
    app.include_router(pollution_sources.router, prefix="/api/pollution-sources", tags=["pollution-sources"])
    app.include_router(chart_data.router, prefix="/api/chart-data", tags=["chart-data"])
    app.include_router(real_data.router, prefix="/api/real-data", tags=["real-data"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    # 미들웨어
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 예외 처리기들 (가장 구체적인 클래스의 처리기가 선택됨)
    @app.exception_handler(ClientException)
    async def client_exception_handler(request: Request, exc: ClientException):
        logger.warning(f"Client exception: {exc.message}")
        return JSONResponse(status_code=400, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(NotFoundException)
    async def not_found_exception_handler(request: Request, exc: NotFoundException):
        logger.warning(f"Not found: {exc.message}")
        return JSONResponse(status_code=404, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(ConflictException)
    async def conflict_exception_handler(request: Request, exc: ConflictException):
        logger.warning(f"Conflict: {exc.message}")
        return JSONResponse(status_code=409, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(ServerException)
    async def server_exception_handler(request: Request, exc: ServerException):
        logger.error(f"Server exception: {exc.message}", exc_info=True)
        return JSONResponse(status_code=500, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(UpstreamUnavailableException)
    async def upstream_exception_handler(request: Request, exc: UpstreamUnavailableException):
        logger.error(f"Upstream unavailable: {exc.message}")
        return JSONResponse(status_code=503, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(MicroplasticException)
    async def microplastic_exception_handler(request: Request, exc: MicroplasticException):
        logger.error(f"Microplastic exception: {exc.message}", exc_info=True)
        return JSONResponse(status_code=500, content=error_content(exc.message, exc.__class__.__name__))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_content("서버 오류가 발생했습니다.", exc.__class__.__name__),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=error_content(_describe_validation_errors(exc), exc.__class__.__name__),
        )

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Microplastic Dashboard API"}

    @app.get("/health", response_model=HealthResponse)
    def health_check() -> HealthResponse:
        return HealthResponse(version=APP_VERSION, environment=settings.ENVIRONMENT)

    return app

# FastAPI 앱 인스턴스
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("webapp.main:app", host="0.0.0.0", port=8000, reload=False)
