import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.deps import build_product_store
from app.api.routes import products
from app.core.config import get_settings
from app.core.exceptions import ProductNotFoundException

_settings = get_settings()

# --- 로깅 설정 ---
logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# uvicorn 접근 로그는 경고 이상만 출력
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 데이터 파일이 없으면 예제 상품으로 초기화"""
    settings = app.dependency_overrides.get(get_settings, get_settings)()
    if settings.seed_on_startup:
        build_product_store(settings).seed_if_missing()
    logger.info("Inventory Manager using data file %s", settings.data_path.resolve())
    yield


app = FastAPI(
    title="Inventory Manager API",
    description="JSON 파일 기반 상품 재고 관리 시스템",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    요청 본문 검증 실패는 500으로 응답 (검증은 클라이언트 책임)

    숫자가 아닌 상품 ID는 어떤 상품과도 일치하지 않으므로 404로 응답합니다.
    """
    for error in exc.errors():
        if tuple(error.get("loc", ())) == ("path", "product_id"):
            not_found = ProductNotFoundException(error.get("input"))
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": not_found.message},
            )
    logger.error("Invalid request body for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Invalid product data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# 라우터 등록
app.include_router(products.router, prefix="/api", tags=["products"])


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "Inventory Manager API",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트 (Docker 헬스체크용)"""
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(app, host=_settings.host, port=_settings.port)
