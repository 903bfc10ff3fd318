from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from core.exceptions import (
    ApiException, ValidationException, NotFoundException, BackendException,
    AuthenticationException, AuthorizationException
)
from core.schemas import RootResponse

from contextlib import asynccontextmanager
import logging
from core.config import settings

from router.project import router as project_router
from router.parking_type import router as parking_type_router
from router.application import router as application_router
from router.page_setting import router as page_setting_router
from router.qr_code import router as qr_code_router
from router.login import router as login_router
from router.user import router as user_router
from router.public import router as public_router
from router.change_ws import router as change_ws_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)


# FastAPI 생명주기(lifespan) 관리자 정의
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- 애플리케이션 시작 로직 ---
    logging.info("=" * 50)
    logging.info("[APP START] Parking registration API server started.")
    logging.info("=" * 50)

    yield # 애플리케이션 실행

    # --- 애플리케이션 종료 로직 ---
    logging.info("[APP SHUTDOWN] Application shutdown complete.")

app = FastAPI(
    title="Parking Registration API Server",
    openapi_url="/openapi.json",  # OpenAPI 문서 경로
    docs_url="/docs",            # Swagger UI 경로
    redoc_url="/redoc",          # ReDoc 경로
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

########## Custom Exception Handlers ##########
def _error_response(status_code: int, exc: ApiException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=RootResponse(status=exc.code, message=exc.message, data=exc.data).model_dump()
    )

@app.exception_handler(ApiException)
async def api_exception_handler(request: Request, exc: ApiException):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)

@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)

@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)

@app.exception_handler(BackendException)
async def backend_exception_handler(request: Request, exc: BackendException):
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(request: Request, exc: AuthenticationException):
    return _error_response(status.HTTP_401_UNAUTHORIZED, exc)

@app.exception_handler(AuthorizationException)
async def authorization_exception_handler(request: Request, exc: AuthorizationException):
    return _error_response(status.HTTP_403_FORBIDDEN, exc)


def custom_openapi():

    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Parking Registration API",
        version="1.0.0",
        description="주차등록 시스템 API (JWT 인증)",
        routes=app.routes,
    )
    # Security 정의 추가
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    # 기본 보안 적용
    openapi_schema["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


# custom_openapi 함수를 FastAPI 앱에 적용
app.openapi = custom_openapi


@app.get("/", description="Connetion Check")
def root():
    return "Parking Registration FastAPI Server"

# Login
app.include_router(login_router)

# Public
app.include_router(public_router)

# User
app.include_router(user_router)

# Project
app.include_router(project_router)

# Parking-type
app.include_router(parking_type_router)

# Application
app.include_router(application_router)

# Page-setting
app.include_router(page_setting_router)

# QR-code
app.include_router(qr_code_router)

# Change_ws
app.include_router(change_ws_router)
