# app/core/config.py
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # =========================
    # DB 설정
    # =========================
    DATABASE_URL: str

    # =========================
    # JWT
    # =========================
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRATION_DAYS: int = 1

    # =========================
    # QR 코드 설정
    # =========================
    # 방문자 신청 페이지 주소 (https://<host>/<project-slug>)
    QR_BASE_URL: str = "https://parking.mnccom.com"
    QR_DEFAULT_SIZE: int = 256
    QR_DEFAULT_FG_COLOR: str = "#000000"
    QR_DEFAULT_BG_COLOR: str = "#ffffff"

    # =========================
    # 페이지 기본 설정
    # =========================
    DEFAULT_TITLE_TEXT: str = "주차등록 시스템"
    DEFAULT_TITLE_FONT_SIZE: str = "36"

    # =========================
    # 서버 설정
    # =========================
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        # This tells Pydantic to load the variables from a file named .env
        env_file = ".env"
        # This allows reading from the environment even if the .env file is not found
        env_file_encoding = 'utf-8'

# Create a single, reusable instance of the settings
settings = Settings()
