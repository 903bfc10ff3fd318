import logging
import jwt
from jwt import PyJWTError, ExpiredSignatureError, InvalidTokenError
from contextlib import contextmanager
from datetime import datetime, timedelta, date
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from zoneinfo import ZoneInfo

from core.config import settings
from core.constants import ResponseCode
from core.exceptions import AuthenticationException, BackendException

# 한국 시간대(KST) 객체 정의
KST = ZoneInfo("Asia/Seoul")

# Access Token 생성
def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(days=settings.JWT_ACCESS_EXPIRATION_DAYS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

# 토큰 검증 함수
def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        # 토큰이 만료된 경우
        raise AuthenticationException(ResponseCode.EXPIRE_ACCESS_TOKEN)
    except (InvalidTokenError, PyJWTError):
        # 토큰이 유효하지 않은 경우
        raise AuthenticationException(ResponseCode.INVALID_ACCESS_TOKEN)

# 현재 시각(KST) 호출 함수
def now_kst() -> datetime:
    return datetime.now(KST)

# 현재 날짜(KST) 호출 함수
def current_date() -> date:
    return now_kst().date()

@contextmanager
def backend_call(db: Session, operation: str, response_code: ResponseCode = ResponseCode.FAIL):
    """
    DB 읽기/쓰기 중 발생한 SQLAlchemy 오류를 BackendException으로 변환합니다.
    실패 시 세션을 롤백하여 부분적으로 반영된 변경이 남지 않도록 합니다.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"[BACKEND ERROR] {operation} failed: {e}")
        raise BackendException(response_code)
