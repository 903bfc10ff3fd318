# app/core/dependencies.py
from fastapi import Depends, Header, Path
from typing import Optional
from sqlalchemy.orm import Session

from function import login_function, project_function
from core.database import get_db
from core.constants import ResponseCode
from core.exceptions import AuthenticationException, AuthorizationException
from core import schemas

def get_token_from_header(authorization: Optional[str] = Header(None)) -> str:
    """
    Authorization 헤더에서 'Bearer ' 부분을 제거하고 토큰만 추출합니다.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationException(ResponseCode.FAIL_VALID_TOKEN)
    return authorization.split(" ")[1]

def get_session_context(
    token: str = Depends(get_token_from_header),
    db: Session = Depends(get_db)
) -> schemas.SessionContext:
    """
    토큰과 auth_sessions 행으로 현재 로그인 세션을 복원하는 의존성.
    """
    return login_function.restore_session(db, token)

def require_master(ctx: schemas.SessionContext = Depends(get_session_context)) -> schemas.SessionContext:
    """전체 관리자(master) 세션만 허용합니다."""
    if not ctx.is_master or ctx.user_id is None:
        raise AuthorizationException(ResponseCode.PERMISSION_DENIED)
    return ctx

def verify_project_access(ctx: schemas.SessionContext, project_id: int):
    """관리자는 모든 프로젝트, 현장 담당자는 로그인한 프로젝트에만 접근할 수 있습니다."""
    if ctx.is_master:
        return
    if ctx.project_id != project_id:
        raise AuthorizationException(ResponseCode.PERMISSION_DENIED)

def verify_project_exists(
    project_id: int = Path(..., description="프로젝트ID"),
    db: Session = Depends(get_db)
):
    project_function.get_project(db, project_id)

def require_project_access(
    project_id: int = Path(..., description="프로젝트ID"),
    ctx: schemas.SessionContext = Depends(get_session_context)
) -> schemas.SessionContext:
    """신청 관리 화면용 의존성. (관리자 또는 해당 프로젝트의 현장 담당자)"""
    verify_project_access(ctx, project_id)
    return ctx

# --- WebSocket 인증을 위한 헬퍼 함수 ---
def get_session_context_ws(db: Session, token: Optional[str]) -> Optional[schemas.SessionContext]:
    """
    WebSocket 연결 시 Query 파라미터로 받은 토큰으로 세션을 복원합니다.
    검증에 실패하면 None을 반환하고, 호출하는 쪽에서 연결을 닫습니다.
    """
    if not token:
        return None
    try:
        return login_function.restore_session(db, token)
    except AuthenticationException:
        return None
