# app/router/login.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.dependencies import get_session_context
from core import schemas
from function import login_function

router = APIRouter(
    tags=["Login"]     # Swagger 문서 태그 지정
)

@router.post("/sign-up", summary="관리자 회원 가입 (승인 대기)", response_model=schemas.RootResponse[schemas.ProfileResponse])
def sign_up(
    request: schemas.SignUpRequest,
    db: Session = Depends(get_db)
):
    profile = login_function.sign_up(db, request)
    return schemas.RootResponse.ok(profile, message="회원가입이 완료되었습니다. 관리자 승인 후 로그인할 수 있습니다.")

@router.post("/login/master", summary="관리자 로그인", response_model=schemas.RootResponse[schemas.LoginResponse])
def login_master(
    request: schemas.MasterLoginRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(login_function.sign_in_master(db, request))

@router.post("/login/site", summary="현장 로그인 (프로젝트 비밀번호)", response_model=schemas.RootResponse[schemas.LoginResponse])
def login_site(
    request: schemas.SiteLoginRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(login_function.sign_in_site(db, request))

@router.post("/logout", summary="로그아웃")
def logout(
    ctx: schemas.SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db)
):
    login_function.sign_out(db, ctx.session_id)
    return schemas.RootResponse.ok(None)

@router.get("/session", summary="현재 로그인 세션 조회", response_model=schemas.RootResponse[schemas.SessionContext])
def get_session(ctx: schemas.SessionContext = Depends(get_session_context)):
    return schemas.RootResponse.ok(ctx)
