# app/router/user.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core import schemas
from core.dependencies import require_master
from function import user_function

router = APIRouter(
    prefix="/user",
    tags=["User"],
)

# -----------------------------------------------------------------
# PUT Endpoints
# -----------------------------------------------------------------

@router.put("/profile/edit", summary="내 프로필 수정", response_model=schemas.RootResponse[schemas.ProfileResponse])
def edit_profile(
    request: schemas.EditProfileRequest,
    ctx: schemas.SessionContext = Depends(require_master),
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(user_function.edit_profile(db, ctx.user_id, request))

@router.put("/password/edit", summary="비밀번호 변경")
def edit_password(
    request: schemas.EditPasswordRequest,
    ctx: schemas.SessionContext = Depends(require_master),
    db: Session = Depends(get_db)
):
    user_function.edit_password(db, ctx.user_id, request)
    return schemas.RootResponse.ok(None, message="비밀번호가 변경되었습니다.")

@router.put("/role/{role_id}/approve", summary="관리자 가입 승인", dependencies=[Depends(require_master)])
def approve_user(role_id: int, db: Session = Depends(get_db)):
    user_function.approve_user(db, role_id)
    return schemas.RootResponse.ok(None)

# -----------------------------------------------------------------
# GET Endpoints
# -----------------------------------------------------------------

@router.get("/profile", summary="내 프로필 조회", response_model=schemas.RootResponse[schemas.ProfileResponse])
def get_profile(
    ctx: schemas.SessionContext = Depends(require_master),
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(user_function.get_profile(db, ctx.user_id))

@router.get("/role", summary="관리자 가입 신청 목록 조회", dependencies=[Depends(require_master)],
            response_model=schemas.RootResponse[List[schemas.UserRoleResponse]])
def get_user_role_list(db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(user_function.list_user_roles(db))

# -----------------------------------------------------------------
# DELETE Endpoints
# -----------------------------------------------------------------

@router.delete("/role/{role_id}", summary="관리자 가입 거절", dependencies=[Depends(require_master)])
def reject_user(role_id: int, db: Session = Depends(get_db)):
    user_function.reject_user(db, role_id)
    return schemas.RootResponse.ok(None)
