# app/function/user_function.py
from typing import List
from sqlalchemy.orm import Session

from core import models, schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException, NotFoundException
from function.function import backend_call, now_kst
from function.login_function import hash_password, MIN_PASSWORD_LENGTH

# =================================================================
# 프로필
# =================================================================

def _get_profile(db: Session, user_id: int) -> models.Profile:
    with backend_call(db, "get profile"):
        profile = db.query(models.Profile).filter(models.Profile.user_id == user_id).first()
    if not profile:
        raise NotFoundException(ResponseCode.INVALID_USER)
    return profile

def get_profile(db: Session, user_id: int) -> schemas.ProfileResponse:
    return schemas.ProfileResponse.model_validate(_get_profile(db, user_id))

def edit_profile(db: Session, user_id: int, request: schemas.EditProfileRequest) -> schemas.ProfileResponse:
    full_name = request.full_name.strip()
    organization = request.organization.strip()
    position = request.position.strip()
    if not full_name or not organization or not position:
        raise ValidationException(ResponseCode.REQUIRED_FIELDS)

    profile = _get_profile(db, user_id)
    with backend_call(db, "edit profile"):
        profile.full_name = full_name
        profile.organization = organization
        profile.position = position
        db.commit()
        db.refresh(profile)
    return schemas.ProfileResponse.model_validate(profile)

def edit_password(db: Session, user_id: int, request: schemas.EditPasswordRequest):
    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(ResponseCode.PASSWORD_TOO_SHORT)
    with backend_call(db, "edit password"):
        user = db.query(models.User).filter(models.User.user_id == user_id).first()
        if not user:
            raise NotFoundException(ResponseCode.INVALID_USER)
        user.password_hash = hash_password(request.new_password)
        db.commit()

# =================================================================
# 관리자 가입 승인
# =================================================================

def list_user_roles(db: Session) -> List[schemas.UserRoleResponse]:
    """가입 신청(권한) 목록을 최신순으로 프로필과 함께 반환합니다."""
    with backend_call(db, "list user roles"):
        rows = db.query(models.UserRole, models.Profile).outerjoin(
            models.Profile, models.Profile.user_id == models.UserRole.user_id
        ).order_by(models.UserRole.create_at.desc(), models.UserRole.role_id.desc()).all()

    return [
        schemas.UserRoleResponse(
            role_id=user_role.role_id,
            user_id=user_role.user_id,
            role=user_role.role,
            approved=user_role.approved,
            create_at=user_role.create_at,
            profile=schemas.ProfileResponse.model_validate(profile) if profile else None,
        )
        for user_role, profile in rows
    ]

def _get_user_role(db: Session, role_id: int) -> models.UserRole:
    with backend_call(db, "get user role"):
        user_role = db.query(models.UserRole).filter(models.UserRole.role_id == role_id).first()
    if not user_role:
        raise NotFoundException(ResponseCode.INVALID_USER_ROLE)
    return user_role

def approve_user(db: Session, role_id: int):
    user_role = _get_user_role(db, role_id)
    with backend_call(db, "approve user"):
        user_role.approved = True
        user_role.update_at = now_kst()
        db.commit()

def reject_user(db: Session, role_id: int):
    """가입 신청을 거절합니다. 권한과 프로필이 삭제되어 다시 로그인할 수 없습니다."""
    user_role = _get_user_role(db, role_id)
    user_id = user_role.user_id
    with backend_call(db, "reject user"):
        db.query(models.UserRole).filter(models.UserRole.role_id == role_id).delete(synchronize_session=False)
        db.query(models.Profile).filter(models.Profile.user_id == user_id).delete(synchronize_session=False)
        # 거절된 계정의 기존 세션도 정리합니다.
        db.query(models.AuthSession).filter(models.AuthSession.user_id == user_id).delete(synchronize_session=False)
        db.commit()
