# app/function/login_function.py
import hmac
import logging
import uuid
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from core import models, schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException, AuthenticationException, AuthorizationException
from function.function import backend_call, create_access_token, decode_token
from function import project_function

# 비밀번호 해싱 설정
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

# =================================================================
# 세션 관리
# =================================================================

def _create_session(db: Session, role: models.SessionRole, user_id: int = None, project_id: int = None) -> schemas.LoginResponse:
    """auth_sessions 행을 만들고 세션 ID(sid)가 담긴 토큰을 발급합니다."""
    session_id = str(uuid.uuid4())
    with backend_call(db, "create auth session"):
        db.add(models.AuthSession(
            session_id=session_id,
            role=role,
            user_id=user_id,
            project_id=project_id,
        ))
        db.commit()

    payload = {"sid": session_id, "role": role.value}
    if user_id is not None:
        payload["sub"] = str(user_id)
    if project_id is not None:
        payload["project_id"] = project_id
    return schemas.LoginResponse(
        access_token=create_access_token(payload),
        role=role,
        project_id=project_id,
    )

def restore_session(db: Session, token: str) -> schemas.SessionContext:
    """
    토큰으로 세션 정보를 복원합니다.
    로그아웃되어 auth_sessions 행이 없으면 토큰이 유효해도 거부합니다.
    """
    payload = decode_token(token)
    session_id = payload.get("sid")
    if not session_id:
        raise AuthenticationException(ResponseCode.INVALID_ACCESS_TOKEN)

    with backend_call(db, "restore auth session"):
        auth_session = db.query(models.AuthSession).filter(
            models.AuthSession.session_id == session_id
        ).first()
    if not auth_session:
        raise AuthenticationException(ResponseCode.EXPIRE_SESSION)

    return schemas.SessionContext(
        session_id=auth_session.session_id,
        role=auth_session.role,
        user_id=auth_session.user_id,
        project_id=auth_session.project_id,
    )

def sign_out(db: Session, session_id: str):
    with backend_call(db, "sign out"):
        db.query(models.AuthSession).filter(
            models.AuthSession.session_id == session_id
        ).delete(synchronize_session=False)
        db.commit()

# =================================================================
# 관리자 회원가입 / 로그인
# =================================================================

def sign_up(db: Session, request: schemas.SignUpRequest) -> schemas.ProfileResponse:
    """
    관리자 회원가입.
    승인되지 않은 master 권한으로 생성되며, 기존 관리자가 승인해야 로그인할 수 있습니다.
    """
    email = request.email.strip().lower()
    full_name = request.full_name.strip()
    organization = request.organization.strip()
    position = request.position.strip()
    if not all([email, request.password, full_name, organization, position]):
        raise ValidationException(ResponseCode.REQUIRED_FIELDS)
    if request.password != request.password_confirm:
        raise ValidationException(ResponseCode.PASSWORD_MISMATCH)
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(ResponseCode.PASSWORD_TOO_SHORT)

    with backend_call(db, "sign up"):
        if db.query(models.User).filter(models.User.email == email).first():
            raise ValidationException(ResponseCode.DUPLICATED_EMAIL)

        user = models.User(email=email, password_hash=hash_password(request.password))
        db.add(user)
        db.flush()
        profile = models.Profile(
            user_id=user.user_id,
            full_name=full_name,
            organization=organization,
            position=position,
            email=email,
        )
        db.add(profile)
        db.add(models.UserRole(user_id=user.user_id, role=models.RoleType.MASTER, approved=False))
        db.commit()
        db.refresh(profile)

    logging.info(f"New master sign-up requested: {email}")
    return schemas.ProfileResponse.model_validate(profile)

def sign_in_master(db: Session, request: schemas.MasterLoginRequest) -> schemas.LoginResponse:
    """관리자 로그인. 권한이 없거나 승인 전이면 세션을 만들지 않습니다."""
    email = request.email.strip().lower()
    with backend_call(db, "sign in master"):
        user = db.query(models.User).filter(models.User.email == email).first()
        if not user or not verify_password(request.password, user.password_hash):
            logging.warning(f"Master sign-in failed (invalid credentials): {email}")
            raise AuthenticationException(ResponseCode.INVALID_LOGIN_INFO)

        user_role = db.query(models.UserRole).filter(
            models.UserRole.user_id == user.user_id,
            models.UserRole.role == models.RoleType.MASTER
        ).first()
    if not user_role:
        logging.warning(f"Master sign-in rejected (no master role): {email}")
        raise AuthorizationException(ResponseCode.NOT_MASTER_USER)
    if not user_role.approved:
        logging.warning(f"Master sign-in rejected (not approved): {email}")
        raise AuthorizationException(ResponseCode.UNAPPROVED_USER)

    return _create_session(db, models.SessionRole.MASTER, user_id=user.user_id)

# =================================================================
# 현장 로그인
# =================================================================

def sign_in_site(db: Session, request: schemas.SiteLoginRequest) -> schemas.LoginResponse:
    """
    현장 담당자 로그인. 프로젝트 비밀번호와 정확히 일치해야 합니다.
    발급된 세션은 해당 프로젝트의 신청 관리 화면에만 접근할 수 있습니다.
    """
    project = project_function.get_project(db, request.project_id)
    if not project.password:
        raise AuthorizationException(ResponseCode.PROJECT_PASSWORD_NOT_SET)
    if not hmac.compare_digest(request.password.encode("utf-8"), project.password.encode("utf-8")):
        logging.warning(f"Site sign-in failed for project {project.project_id}")
        raise AuthenticationException(ResponseCode.INVALID_PROJECT_PASSWORD)

    return _create_session(db, models.SessionRole.SITE, project_id=project.project_id)
