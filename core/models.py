# app/models.py
from sqlalchemy import Column, Integer, BigInteger, DateTime, ForeignKey, Text, Enum, Boolean, VARCHAR, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from zoneinfo import ZoneInfo
from .database import Base

import enum

# 한국 시간대(KST) 객체 정의
KST = ZoneInfo("Asia/Seoul")

# SQLite는 INTEGER PRIMARY KEY만 자동 증가하므로 방언별로 타입을 바꿔 사용합니다.
BIGINT = BigInteger().with_variant(Integer, "sqlite")


def _now_kst():
    return datetime.now(KST)

def _enum_values(enum_cls):
    # DB 컬럼에는 Enum 이름이 아닌 값(소문자)을 저장합니다.
    return [member.value for member in enum_cls]

# =================================================================
# Enums (모든 모델 클래스보다 먼저 정의해야 합니다)
# =================================================================
class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"           # 대기중 (최초 신청)
    APPROVED = "approved"         # 승인됨
    NEEDS_REVIEW = "needs_review" # 확인필요 (번호없음/거부 주차권)
    REJECTED = "rejected"         # 거부됨

class RoleType(str, enum.Enum):
    MASTER = "master"

class SessionRole(str, enum.Enum):
    MASTER = "master" # 전체 관리자
    SITE = "site"     # 프로젝트 현장 담당자

class SettingKey(str, enum.Enum):
    TITLE_TEXT = "title_text"
    TITLE_FONT_SIZE = "title_font_size"
    CUSTOM_FIELDS_ENABLED = "custom_fields_enabled"
    CUSTOM_FIELDS_CONFIG = "custom_fields_config"


### Project ###
class Project(Base):
    __tablename__ = "projects"

    project_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    project_name = Column(VARCHAR(100), nullable=False)
    slug = Column(VARCHAR(100), unique=True, nullable=False)
    # 현장 로그인용 비밀번호 (평문 저장, 없으면 현장 로그인 불가)
    password = Column(VARCHAR(100), nullable=True)
    description = Column(Text, nullable=True)
### Project ###


### Parking Type ###
class ParkingType(Base):
    __tablename__ = "parking_types"

    parking_type_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    project_id = Column(BIGINT, ForeignKey("projects.project_id"), nullable=False, index=True)
    parking_type_name = Column(VARCHAR(50), nullable=False)
    hours = Column(Integer, nullable=False, default=0)
    sort_order = Column(Integer, nullable=False, default=0)
### Parking Type ###


### Application ###
class Application(Base):
    __tablename__ = "parking_applications"

    application_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    project_id = Column(BIGINT, ForeignKey("projects.project_id"), nullable=False, index=True)
    car_number = Column(VARCHAR(16), nullable=False)
    last_four = Column(VARCHAR(4), nullable=False, index=True)
    status = Column(Enum(ApplicationStatus, values_callable=_enum_values), nullable=False, default=ApplicationStatus.PENDING)
    parking_type_id = Column(BIGINT, ForeignKey("parking_types.parking_type_id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    custom_fields = Column(JSON, nullable=False, default=dict)

    parking_type = relationship("ParkingType")
### Application ###


### Page Setting ###
class PageSetting(Base):
    __tablename__ = "page_settings"
    __table_args__ = (UniqueConstraint("project_id", "setting_key", name="uq_page_settings_project_key"),)

    setting_id = Column(BIGINT, primary_key=True, index=True)
    project_id = Column(BIGINT, ForeignKey("projects.project_id"), nullable=False, index=True)
    setting_key = Column(VARCHAR(50), nullable=False)
    setting_value = Column(Text, nullable=False, default="")
    update_at = Column(DateTime, nullable=False, default=_now_kst, onupdate=_now_kst)
### Page Setting ###


### QR Code ###
class QrCode(Base):
    __tablename__ = "qr_codes"

    qr_code_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    update_at = Column(DateTime, nullable=False, default=_now_kst, onupdate=_now_kst)
    project_id = Column(BIGINT, ForeignKey("projects.project_id"), nullable=False, index=True)
    # 생성 시점의 프로젝트 slug로 만들어지며 이후 다시 계산하지 않습니다.
    url = Column(VARCHAR(255), nullable=False)
    size = Column(Integer, nullable=False, default=256)
    fg_color = Column(VARCHAR(7), nullable=False, default="#000000")
    bg_color = Column(VARCHAR(7), nullable=False, default="#ffffff")
### QR Code ###


### User ###
class User(Base):
    __tablename__ = "users"

    user_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    email = Column(VARCHAR(255), unique=True, nullable=False)
    password_hash = Column(VARCHAR(255), nullable=False)

class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(BIGINT, ForeignKey("users.user_id"), primary_key=True)
    full_name = Column(VARCHAR(50), nullable=False)
    organization = Column(VARCHAR(100), nullable=False)
    position = Column(VARCHAR(50), nullable=False)
    email = Column(VARCHAR(255), nullable=False)
    update_at = Column(DateTime, nullable=False, default=_now_kst, onupdate=_now_kst)

class UserRole(Base):
    __tablename__ = "user_roles"

    role_id = Column(BIGINT, primary_key=True, index=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    update_at = Column(DateTime, nullable=False, default=_now_kst, onupdate=_now_kst)
    user_id = Column(BIGINT, ForeignKey("users.user_id"), unique=True, nullable=False)
    role = Column(Enum(RoleType, values_callable=_enum_values), nullable=False, default=RoleType.MASTER)
    approved = Column(Boolean, nullable=False, default=False)

### User ###


### Auth ###
class AuthSession(Base):
    __tablename__ = "auth_sessions"

    session_id = Column(VARCHAR(36), primary_key=True)
    create_at = Column(DateTime, nullable=False, default=_now_kst)
    role = Column(Enum(SessionRole, values_callable=_enum_values), nullable=False)
    user_id = Column(BIGINT, ForeignKey("users.user_id"), nullable=True)
    # 현장(site) 세션이 묶인 프로젝트
    project_id = Column(BIGINT, ForeignKey("projects.project_id"), nullable=True)
### Auth ###
