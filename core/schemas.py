# app/schemas.py
from pydantic import BaseModel, Field
from typing import TypeVar, Generic, Optional, List, Dict, Union, Literal, Annotated
from datetime import datetime
# 정의한 Enum import
from .models import ApplicationStatus, SessionRole, RoleType

T = TypeVar('T')

# =================================================================
# Base Config for ORM Mapping (일괄 적용을 위한 기본 클래스)
# =================================================================

class OrmConfig(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True

# RootResponse 제네릭 모델
class RootResponse(BaseModel, Generic[T]):
    status: str = "OK"
    message: str = "success"
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: T, message: str = "success"):
        return cls(data=data, message=message)


### Auth ###
# --- Data Transfer Objects (Internal) ---
class SessionContext(OrmConfig):
    """요청마다 토큰과 auth_sessions 행으로 복원되는 로그인 세션 정보"""
    session_id: str = Field(..., alias="sessionId")
    role: SessionRole
    user_id: Optional[int] = Field(None, alias="userId")
    project_id: Optional[int] = Field(None, alias="projectId")

    @property
    def is_master(self) -> bool:
        return self.role == SessionRole.MASTER

# --- Request Schemas ---
class SignUpRequest(OrmConfig):
    email: str = Field(..., description="이메일")
    password: str = Field(..., description="비밀번호")
    password_confirm: str = Field(..., alias="passwordConfirm", description="비밀번호 확인")
    full_name: str = Field(..., alias="fullName", description="이름")
    organization: str = Field(..., description="소속")
    position: str = Field(..., description="직책")

class MasterLoginRequest(OrmConfig):
    email: str
    password: str

class SiteLoginRequest(OrmConfig):
    project_id: int = Field(..., alias="projectId", description="프로젝트ID")
    password: str = Field(..., description="프로젝트 비밀번호")

class EditPasswordRequest(OrmConfig):
    new_password: str = Field(..., alias="newPassword")

# --- Response Schemas ---
class LoginResponse(OrmConfig):
    access_token: str = Field(..., alias="accessToken")
    role: SessionRole
    project_id: Optional[int] = Field(None, alias="projectId")
### Auth ###


### User ###
# --- Request Schemas ---
class EditProfileRequest(OrmConfig):
    full_name: str = Field(..., alias="fullName")
    organization: str
    position: str

# --- Response Schemas ---
class ProfileResponse(OrmConfig):
    user_id: int = Field(..., alias="userId")
    full_name: str = Field(..., alias="fullName")
    organization: str
    position: str
    email: str

class UserRoleResponse(OrmConfig):
    role_id: int = Field(..., alias="roleId")
    user_id: int = Field(..., alias="userId")
    role: RoleType
    approved: bool
    create_at: datetime = Field(..., alias="createAt")
    profile: Optional[ProfileResponse] = None
### User ###


### Project ###
# --- Request Schemas ---
class AddProjectRequest(OrmConfig):
    project_name: str = Field(..., alias="projectName", description="프로젝트 이름")
    slug: str = Field(..., description="URL 주소 (영문 소문자, 숫자, 하이픈)")
    description: Optional[str] = None
    password: Optional[str] = Field(None, description="현장 로그인 비밀번호")

class EditProjectRequest(OrmConfig):
    project_name: Optional[str] = Field(None, alias="projectName")
    description: Optional[str] = None
    password: Optional[str] = None

# --- Response Schemas ---
class ProjectResponse(OrmConfig):
    project_id: int = Field(..., alias="projectId")
    project_name: str = Field(..., alias="projectName")
    slug: str
    description: Optional[str] = None
    has_password: bool = Field(..., alias="hasPassword")
    create_at: datetime = Field(..., alias="createAt")
### Project ###


### Parking Type ###
# --- Request Schemas ---
class AddParkingTypeRequest(OrmConfig):
    parking_type_name: str = Field(..., alias="parkingTypeName", description="주차권 이름")
    hours: int = Field(..., description="주차 가능 시간")

class ReorderParkingTypeRequest(OrmConfig):
    # 전체 주차권 ID를 원하는 순서대로 전달합니다.
    parking_type_id_list: List[int] = Field(..., alias="parkingTypeIdList")

# --- Response Schemas ---
class ParkingTypeResponse(OrmConfig):
    parking_type_id: int = Field(..., alias="parkingTypeId")
    parking_type_name: str = Field(..., alias="parkingTypeName")
    hours: int
    sort_order: int = Field(..., alias="sortOrder")
### Parking Type ###


### Custom Field ###
class CustomFieldBase(OrmConfig):
    id: str
    label: str
    required: bool = False

class TextField(CustomFieldBase):
    type: Literal["text"] = "text"

class NumberField(CustomFieldBase):
    type: Literal["number"] = "number"

class TelField(CustomFieldBase):
    type: Literal["tel"] = "tel"

class EmailField(CustomFieldBase):
    type: Literal["email"] = "email"

class SelectField(CustomFieldBase):
    type: Literal["select"] = "select"
    options: List[str] = Field(default_factory=list)

CustomField = Annotated[
    Union[TextField, NumberField, TelField, EmailField, SelectField],
    Field(discriminator="type")
]
### Custom Field ###


### Page Setting ###
class PageSettingsRequest(OrmConfig):
    title_text: str = Field(..., alias="titleText")
    title_font_size: str = Field(..., alias="titleFontSize")
    custom_fields_enabled: bool = Field(False, alias="customFieldsEnabled")
    custom_fields: List[CustomField] = Field(default_factory=list, alias="customFields")

class PageSettingsResponse(OrmConfig):
    title_text: str = Field(..., alias="titleText")
    title_font_size: str = Field(..., alias="titleFontSize")
    custom_fields_enabled: bool = Field(..., alias="customFieldsEnabled")
    custom_fields: List[CustomField] = Field(default_factory=list, alias="customFields")

class PublicProjectPageResponse(OrmConfig):
    project: ProjectResponse
    page_settings: PageSettingsResponse = Field(..., alias="pageSettings")
### Page Setting ###


### Application ###
# --- Request Schemas ---
class SubmitApplicationRequest(OrmConfig):
    car_number: str = Field(..., alias="carNumber", description="차량번호 (예: 12가3456)")
    custom_fields: Dict[str, str] = Field(default_factory=dict, alias="customFields")

class AssignParkingTypeRequest(OrmConfig):
    parking_type_id: Optional[int] = Field(None, alias="parkingTypeId")

class BulkAssignRequest(OrmConfig):
    application_id_list: List[int] = Field(default_factory=list, alias="applicationIdList")
    parking_type_id: Optional[int] = Field(None, alias="parkingTypeId")

class ApplicationIdListRequest(OrmConfig):
    application_id_list: List[int] = Field(default_factory=list, alias="applicationIdList")

# --- Response Schemas ---
class ApplicationResponse(OrmConfig):
    application_id: int = Field(..., alias="applicationId")
    project_id: int = Field(..., alias="projectId")
    car_number: str = Field(..., alias="carNumber")
    last_four: str = Field(..., alias="lastFour")
    status: ApplicationStatus
    status_label: str = Field(..., alias="statusLabel")
    parking_type_id: Optional[int] = Field(None, alias="parkingTypeId")
    parking_type: Optional[ParkingTypeResponse] = Field(None, alias="parkingType")
    parking_type_label: str = Field("-", alias="parkingTypeLabel")
    create_at: datetime = Field(..., alias="createAt")
    approved_at: Optional[datetime] = Field(None, alias="approvedAt")
    custom_fields: Dict[str, str] = Field(default_factory=dict, alias="customFields")

class ReviewBoardResponse(OrmConfig):
    applications: List[ApplicationResponse]
    parking_types: List[ParkingTypeResponse] = Field(..., alias="parkingTypes")

class ApplicationMutationResponse(OrmConfig):
    message: str
    affected_count: int = Field(..., alias="affectedCount")
    board: ReviewBoardResponse
### Application ###


### QR Code ###
# --- Request Schemas ---
class AddQrCodeRequest(OrmConfig):
    size: Optional[int] = None
    fg_color: Optional[str] = Field(None, alias="fgColor")
    bg_color: Optional[str] = Field(None, alias="bgColor")

class EditQrCodeRequest(OrmConfig):
    size: Optional[int] = None
    fg_color: Optional[str] = Field(None, alias="fgColor")
    bg_color: Optional[str] = Field(None, alias="bgColor")

# --- Response Schemas ---
class QrCodeResponse(OrmConfig):
    qr_code_id: int = Field(..., alias="qrCodeId")
    project_id: int = Field(..., alias="projectId")
    url: str
    size: int
    fg_color: str = Field(..., alias="fgColor")
    bg_color: str = Field(..., alias="bgColor")
    create_at: datetime = Field(..., alias="createAt")
    update_at: datetime = Field(..., alias="updateAt")
### QR Code ###


### Change Event ###
class ChangeEvent(OrmConfig):
    table: str
    event: Literal["INSERT", "UPDATE", "DELETE"]
    project_id: int = Field(..., alias="projectId")
    row_ids: List[int] = Field(default_factory=list, alias="rowIds")
### Change Event ###
