# app/function/project_function.py
import re
from typing import List, Optional
from sqlalchemy.orm import Session

from core import models, schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException, NotFoundException
from function.function import backend_call
from function import page_setting_function

SLUG_PATTERN = re.compile(r"[a-z0-9-]+")

# =================================================================
# 내부 유틸리티 함수
# =================================================================

def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None

def to_project_response(project: models.Project) -> schemas.ProjectResponse:
    return schemas.ProjectResponse(
        project_id=project.project_id,
        project_name=project.project_name,
        slug=project.slug,
        description=project.description,
        has_password=bool(project.password),
        create_at=project.create_at,
    )

# =================================================================
# 프로젝트 조회
# =================================================================

def get_project(db: Session, project_id: int) -> models.Project:
    """ID로 프로젝트를 조회합니다."""
    with backend_call(db, "get project"):
        project = db.query(models.Project).filter(models.Project.project_id == project_id).first()
    if not project:
        raise NotFoundException(ResponseCode.INVALID_PROJECT)
    return project

def get_project_by_slug(db: Session, slug: str) -> models.Project:
    """URL 주소(slug)로 프로젝트를 조회합니다."""
    with backend_call(db, "get project by slug"):
        project = db.query(models.Project).filter(models.Project.slug == slug.strip().lower()).first()
    if not project:
        raise NotFoundException(ResponseCode.INVALID_PROJECT)
    return project

def list_projects(db: Session) -> List[schemas.ProjectResponse]:
    with backend_call(db, "list projects"):
        projects = db.query(models.Project).order_by(
            models.Project.create_at.desc(),
            models.Project.project_id.desc()
        ).all()
    return [to_project_response(project) for project in projects]

# =================================================================
# 프로젝트 생성 / 수정 / 삭제
# =================================================================

def add_project(db: Session, request: schemas.AddProjectRequest) -> schemas.ProjectResponse:
    """프로젝트를 생성하고 기본 페이지 설정을 함께 저장합니다."""
    name = request.project_name.strip()
    slug = request.slug.strip().lower()
    if not name or not slug:
        raise ValidationException(ResponseCode.REQUIRED_PROJECT_FIELDS)
    if not SLUG_PATTERN.fullmatch(slug):
        raise ValidationException(ResponseCode.INVALID_SLUG)

    with backend_call(db, "add project"):
        duplicated = db.query(models.Project).filter(models.Project.slug == slug).first()
        if duplicated:
            raise ValidationException(ResponseCode.DUPLICATED_SLUG)

        project = models.Project(
            project_name=name,
            slug=slug,
            description=_blank_to_none(request.description),
            password=_blank_to_none(request.password),
        )
        db.add(project)
        db.flush()
        db.add_all(page_setting_function.build_default_setting_rows(project.project_id))
        db.commit()
        db.refresh(project)
    return to_project_response(project)

def edit_project(db: Session, project_id: int, request: schemas.EditProjectRequest) -> schemas.ProjectResponse:
    """프로젝트 이름/설명/비밀번호를 수정합니다. URL 주소(slug)는 변경하지 않습니다."""
    project = get_project(db, project_id)
    with backend_call(db, "edit project"):
        if request.project_name is not None:
            name = request.project_name.strip()
            if not name:
                raise ValidationException(ResponseCode.REQUIRED_PROJECT_FIELDS)
            project.project_name = name
        if request.description is not None:
            project.description = _blank_to_none(request.description)
        if request.password is not None:
            project.password = _blank_to_none(request.password)
        db.commit()
        db.refresh(project)
    return to_project_response(project)

def remove_project(db: Session, project_id: int):
    """프로젝트와 관련된 모든 데이터를 삭제합니다."""
    get_project(db, project_id)
    with backend_call(db, "remove project"):
        for model in (models.Application, models.QrCode, models.PageSetting, models.AuthSession, models.ParkingType):
            db.query(model).filter(model.project_id == project_id).delete(synchronize_session=False)
        db.query(models.Project).filter(models.Project.project_id == project_id).delete(synchronize_session=False)
        db.commit()
