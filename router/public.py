# app/router/public.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core import schemas
from function import project_function, page_setting_function, application_function

# 로그인 없이 사용하는 방문자용 API
router = APIRouter(
    prefix="/public",
    tags=["Public"]
)

@router.post("/{slug}/application", summary="주차등록 신청", response_model=schemas.RootResponse[schemas.ApplicationResponse])
def submit_application(
    slug: str,
    request: schemas.SubmitApplicationRequest,
    db: Session = Depends(get_db)
):
    application = application_function.submit_application(db, slug, request)
    return schemas.RootResponse.ok(application, message="주차등록 신청이 완료되었습니다.")

@router.get("/project", summary="프로젝트 목록 조회 (현장 로그인용)", response_model=schemas.RootResponse[List[schemas.ProjectResponse]])
def get_public_project_list(db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(project_function.list_projects(db))

@router.get("/{slug}", summary="신청 페이지 정보 조회", response_model=schemas.RootResponse[schemas.PublicProjectPageResponse])
def get_project_page(slug: str, db: Session = Depends(get_db)):
    project = project_function.get_project_by_slug(db, slug)
    return schemas.RootResponse.ok(schemas.PublicProjectPageResponse(
        project=project_function.to_project_response(project),
        page_settings=page_setting_function.get_page_settings(db, project.project_id),
    ))

@router.get("/{slug}/status", summary="신청 상태 조회 (차량번호 뒤 4자리)", response_model=schemas.RootResponse[schemas.ApplicationResponse])
def get_application_status(
    slug: str,
    last_four: str = Query(..., alias="lastFour"),
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(application_function.lookup_status(db, slug, last_four))
