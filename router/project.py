# app/router/project.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core import schemas
from core.dependencies import require_master
from function import project_function

router = APIRouter(prefix="/project", tags=["Project"], dependencies=[Depends(require_master)])

# =================================================================
# API Endpoints (PUT, POST, GET, DELETE 순서)
# =================================================================

@router.put("/{project_id}/edit", summary="프로젝트 정보 수정", response_model=schemas.RootResponse[schemas.ProjectResponse])
def edit_project(
    project_id: int,
    request: schemas.EditProjectRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(project_function.edit_project(db, project_id, request))

@router.post("", summary="프로젝트 생성", response_model=schemas.RootResponse[schemas.ProjectResponse])
def add_project(
    request: schemas.AddProjectRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(project_function.add_project(db, request))

@router.get("", summary="프로젝트 목록 조회", response_model=schemas.RootResponse[List[schemas.ProjectResponse]])
def get_project_list(db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(project_function.list_projects(db))

@router.get("/{project_id}", summary="프로젝트 상세 조회", response_model=schemas.RootResponse[schemas.ProjectResponse])
def get_project(project_id: int, db: Session = Depends(get_db)):
    project = project_function.get_project(db, project_id)
    return schemas.RootResponse.ok(project_function.to_project_response(project))

@router.delete("/{project_id}", summary="프로젝트 삭제 (관련 데이터 모두 삭제)")
def remove_project(project_id: int, db: Session = Depends(get_db)):
    project_function.remove_project(db, project_id)
    return schemas.RootResponse.ok(None)
