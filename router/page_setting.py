# app/router/page_setting.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core import schemas
from core.dependencies import require_master, verify_project_exists
from function import page_setting_function

router = APIRouter(
    prefix="/project/{project_id}/page-setting",
    tags=["Page-Setting"],
    dependencies=[Depends(require_master), Depends(verify_project_exists)]
)

@router.put("", summary="신청 페이지 설정 저장", response_model=schemas.RootResponse[schemas.PageSettingsResponse])
def save_page_settings(
    project_id: int,
    request: schemas.PageSettingsRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(page_setting_function.save_page_settings(db, project_id, request))

@router.get("", summary="신청 페이지 설정 조회", response_model=schemas.RootResponse[schemas.PageSettingsResponse])
def get_page_settings(project_id: int, db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(page_setting_function.get_page_settings(db, project_id))
