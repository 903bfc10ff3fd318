# app/router/application.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core.database import get_db
from core import schemas
from core.dependencies import require_project_access, verify_project_exists
from function import application_function

# 관리자와 해당 프로젝트의 현장 담당자가 함께 사용하는 신청 관리 API
router = APIRouter(
    prefix="/project/{project_id}/application",
    tags=["Application"],
    dependencies=[Depends(require_project_access), Depends(verify_project_exists)]
)

def _mutation_result(result: schemas.ApplicationMutationResponse):
    return schemas.RootResponse.ok(result, message=result.message)

# -----------------------------------------------------------------
# PUT Endpoints
# -----------------------------------------------------------------

@router.put("/assign", summary="주차권 일괄 지정", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def assign_parking_type_bulk(
    project_id: int,
    request: schemas.BulkAssignRequest,
    db: Session = Depends(get_db)
):
    result = application_function.assign_parking_type(db, project_id, request.application_id_list, request.parking_type_id)
    return _mutation_result(result)

@router.put("/reject", summary="신청 일괄 거부", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def reject_applications_bulk(
    project_id: int,
    request: schemas.ApplicationIdListRequest,
    db: Session = Depends(get_db)
):
    result = application_function.reject_applications(db, project_id, request.application_id_list)
    return _mutation_result(result)

@router.put("/{application_id}/assign", summary="주차권 지정", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def assign_parking_type(
    project_id: int,
    application_id: int,
    request: schemas.AssignParkingTypeRequest,
    db: Session = Depends(get_db)
):
    result = application_function.assign_parking_type(db, project_id, [application_id], request.parking_type_id)
    return _mutation_result(result)

@router.put("/{application_id}/reject", summary="신청 거부", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def reject_application(
    project_id: int,
    application_id: int,
    db: Session = Depends(get_db)
):
    result = application_function.reject_applications(db, project_id, [application_id])
    return _mutation_result(result)

# -----------------------------------------------------------------
# POST Endpoints
# -----------------------------------------------------------------

@router.post("/delete", summary="신청 일괄 삭제", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def remove_applications_bulk(
    project_id: int,
    request: schemas.ApplicationIdListRequest,
    db: Session = Depends(get_db)
):
    result = application_function.remove_applications(db, project_id, request.application_id_list)
    return _mutation_result(result)

@router.post("/export", summary="선택한 신청 CSV 다운로드")
def export_applications(
    project_id: int,
    request: schemas.ApplicationIdListRequest,
    db: Session = Depends(get_db)
):
    content = application_function.export_csv(db, project_id, request.application_id_list)
    filename = application_function.get_export_filename()
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

# -----------------------------------------------------------------
# GET Endpoints
# -----------------------------------------------------------------

@router.get("", summary="신청 목록 및 주차권 목록 조회", response_model=schemas.RootResponse[schemas.ReviewBoardResponse])
def get_review_board(project_id: int, db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(application_function.list_review_board(db, project_id))

# -----------------------------------------------------------------
# DELETE Endpoints
# -----------------------------------------------------------------

@router.delete("/{application_id}", summary="신청 삭제", response_model=schemas.RootResponse[schemas.ApplicationMutationResponse])
def remove_application(
    project_id: int,
    application_id: int,
    db: Session = Depends(get_db)
):
    result = application_function.remove_applications(db, project_id, [application_id])
    return _mutation_result(result)
