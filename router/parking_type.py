# app/router/parking_type.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core import schemas
from core.dependencies import require_master, require_project_access, verify_project_exists
from function import parking_type_function

router = APIRouter(
    prefix="/project/{project_id}/parking-type",
    tags=["Parking-Type"]
)

@router.put("/reorder", summary="주차권 순서 변경", dependencies=[Depends(require_master), Depends(verify_project_exists)],
            response_model=schemas.RootResponse[List[schemas.ParkingTypeResponse]])
def reorder_parking_types(
    project_id: int,
    request: schemas.ReorderParkingTypeRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(parking_type_function.reorder_parking_types(db, project_id, request))

@router.post("", summary="주차권 추가", dependencies=[Depends(require_master), Depends(verify_project_exists)],
             response_model=schemas.RootResponse[schemas.ParkingTypeResponse])
def add_parking_type(
    project_id: int,
    request: schemas.AddParkingTypeRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(parking_type_function.add_parking_type(db, project_id, request))

@router.get("", summary="주차권 목록 조회", dependencies=[Depends(require_project_access), Depends(verify_project_exists)],
            response_model=schemas.RootResponse[List[schemas.ParkingTypeResponse]])
def get_parking_type_list(project_id: int, db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(parking_type_function.list_parking_types(db, project_id))

@router.delete("/{parking_type_id}", summary="주차권 삭제", dependencies=[Depends(require_master), Depends(verify_project_exists)])
def remove_parking_type(
    project_id: int,
    parking_type_id: int,
    db: Session = Depends(get_db)
):
    parking_type_function.remove_parking_type(db, project_id, parking_type_id)
    return schemas.RootResponse.ok(None)
