# app/function/parking_type_function.py
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from core import models, schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException, NotFoundException
from function.function import backend_call
from service import change_manager

# 승인 대신 '확인필요'로 분류되는 예약 주차권 이름
NO_PLATE_TYPE_NAME = "번호없음"
REJECT_TYPE_NAME = "거부"
RESERVED_TYPE_NAMES = (NO_PLATE_TYPE_NAME, REJECT_TYPE_NAME)


def format_parking_type_label(parking_type: models.ParkingType) -> str:
    """화면/CSV 표시용 주차권 이름. 예) 2시간권 (2시간)"""
    if parking_type is None:
        return "-"
    return f"{parking_type.parking_type_name} ({parking_type.hours}시간)"

def get_parking_type(db: Session, project_id: int, parking_type_id: int) -> models.ParkingType:
    """프로젝트에 속한 주차권을 조회합니다."""
    with backend_call(db, "get parking type"):
        parking_type = db.query(models.ParkingType).filter(
            models.ParkingType.parking_type_id == parking_type_id,
            models.ParkingType.project_id == project_id
        ).first()
    if not parking_type:
        raise NotFoundException(ResponseCode.INVALID_PARKING_TYPE)
    return parking_type

def list_parking_types(db: Session, project_id: int) -> List[schemas.ParkingTypeResponse]:
    with backend_call(db, "list parking types"):
        parking_types = db.query(models.ParkingType).filter(
            models.ParkingType.project_id == project_id
        ).order_by(models.ParkingType.sort_order.asc(), models.ParkingType.parking_type_id.asc()).all()
    return [schemas.ParkingTypeResponse.model_validate(parking_type) for parking_type in parking_types]

def add_parking_type(db: Session, project_id: int, request: schemas.AddParkingTypeRequest) -> schemas.ParkingTypeResponse:
    """주차권을 추가합니다. 정렬 순서는 현재 최대값 + 1 입니다."""
    name = request.parking_type_name.strip()
    if not name or request.hours < 0:
        raise ValidationException(ResponseCode.INVALID_PARKING_TYPE_INPUT)

    with backend_call(db, "add parking type"):
        max_order = db.query(func.max(models.ParkingType.sort_order)).filter(
            models.ParkingType.project_id == project_id
        ).scalar() or 0
        parking_type = models.ParkingType(
            project_id=project_id,
            parking_type_name=name,
            hours=request.hours,
            sort_order=max_order + 1,
        )
        db.add(parking_type)
        db.commit()
        db.refresh(parking_type)

    change_manager.notify(change_manager.PARKING_TYPES_TABLE, "INSERT", project_id, [parking_type.parking_type_id])
    return schemas.ParkingTypeResponse.model_validate(parking_type)

def remove_parking_type(db: Session, project_id: int, parking_type_id: int):
    """
    주차권을 삭제합니다.
    해당 주차권을 사용하던 신청은 상태를 유지하고 주차권만 비워집니다.
    """
    get_parking_type(db, project_id, parking_type_id)
    with backend_call(db, "remove parking type"):
        db.query(models.Application).filter(
            models.Application.parking_type_id == parking_type_id
        ).update({models.Application.parking_type_id: None}, synchronize_session=False)
        db.query(models.ParkingType).filter(
            models.ParkingType.parking_type_id == parking_type_id
        ).delete(synchronize_session=False)
        db.commit()

    change_manager.notify(change_manager.PARKING_TYPES_TABLE, "DELETE", project_id, [parking_type_id])

def reorder_parking_types(db: Session, project_id: int, request: schemas.ReorderParkingTypeRequest) -> List[schemas.ParkingTypeResponse]:
    """
    전달된 ID 순서대로 정렬 순서를 1부터 다시 매깁니다.
    프로젝트의 주차권 ID 전체가 중복/누락 없이 전달되어야 하며, 한 트랜잭션으로 처리됩니다.
    """
    ordered_ids = request.parking_type_id_list
    with backend_call(db, "reorder parking types"):
        parking_types = db.query(models.ParkingType).filter(
            models.ParkingType.project_id == project_id
        ).all()
        by_id = {parking_type.parking_type_id: parking_type for parking_type in parking_types}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != set(by_id):
            raise ValidationException(ResponseCode.INVALID_PARKING_TYPE_ORDER)

        for index, parking_type_id in enumerate(ordered_ids):
            by_id[parking_type_id].sort_order = index + 1
        db.commit()

    change_manager.notify(change_manager.PARKING_TYPES_TABLE, "UPDATE", project_id, list(ordered_ids))
    return list_parking_types(db, project_id)
