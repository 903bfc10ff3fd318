# app/function/application_function.py
import csv
import io
import re
from datetime import datetime
from typing import Dict, List
from sqlalchemy.orm import Session, joinedload

from core import models, schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException, NotFoundException
from function.function import backend_call, now_kst, current_date, KST
from function import project_function, parking_type_function, page_setting_function
from service import change_manager

CAR_NUMBER_PATTERN = re.compile(r"[0-9]{2,3}[가-힣][0-9]{4}")
LAST_FOUR_PATTERN = re.compile(r"[0-9]{4}")

STATUS_LABELS = {
    models.ApplicationStatus.PENDING: "대기중",
    models.ApplicationStatus.APPROVED: "승인됨",
    models.ApplicationStatus.NEEDS_REVIEW: "확인필요",
    models.ApplicationStatus.REJECTED: "거부됨",
}

# 예약 주차권 이름별 안내 메시지
REVIEW_MESSAGES = {
    parking_type_function.NO_PLATE_TYPE_NAME: "번호 없음으로 분류되었습니다",
    parking_type_function.REJECT_TYPE_NAME: "거부 항목으로 분류되었습니다",
}
APPROVED_MESSAGE = "주차등록이 승인되었습니다"
REJECTED_MESSAGE = "신청이 거부되었습니다"
DELETED_MESSAGE = "삭제되었습니다"

CSV_HEADER = ["차량번호", "상태", "주차권", "신청일"]

# =================================================================
# 내부 유틸리티 함수
# =================================================================

def get_status_label(status: models.ApplicationStatus) -> str:
    return STATUS_LABELS.get(status, str(status))

def _format_date(value: datetime) -> str:
    # DB에는 KST 기준 시각이 저장되며, 시간대 정보가 있으면 KST로 변환합니다.
    if value.tzinfo is not None:
        value = value.astimezone(KST)
    return value.strftime("%Y-%m-%d")

def to_application_response(application: models.Application) -> schemas.ApplicationResponse:
    parking_type = application.parking_type
    return schemas.ApplicationResponse(
        application_id=application.application_id,
        project_id=application.project_id,
        car_number=application.car_number,
        last_four=application.last_four,
        status=application.status,
        status_label=get_status_label(application.status),
        parking_type_id=application.parking_type_id,
        parking_type=schemas.ParkingTypeResponse.model_validate(parking_type) if parking_type else None,
        parking_type_label=parking_type_function.format_parking_type_label(parking_type),
        create_at=application.create_at,
        approved_at=application.approved_at,
        custom_fields=application.custom_fields or {},
    )

def _query_applications(db: Session, project_id: int):
    return db.query(models.Application).options(
        joinedload(models.Application.parking_type)
    ).filter(
        models.Application.project_id == project_id
    ).order_by(models.Application.create_at.desc(), models.Application.application_id.desc())

def _verify_selection(db: Session, project_id: int, application_id_list: List[int]) -> List[int]:
    """선택된 신청이 모두 현재 프로젝트에 속하는지 확인하고 중복을 제거한 ID 목록을 반환합니다."""
    ids = list(dict.fromkeys(application_id_list))
    if not ids:
        raise ValidationException(ResponseCode.EMPTY_SELECTION)
    with backend_call(db, "verify application selection"):
        found = db.query(models.Application.application_id).filter(
            models.Application.project_id == project_id,
            models.Application.application_id.in_(ids)
        ).count()
    if found != len(ids):
        raise NotFoundException(ResponseCode.INVALID_APPLICATION)
    return ids

def _mutation_response(db: Session, project_id: int, message: str, affected_count: int) -> schemas.ApplicationMutationResponse:
    return schemas.ApplicationMutationResponse(
        message=message,
        affected_count=affected_count,
        board=list_review_board(db, project_id),
    )

# =================================================================
# 방문자 (공개) 기능
# =================================================================

def submit_application(db: Session, slug: str, request: schemas.SubmitApplicationRequest) -> schemas.ApplicationResponse:
    """
    방문자 주차등록 신청.
    차량번호는 입력값 그대로 검사하며(공백/하이픈 보정 없음), 검증에 실패하면 아무것도 저장하지 않습니다.
    """
    project = project_function.get_project_by_slug(db, slug)
    car_number = request.car_number
    if not CAR_NUMBER_PATTERN.fullmatch(car_number):
        raise ValidationException(ResponseCode.INVALID_CAR_NUMBER)

    field_schema = page_setting_function.get_custom_field_schema(db, project.project_id)
    custom_fields = field_schema.validate_values(request.custom_fields)

    with backend_call(db, "submit application"):
        application = models.Application(
            project_id=project.project_id,
            car_number=car_number,
            last_four=car_number[-4:],
            status=models.ApplicationStatus.PENDING,
            custom_fields=custom_fields,
        )
        db.add(application)
        db.commit()
        db.refresh(application)

    change_manager.notify(change_manager.APPLICATIONS_TABLE, "INSERT", project.project_id, [application.application_id])
    return to_application_response(application)

def lookup_status(db: Session, slug: str, last_four: str) -> schemas.ApplicationResponse:
    """차량번호 뒤 4자리로 해당 프로젝트의 가장 최근 신청을 조회합니다."""
    if not LAST_FOUR_PATTERN.fullmatch(last_four or ""):
        raise ValidationException(ResponseCode.INVALID_LAST_FOUR)
    project = project_function.get_project_by_slug(db, slug)
    with backend_call(db, "lookup application status"):
        application = _query_applications(db, project.project_id).filter(
            models.Application.last_four == last_four
        ).first()
    if not application:
        raise NotFoundException(ResponseCode.NO_APPLICATION)
    return to_application_response(application)

# =================================================================
# 관리자 / 현장 담당자 기능
# =================================================================

def list_review_board(db: Session, project_id: int) -> schemas.ReviewBoardResponse:
    """신청 목록(최신순)과 주차권 목록(정렬순)을 함께 반환합니다."""
    with backend_call(db, "list applications"):
        applications = _query_applications(db, project_id).all()
    return schemas.ReviewBoardResponse(
        applications=[to_application_response(application) for application in applications],
        parking_types=parking_type_function.list_parking_types(db, project_id),
    )

def assign_parking_type(db: Session, project_id: int, application_id_list: List[int], parking_type_id) -> schemas.ApplicationMutationResponse:
    """
    선택된 신청 전체에 같은 주차권을 지정합니다.
    예약 이름(번호없음/거부)이면 확인필요, 그 외에는 승인 처리합니다. 이전 상태와 무관합니다.
    """
    ids = list(dict.fromkeys(application_id_list))
    if not ids:
        raise ValidationException(ResponseCode.EMPTY_SELECTION)
    if not parking_type_id:
        raise ValidationException(ResponseCode.NO_PARKING_TYPE_SELECTED)
    parking_type = parking_type_function.get_parking_type(db, project_id, parking_type_id)
    ids = _verify_selection(db, project_id, ids)

    if parking_type.parking_type_name in parking_type_function.RESERVED_TYPE_NAMES:
        values = {
            models.Application.status: models.ApplicationStatus.NEEDS_REVIEW,
            models.Application.parking_type_id: parking_type.parking_type_id,
            models.Application.approved_at: None,
        }
        message = REVIEW_MESSAGES[parking_type.parking_type_name]
    else:
        values = {
            models.Application.status: models.ApplicationStatus.APPROVED,
            models.Application.parking_type_id: parking_type.parking_type_id,
            models.Application.approved_at: now_kst(),
        }
        message = APPROVED_MESSAGE

    with backend_call(db, "assign parking type"):
        affected = db.query(models.Application).filter(
            models.Application.project_id == project_id,
            models.Application.application_id.in_(ids)
        ).update(values, synchronize_session=False)
        db.commit()

    change_manager.notify(change_manager.APPLICATIONS_TABLE, "UPDATE", project_id, ids)
    return _mutation_response(db, project_id, message, affected)

def reject_applications(db: Session, project_id: int, application_id_list: List[int]) -> schemas.ApplicationMutationResponse:
    """선택된 신청을 거부 상태로 변경합니다. 지정된 주차권은 그대로 둡니다."""
    ids = _verify_selection(db, project_id, application_id_list)
    with backend_call(db, "reject applications"):
        affected = db.query(models.Application).filter(
            models.Application.project_id == project_id,
            models.Application.application_id.in_(ids)
        ).update({
            models.Application.status: models.ApplicationStatus.REJECTED,
            models.Application.approved_at: None,
        }, synchronize_session=False)
        db.commit()

    change_manager.notify(change_manager.APPLICATIONS_TABLE, "UPDATE", project_id, ids)
    return _mutation_response(db, project_id, REJECTED_MESSAGE, affected)

def remove_applications(db: Session, project_id: int, application_id_list: List[int]) -> schemas.ApplicationMutationResponse:
    """선택된 신청을 삭제합니다. 삭제 확인은 호출하는 쪽에서 먼저 받아야 합니다."""
    ids = _verify_selection(db, project_id, application_id_list)
    with backend_call(db, "remove applications"):
        affected = db.query(models.Application).filter(
            models.Application.project_id == project_id,
            models.Application.application_id.in_(ids)
        ).delete(synchronize_session=False)
        db.commit()

    change_manager.notify(change_manager.APPLICATIONS_TABLE, "DELETE", project_id, ids)
    return _mutation_response(db, project_id, DELETED_MESSAGE, affected)

# =================================================================
# CSV 내보내기
# =================================================================

def get_export_filename() -> str:
    return f"parking_applications_{current_date().isoformat()}.csv"

def export_csv(db: Session, project_id: int, application_id_list: List[int]) -> bytes:
    """
    선택된 신청을 CSV로 변환합니다. (엑셀 호환을 위해 BOM 포함 UTF-8)
    추가 항목 열은 선택된 신청에서 처음 등장한 순서대로 붙습니다.
    """
    ids = _verify_selection(db, project_id, application_id_list)
    with backend_call(db, "export applications"):
        applications = _query_applications(db, project_id).filter(
            models.Application.application_id.in_(ids)
        ).all()

    field_keys: List[str] = []
    for application in applications:
        for key in (application.custom_fields or {}):
            if key not in field_keys:
                field_keys.append(key)
    field_labels: Dict[str, str] = page_setting_function.get_field_labels(db, project_id)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER + [field_labels.get(key, key) for key in field_keys])
    for application in applications:
        custom_fields = application.custom_fields or {}
        writer.writerow([
            application.car_number,
            get_status_label(application.status),
            parking_type_function.format_parking_type_label(application.parking_type),
            _format_date(application.create_at),
        ] + [custom_fields.get(key, "") for key in field_keys])

    return buffer.getvalue().encode("utf-8-sig")
