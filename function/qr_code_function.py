# app/function/qr_code_function.py
import re
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from core import models, schemas
from core.config import settings
from core.constants import ResponseCode
from core.exceptions import ValidationException, NotFoundException
from function.function import backend_call
from function import project_function
from service import change_manager
from utils import qr_handler

COLOR_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")
MIN_QR_SIZE = 64
MAX_QR_SIZE = 2048


def build_project_url(slug: str) -> str:
    return f"{settings.QR_BASE_URL.rstrip('/')}/{slug}"

def _validate_size(size: Optional[int]):
    if size is not None and not MIN_QR_SIZE <= size <= MAX_QR_SIZE:
        raise ValidationException(ResponseCode.INVALID_QR_SIZE)

def _validate_color(color: Optional[str]):
    if color is not None and not COLOR_PATTERN.fullmatch(color):
        raise ValidationException(ResponseCode.INVALID_COLOR)

def _get_qr_code(db: Session, project_id: int, qr_code_id: int) -> models.QrCode:
    with backend_call(db, "get qr code"):
        qr_code = db.query(models.QrCode).filter(
            models.QrCode.qr_code_id == qr_code_id,
            models.QrCode.project_id == project_id
        ).first()
    if not qr_code:
        raise NotFoundException(ResponseCode.INVALID_QR_CODE)
    return qr_code

def list_qr_codes(db: Session, project_id: int) -> List[schemas.QrCodeResponse]:
    with backend_call(db, "list qr codes"):
        qr_codes = db.query(models.QrCode).filter(
            models.QrCode.project_id == project_id
        ).order_by(models.QrCode.create_at.desc(), models.QrCode.qr_code_id.desc()).all()
    return [schemas.QrCodeResponse.model_validate(qr_code) for qr_code in qr_codes]

def add_qr_code(db: Session, project_id: int, request: schemas.AddQrCodeRequest) -> schemas.QrCodeResponse:
    """프로젝트 신청 페이지 주소로 QR코드를 생성합니다. 주소는 생성 시점의 slug로 고정됩니다."""
    project = project_function.get_project(db, project_id)
    _validate_size(request.size)
    _validate_color(request.fg_color)
    _validate_color(request.bg_color)

    with backend_call(db, "add qr code"):
        qr_code = models.QrCode(
            project_id=project_id,
            url=build_project_url(project.slug),
            size=request.size or settings.QR_DEFAULT_SIZE,
            fg_color=request.fg_color or settings.QR_DEFAULT_FG_COLOR,
            bg_color=request.bg_color or settings.QR_DEFAULT_BG_COLOR,
        )
        db.add(qr_code)
        db.commit()
        db.refresh(qr_code)

    change_manager.notify(change_manager.QR_CODES_TABLE, "INSERT", project_id, [qr_code.qr_code_id])
    return schemas.QrCodeResponse.model_validate(qr_code)

def edit_qr_code(db: Session, project_id: int, qr_code_id: int, request: schemas.EditQrCodeRequest) -> schemas.QrCodeResponse:
    """크기/색상만 수정합니다. 주소(url)는 변경하지 않습니다."""
    qr_code = _get_qr_code(db, project_id, qr_code_id)
    _validate_size(request.size)
    _validate_color(request.fg_color)
    _validate_color(request.bg_color)

    with backend_call(db, "edit qr code"):
        if request.size is not None:
            qr_code.size = request.size
        if request.fg_color is not None:
            qr_code.fg_color = request.fg_color
        if request.bg_color is not None:
            qr_code.bg_color = request.bg_color
        db.commit()
        db.refresh(qr_code)

    change_manager.notify(change_manager.QR_CODES_TABLE, "UPDATE", project_id, [qr_code_id])
    return schemas.QrCodeResponse.model_validate(qr_code)

def remove_qr_code(db: Session, project_id: int, qr_code_id: int):
    _get_qr_code(db, project_id, qr_code_id)
    with backend_call(db, "remove qr code"):
        db.query(models.QrCode).filter(models.QrCode.qr_code_id == qr_code_id).delete(synchronize_session=False)
        db.commit()
    change_manager.notify(change_manager.QR_CODES_TABLE, "DELETE", project_id, [qr_code_id])

def render_qr_code(db: Session, project_id: int, qr_code_id: int) -> Tuple[bytes, str]:
    """QR코드 PNG 이미지와 다운로드 파일명(qr-<slug>.png)을 반환합니다."""
    qr_code = _get_qr_code(db, project_id, qr_code_id)
    project = project_function.get_project(db, project_id)
    image = qr_handler.render_qr_png(qr_code.url, qr_code.size, qr_code.fg_color, qr_code.bg_color)
    return image, f"qr-{project.slug}.png"
