# app/router/qr_code.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core import schemas
from core.dependencies import require_master, verify_project_exists
from function import qr_code_function

router = APIRouter(
    prefix="/project/{project_id}/qr-code",
    tags=["QR-Code"],
    dependencies=[Depends(require_master), Depends(verify_project_exists)]
)

@router.put("/{qr_code_id}/edit", summary="QR코드 수정 (크기/색상)", response_model=schemas.RootResponse[schemas.QrCodeResponse])
def edit_qr_code(
    project_id: int,
    qr_code_id: int,
    request: schemas.EditQrCodeRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(qr_code_function.edit_qr_code(db, project_id, qr_code_id, request))

@router.post("", summary="QR코드 생성", response_model=schemas.RootResponse[schemas.QrCodeResponse])
def add_qr_code(
    project_id: int,
    request: schemas.AddQrCodeRequest,
    db: Session = Depends(get_db)
):
    return schemas.RootResponse.ok(qr_code_function.add_qr_code(db, project_id, request))

@router.get("", summary="QR코드 목록 조회", response_model=schemas.RootResponse[List[schemas.QrCodeResponse]])
def get_qr_code_list(project_id: int, db: Session = Depends(get_db)):
    return schemas.RootResponse.ok(qr_code_function.list_qr_codes(db, project_id))

@router.get("/{qr_code_id}/image", summary="QR코드 PNG 다운로드")
def download_qr_code(
    project_id: int,
    qr_code_id: int,
    db: Session = Depends(get_db)
):
    image, filename = qr_code_function.render_qr_code(db, project_id, qr_code_id)
    return Response(
        content=image,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.delete("/{qr_code_id}", summary="QR코드 삭제")
def remove_qr_code(
    project_id: int,
    qr_code_id: int,
    db: Session = Depends(get_db)
):
    qr_code_function.remove_qr_code(db, project_id, qr_code_id)
    return schemas.RootResponse.ok(None)
