# app/function/page_setting_function.py
import re
from typing import Dict, List
from sqlalchemy.orm import Session

from core import models, schemas
from core.config import settings
from core.constants import ResponseCode
from core.exceptions import ValidationException
from function.function import backend_call
from function.custom_field_function import CustomFieldSchema, parse_fields
from service import change_manager

SETTING_KEYS = [key.value for key in models.SettingKey]
FONT_SIZE_PATTERN = re.compile(r"[0-9]+")


def default_settings() -> Dict[str, str]:
    """설정 행이 없을 때 사용하는 기본값"""
    return {
        models.SettingKey.TITLE_TEXT.value: settings.DEFAULT_TITLE_TEXT,
        models.SettingKey.TITLE_FONT_SIZE.value: settings.DEFAULT_TITLE_FONT_SIZE,
        models.SettingKey.CUSTOM_FIELDS_ENABLED.value: "false",
        models.SettingKey.CUSTOM_FIELDS_CONFIG.value: "[]",
    }

def build_default_setting_rows(project_id: int) -> List[models.PageSetting]:
    """프로젝트 생성 시 함께 저장할 기본 설정 행을 만듭니다."""
    return [
        models.PageSetting(project_id=project_id, setting_key=key, setting_value=value)
        for key, value in default_settings().items()
    ]

def _load_setting_values(db: Session, project_id: int) -> Dict[str, str]:
    with backend_call(db, "load page settings"):
        rows = db.query(models.PageSetting).filter(
            models.PageSetting.project_id == project_id,
            models.PageSetting.setting_key.in_(SETTING_KEYS)
        ).all()
    values = default_settings()
    values.update({row.setting_key: row.setting_value for row in rows})
    return values

def get_custom_field_schema(db: Session, project_id: int) -> CustomFieldSchema:
    """방문자 신청 검증에 사용할 추가 항목 설정. 비활성화 상태면 빈 스키마를 반환합니다."""
    values = _load_setting_values(db, project_id)
    if values[models.SettingKey.CUSTOM_FIELDS_ENABLED.value] != "true":
        return CustomFieldSchema()
    return CustomFieldSchema.from_json(values[models.SettingKey.CUSTOM_FIELDS_CONFIG.value])

def get_field_labels(db: Session, project_id: int) -> Dict[str, str]:
    """항목 ID -> 라벨 (CSV 헤더용)"""
    values = _load_setting_values(db, project_id)
    fields = parse_fields(values[models.SettingKey.CUSTOM_FIELDS_CONFIG.value])
    return {field.id: field.label for field in fields}

def get_page_settings(db: Session, project_id: int) -> schemas.PageSettingsResponse:
    values = _load_setting_values(db, project_id)
    return schemas.PageSettingsResponse(
        title_text=values[models.SettingKey.TITLE_TEXT.value],
        title_font_size=values[models.SettingKey.TITLE_FONT_SIZE.value],
        custom_fields_enabled=values[models.SettingKey.CUSTOM_FIELDS_ENABLED.value] == "true",
        custom_fields=parse_fields(values[models.SettingKey.CUSTOM_FIELDS_CONFIG.value]),
    )

def _upsert_setting(db: Session, project_id: int, key: str, value: str):
    setting = db.query(models.PageSetting).filter(
        models.PageSetting.project_id == project_id,
        models.PageSetting.setting_key == key
    ).first()
    if setting:
        setting.setting_value = value
    else:
        db.add(models.PageSetting(project_id=project_id, setting_key=key, setting_value=value))
    db.commit()

def save_page_settings(db: Session, project_id: int, request: schemas.PageSettingsRequest) -> schemas.PageSettingsResponse:
    """
    네 개의 설정을 각각 독립적으로 저장합니다. (트랜잭션으로 묶지 않음)
    중간에 실패하면 앞서 저장된 설정은 그대로 남고 저장 실패 오류를 반환합니다.
    """
    font_size = request.title_font_size.strip()
    if not FONT_SIZE_PATTERN.fullmatch(font_size) or int(font_size) <= 0:
        raise ValidationException(ResponseCode.INVALID_FONT_SIZE)

    field_schema = CustomFieldSchema(request.custom_fields).normalize()

    new_values = {
        models.SettingKey.TITLE_TEXT.value: request.title_text.strip() or settings.DEFAULT_TITLE_TEXT,
        models.SettingKey.TITLE_FONT_SIZE.value: font_size,
        models.SettingKey.CUSTOM_FIELDS_ENABLED.value: "true" if request.custom_fields_enabled else "false",
        models.SettingKey.CUSTOM_FIELDS_CONFIG.value: field_schema.to_json(),
    }

    for key, value in new_values.items():
        with backend_call(db, f"save page setting '{key}' for project {project_id}", ResponseCode.FAILED_SAVE_SETTINGS):
            _upsert_setting(db, project_id, key, value)

    change_manager.notify(change_manager.PAGE_SETTINGS_TABLE, "UPDATE", project_id)
    return get_page_settings(db, project_id)
