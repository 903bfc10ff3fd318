# app/function/custom_field_function.py
import json
import logging
import re
import uuid
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from core import schemas
from core.constants import ResponseCode
from core.exceptions import ValidationException

# 저장 형식은 항목 설명 배열(JSON array)이며, 버전 정보가 담긴 객체 형태도 읽을 수 있습니다.
CUSTOM_FIELDS_SCHEMA_VERSION = 1

FIELD_TYPES = ("text", "number", "tel", "email", "select")

_field_list_adapter = TypeAdapter(List[schemas.CustomField])

_FIELD_CLASSES = {
    "text": schemas.TextField,
    "number": schemas.NumberField,
    "tel": schemas.TelField,
    "email": schemas.EmailField,
    "select": schemas.SelectField,
}

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
NUMBER_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")
TEL_PATTERN = re.compile(r"[0-9+\-() ]+")


# =================================================================
# 직렬화 / 역직렬화
# =================================================================

def parse_fields(raw: Optional[str]) -> List[schemas.CustomField]:
    """저장된 설정 문자열을 항목 목록으로 변환합니다. 형식이 잘못되면 빈 목록을 반환합니다."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if isinstance(data, dict):
            data = data.get("fields", [])
        if not isinstance(data, list):
            raise ValueError("custom_fields_config is not a list")
        return _field_list_adapter.validate_python(data)
    except (ValueError, ValidationError) as e:
        logging.warning(f"Invalid custom_fields_config, falling back to empty list: {e}")
        return []

def dump_fields(fields: List[schemas.CustomField]) -> str:
    return json.dumps([field.model_dump() for field in fields], ensure_ascii=False)


# =================================================================
# 항목 편집 (저장 전 초안 상태)
# =================================================================

def _new_field_id() -> str:
    return f"field_{uuid.uuid4().hex[:8]}"

def _build_field(field_type: str, **attrs) -> schemas.CustomField:
    field_class = _FIELD_CLASSES.get(field_type)
    if field_class is None:
        raise ValidationException(ResponseCode.INVALID_CUSTOM_FIELD)
    if field_class is not schemas.SelectField:
        attrs.pop("options", None)
    return field_class(**attrs)


class CustomFieldSchema:
    """신청 양식 추가 항목 목록의 편집용 초안"""

    def __init__(self, fields: Optional[List[schemas.CustomField]] = None):
        self.fields: List[schemas.CustomField] = list(fields or [])

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "CustomFieldSchema":
        return cls(parse_fields(raw))

    def to_json(self) -> str:
        return dump_fields(self.fields)

    def _index_of(self, field_id: str) -> int:
        for index, field in enumerate(self.fields):
            if field.id == field_id:
                return index
        raise ValidationException(ResponseCode.INVALID_CUSTOM_FIELD)

    def get_field(self, field_id: str) -> schemas.CustomField:
        return self.fields[self._index_of(field_id)]

    def add_field(self, label: str = "", field_type: str = "text", required: bool = False) -> schemas.CustomField:
        field = _build_field(field_type, id=_new_field_id(), label=label, required=required)
        self.fields.append(field)
        return field

    def remove_field(self, field_id: str):
        del self.fields[self._index_of(field_id)]

    def update_field(self, field_id: str, label: Optional[str] = None, field_type: Optional[str] = None,
                     required: Optional[bool] = None) -> schemas.CustomField:
        index = self._index_of(field_id)
        current = self.fields[index]
        attrs = current.model_dump()
        if label is not None:
            attrs["label"] = label
        if required is not None:
            attrs["required"] = required
        new_type = field_type or current.type
        if new_type != current.type:
            # select 이외의 타입으로 바뀌면 옵션은 버려지고, select로 바뀌면 빈 목록으로 시작합니다.
            attrs["options"] = []
        attrs.pop("type", None)
        updated = _build_field(new_type, **attrs)
        self.fields[index] = updated
        return updated

    def _select_field(self, field_id: str) -> schemas.SelectField:
        field = self.get_field(field_id)
        if not isinstance(field, schemas.SelectField):
            raise ValidationException(ResponseCode.NOT_SELECT_FIELD)
        return field

    def add_option(self, field_id: str, value: str = ""):
        self._select_field(field_id).options.append(value)

    def update_option(self, field_id: str, option_index: int, value: str):
        options = self._select_field(field_id).options
        if not 0 <= option_index < len(options):
            raise ValidationException(ResponseCode.INVALID_OPTION)
        options[option_index] = value

    def remove_option(self, field_id: str, option_index: int):
        options = self._select_field(field_id).options
        if not 0 <= option_index < len(options):
            raise ValidationException(ResponseCode.INVALID_OPTION)
        del options[option_index]

    def normalize(self) -> "CustomFieldSchema":
        """저장 직전 정리: 라벨/옵션 공백 제거, 빈 옵션 제거, 빈 ID 채우기"""
        normalized = []
        for field in self.fields:
            attrs = field.model_dump()
            attrs["id"] = (attrs.get("id") or "").strip() or _new_field_id()
            attrs["label"] = attrs["label"].strip()
            if not attrs["label"]:
                raise ValidationException(ResponseCode.INVALID_CUSTOM_FIELD, message="항목 이름을 입력해주세요.")
            if "options" in attrs:
                attrs["options"] = [option.strip() for option in attrs["options"] if option.strip()]
            field_type = attrs.pop("type")
            normalized.append(_build_field(field_type, **attrs))
        ids = [field.id for field in normalized]
        if len(ids) != len(set(ids)):
            raise ValidationException(ResponseCode.INVALID_CUSTOM_FIELD, message="항목 ID가 중복되었습니다.")
        self.fields = normalized
        return self

    def validate_values(self, values: Dict[str, str]) -> Dict[str, str]:
        """
        방문자가 입력한 값을 검증하고 저장할 값을 반환합니다.
        설정된 항목만 저장하며, 입력하지 않은 항목은 빈 문자열로 채웁니다.
        """
        cleaned: Dict[str, str] = {}
        for field in self.fields:
            value = (values.get(field.id) or "").strip()
            if field.required and not value:
                raise ValidationException(
                    ResponseCode.MISSING_REQUIRED_FIELD,
                    data={"fieldId": field.id},
                    message=f"{field.label}을(를) 입력해주세요"
                )
            if value:
                _check_value_type(field, value)
            cleaned[field.id] = value
        return cleaned


def _check_value_type(field: schemas.CustomField, value: str):
    if isinstance(field, schemas.NumberField):
        valid = bool(NUMBER_PATTERN.fullmatch(value))
    elif isinstance(field, schemas.EmailField):
        valid = bool(EMAIL_PATTERN.fullmatch(value))
    elif isinstance(field, schemas.TelField):
        valid = bool(TEL_PATTERN.fullmatch(value))
    elif isinstance(field, schemas.SelectField):
        valid = not field.options or value in field.options
    else:
        valid = True
    if not valid:
        raise ValidationException(
            ResponseCode.INVALID_CUSTOM_FIELD_VALUE,
            data={"fieldId": field.id},
            message=f"{field.label}의 형식이 올바르지 않습니다"
        )
