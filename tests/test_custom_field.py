import json
import pytest

from core import schemas
from core.exceptions import ValidationException
from function.custom_field_function import CustomFieldSchema, parse_fields, CUSTOM_FIELDS_SCHEMA_VERSION


def test_add_field_generates_id():
    draft = CustomFieldSchema()
    field = draft.add_field("회사명", "text", required=True)
    assert field.id.startswith("field_")
    assert isinstance(field, schemas.TextField)
    assert draft.get_field(field.id).label == "회사명"


def test_add_field_unknown_type():
    with pytest.raises(ValidationException):
        CustomFieldSchema().add_field("항목", "date")


def test_changing_type_resets_options():
    draft = CustomFieldSchema()
    field = draft.add_field("방문 목적", "select")
    draft.add_option(field.id, "회의")
    draft.add_option(field.id, "납품")
    assert draft.get_field(field.id).options == ["회의", "납품"]

    text_field = draft.update_field(field.id, field_type="text")
    assert isinstance(text_field, schemas.TextField)
    assert not hasattr(text_field, "options")

    select_field = draft.update_field(field.id, field_type="select")
    assert isinstance(select_field, schemas.SelectField)
    assert select_field.options == []


def test_update_field_keeps_options_when_type_unchanged():
    draft = CustomFieldSchema()
    field = draft.add_field("방문 목적", "select")
    draft.add_option(field.id, "회의")
    updated = draft.update_field(field.id, label="목적", required=True)
    assert updated.label == "목적"
    assert updated.required is True
    assert updated.options == ["회의"]


def test_option_operations_require_select():
    draft = CustomFieldSchema()
    field = draft.add_field("연락처", "tel")
    with pytest.raises(ValidationException) as exc_info:
        draft.add_option(field.id, "x")
    assert exc_info.value.code == "NOT_SELECT_FIELD"


def test_update_and_remove_option():
    draft = CustomFieldSchema()
    field = draft.add_field("방문 목적", "select")
    draft.add_option(field.id, "회의")
    draft.add_option(field.id, "납품")
    draft.update_option(field.id, 0, "미팅")
    draft.remove_option(field.id, 1)
    assert draft.get_field(field.id).options == ["미팅"]

    with pytest.raises(ValidationException) as exc_info:
        draft.remove_option(field.id, 5)
    assert exc_info.value.code == "INVALID_OPTION"


def test_remove_field():
    draft = CustomFieldSchema()
    first = draft.add_field("회사명")
    second = draft.add_field("연락처", "tel")
    draft.remove_field(first.id)
    assert [field.id for field in draft.fields] == [second.id]
    with pytest.raises(ValidationException):
        draft.remove_field(first.id)


def test_normalize_trims_and_drops_blank_options():
    draft = CustomFieldSchema([
        schemas.SelectField(id="", label="  방문 목적 ", options=[" 회의 ", "", "   "]),
    ])
    draft.normalize()
    field = draft.fields[0]
    assert field.id.startswith("field_")
    assert field.label == "방문 목적"
    assert field.options == ["회의"]


def test_normalize_rejects_blank_label():
    draft = CustomFieldSchema([schemas.TextField(id="a", label="  ")])
    with pytest.raises(ValidationException):
        draft.normalize()


def test_json_round_trip_is_plain_array():
    draft = CustomFieldSchema()
    draft.add_field("회사명", "text", required=True)
    raw = draft.to_json()
    assert isinstance(json.loads(raw), list)
    assert "회사명" in raw

    restored = CustomFieldSchema.from_json(raw)
    assert restored.fields == draft.fields


def test_parse_fields_accepts_versioned_envelope():
    raw = json.dumps({
        "version": CUSTOM_FIELDS_SCHEMA_VERSION,
        "fields": [{"id": "phone", "label": "연락처", "type": "tel", "required": False}],
    })
    fields = parse_fields(raw)
    assert len(fields) == 1
    assert isinstance(fields[0], schemas.TelField)


@pytest.mark.parametrize("raw", ["not json", "{}", "123", '[{"id": "a", "label": "b", "type": "unknown"}]', None, ""])
def test_parse_fields_degrades_to_empty(raw):
    assert parse_fields(raw) == []


def test_validate_values_required_and_fill_missing():
    draft = CustomFieldSchema([
        schemas.TextField(id="company", label="회사명", required=True),
        schemas.TelField(id="phone", label="연락처"),
    ])
    with pytest.raises(ValidationException) as exc_info:
        draft.validate_values({"company": "   "})
    assert exc_info.value.message == "회사명을(를) 입력해주세요"

    cleaned = draft.validate_values({"company": " ABC ", "unknown": "x"})
    assert cleaned == {"company": "ABC", "phone": ""}


def test_validate_values_checks_types():
    draft = CustomFieldSchema([
        schemas.NumberField(id="count", label="인원"),
        schemas.EmailField(id="email", label="이메일"),
        schemas.SelectField(id="purpose", label="목적", options=["회의", "납품"]),
    ])
    assert draft.validate_values({"count": "3", "email": "a@b.com", "purpose": "회의"})["count"] == "3"

    for values in [{"count": "셋"}, {"count": "٣"}, {"email": "not-an-email"}, {"purpose": "관광"}]:
        with pytest.raises(ValidationException) as exc_info:
            draft.validate_values(values)
        assert exc_info.value.code == "INVALID_CUSTOM_FIELD_VALUE"
