from sqlalchemy.exc import OperationalError

from core import models
from function import page_setting_function
from conftest import submit, TestingSessionLocal

FIELDS = [
    {"id": "company", "label": "회사명", "type": "text", "required": True},
    {"id": "purpose", "label": "방문 목적", "type": "select", "required": False, "options": ["회의", "납품"]},
]


def _url(project):
    return f"/project/{project['projectId']}/page-setting"


def _save(client, project, headers, **overrides):
    body = {
        "titleText": "방문 차량 등록",
        "titleFontSize": "40",
        "customFieldsEnabled": True,
        "customFields": FIELDS,
    }
    body.update(overrides)
    return client.put(_url(project), json=body, headers=headers)


def test_save_and_get_page_settings(client, master_headers, project):
    response = _save(client, project, master_headers)
    assert response.status_code == 200

    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert data["titleText"] == "방문 차량 등록"
    assert data["titleFontSize"] == "40"
    assert data["customFieldsEnabled"] is True
    assert [field["id"] for field in data["customFields"]] == ["company", "purpose"]
    assert data["customFields"][1]["options"] == ["회의", "납품"]


def test_font_size_must_be_positive_integer(client, master_headers, project):
    for size in ["0", "-3", "abc", "12.5", "²", "1٢"]:
        response = _save(client, project, master_headers, titleFontSize=size)
        assert response.status_code == 400
        assert response.json()["status"] == "INVALID_FONT_SIZE"


def test_missing_rows_fall_back_to_defaults(client, master_headers, project):
    session = TestingSessionLocal()
    try:
        session.query(models.PageSetting).delete()
        session.commit()
    finally:
        session.close()

    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert data["titleText"] == "주차등록 시스템"
    assert data["titleFontSize"] == "36"
    assert data["customFields"] == []

    # 행이 없어도 저장 시 새로 생성됩니다.
    assert _save(client, project, master_headers).status_code == 200
    assert client.get(_url(project), headers=master_headers).json()["data"]["titleText"] == "방문 차량 등록"


def test_corrupted_config_degrades_to_empty(client, master_headers, project):
    session = TestingSessionLocal()
    try:
        session.query(models.PageSetting).filter(
            models.PageSetting.setting_key == models.SettingKey.CUSTOM_FIELDS_CONFIG.value
        ).update({models.PageSetting.setting_value: "{broken"})
        session.commit()
    finally:
        session.close()

    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert data["customFields"] == []


def test_save_failure_keeps_earlier_keys(client, master_headers, project, monkeypatch):
    original = page_setting_function._upsert_setting

    def failing_upsert(db, project_id, key, value):
        if key == models.SettingKey.CUSTOM_FIELDS_ENABLED.value:
            raise OperationalError("UPDATE page_settings", {}, Exception("connection lost"))
        original(db, project_id, key, value)

    monkeypatch.setattr(page_setting_function, "_upsert_setting", failing_upsert)
    response = _save(client, project, master_headers)
    assert response.status_code == 500
    assert response.json()["message"] == "설정 저장에 실패했습니다."

    monkeypatch.setattr(page_setting_function, "_upsert_setting", original)
    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert data["titleText"] == "방문 차량 등록"
    assert data["titleFontSize"] == "40"
    assert data["customFieldsEnabled"] is False


def test_submit_validates_enabled_custom_fields(client, master_headers, project):
    _save(client, project, master_headers)

    response = submit(client, project["slug"], "12가3456", {"purpose": "회의"})
    assert response.status_code == 400
    assert response.json()["message"] == "회사명을(를) 입력해주세요"

    response = submit(client, project["slug"], "12가3456", {"company": "ABC", "purpose": "관광"})
    assert response.status_code == 400

    response = submit(client, project["slug"], "12가3456", {"company": "ABC", "extra": "무시"})
    assert response.status_code == 200
    assert response.json()["data"]["customFields"] == {"company": "ABC", "purpose": ""}


def test_disabled_custom_fields_store_empty_map(client, master_headers, project):
    _save(client, project, master_headers, customFieldsEnabled=False)
    response = submit(client, project["slug"], "12가3456", {"company": "ABC"})
    assert response.status_code == 200
    assert response.json()["data"]["customFields"] == {}


def test_site_session_cannot_edit_settings(client, project, site_headers):
    response = _save(client, project, site_headers)
    assert response.status_code == 403
