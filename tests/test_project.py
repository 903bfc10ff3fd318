from core import models
from conftest import submit, count_rows


def test_create_project_normalizes_slug(client, master_headers):
    response = client.post("/project", json={
        "projectName": " 강남 현장 ",
        "slug": "  Gangnam-01 ",
        "description": "",
        "password": "   ",
    }, headers=master_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["projectName"] == "강남 현장"
    assert data["slug"] == "gangnam-01"
    assert data["description"] is None
    assert data["hasPassword"] is False


def test_create_project_seeds_page_settings(client, master_headers, project):
    assert count_rows(models.PageSetting) == 4
    response = client.get(f"/project/{project['projectId']}/page-setting", headers=master_headers)
    data = response.json()["data"]
    assert data["titleText"] == "주차등록 시스템"
    assert data["titleFontSize"] == "36"
    assert data["customFieldsEnabled"] is False
    assert data["customFields"] == []


def test_create_project_validation(client, master_headers, project):
    response = client.post("/project", json={"projectName": "", "slug": "abc"}, headers=master_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "프로젝트 이름과 URL 주소를 모두 입력해주세요."

    response = client.post("/project", json={"projectName": "현장", "slug": "현장_1"}, headers=master_headers)
    assert response.status_code == 400
    assert response.json()["status"] == "INVALID_SLUG"

    response = client.post("/project", json={"projectName": "현장", "slug": "TEST-SITE"}, headers=master_headers)
    assert response.status_code == 400
    assert response.json()["status"] == "DUPLICATED_SLUG"


def test_list_and_get_projects(client, master_headers, project):
    client.post("/project", json={"projectName": "두번째", "slug": "second"}, headers=master_headers)
    projects = client.get("/project", headers=master_headers).json()["data"]
    assert [item["slug"] for item in projects] == ["second", "test-site"]

    response = client.get(f"/project/{project['projectId']}", headers=master_headers)
    assert response.json()["data"]["slug"] == "test-site"
    assert "password" not in response.json()["data"]

    assert client.get("/project/999", headers=master_headers).status_code == 404


def test_public_project_list_and_page(client, project):
    projects = client.get("/public/project").json()["data"]
    assert projects[0]["hasPassword"] is True
    assert "password" not in projects[0]

    response = client.get(f"/public/{project['slug']}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["project"]["projectName"] == "테스트 현장"
    assert data["pageSettings"]["titleText"] == "주차등록 시스템"

    assert client.get("/public/unknown-site").status_code == 404


def test_edit_project_keeps_slug(client, master_headers, project):
    response = client.put(f"/project/{project['projectId']}/edit", json={
        "projectName": "이름 변경",
        "password": "",
    }, headers=master_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["projectName"] == "이름 변경"
    assert data["slug"] == "test-site"
    assert data["hasPassword"] is False
    assert data["description"] == "테스트용 프로젝트"


def test_remove_project_cascades(client, master_headers, project, parking_types, site_headers):
    submit(client, project["slug"], "12가3456")
    client.post(f"/project/{project['projectId']}/qr-code", json={}, headers=master_headers)

    response = client.delete(f"/project/{project['projectId']}", headers=master_headers)
    assert response.status_code == 200

    for model in (models.Project, models.ParkingType, models.Application, models.PageSetting, models.QrCode):
        assert count_rows(model) == 0
    # 현장 세션도 함께 삭제되어 더 이상 사용할 수 없습니다.
    response = client.get(f"/project/{project['projectId']}/application", headers=site_headers)
    assert response.status_code == 401
