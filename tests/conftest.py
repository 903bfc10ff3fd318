import os

# 설정 객체가 import 시점에 환경 변수를 읽으므로 앱 import 전에 지정합니다.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from main import app
from create_master import create_master
from router import change_ws
from service.change_manager import manager

MASTER_EMAIL = "master@example.com"
MASTER_PASSWORD = "master1234"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database(monkeypatch):
    Base.metadata.create_all(bind=engine)
    # WebSocket 라우터는 의존성 주입 없이 세션을 직접 엽니다.
    monkeypatch.setattr(change_ws, "SessionLocal", TestingSessionLocal)
    yield
    Base.metadata.drop_all(bind=engine)
    manager.listeners.clear()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def master_token(client):
    session = TestingSessionLocal()
    try:
        create_master(session, MASTER_EMAIL, MASTER_PASSWORD, "관리자", "본사", "팀장")
    finally:
        session.close()
    response = client.post("/login/master", json={"email": MASTER_EMAIL, "password": MASTER_PASSWORD})
    assert response.status_code == 200
    return response.json()["data"]["accessToken"]


@pytest.fixture
def master_headers(master_token):
    return auth_header(master_token)


@pytest.fixture
def project(client, master_headers):
    response = client.post("/project", json={
        "projectName": "테스트 현장",
        "slug": "test-site",
        "description": "테스트용 프로젝트",
        "password": "site-pass",
    }, headers=master_headers)
    assert response.status_code == 200
    return response.json()["data"]


@pytest.fixture
def parking_types(client, master_headers, project):
    """일반 주차권 1개와 예약 이름 주차권 2개"""
    created = {}
    for name, hours in [("2시간권", 2), ("번호없음", 0), ("거부", 0)]:
        response = client.post(
            f"/project/{project['projectId']}/parking-type",
            json={"parkingTypeName": name, "hours": hours},
            headers=master_headers
        )
        assert response.status_code == 200
        created[name] = response.json()["data"]
    return created


@pytest.fixture
def site_headers(client, project):
    response = client.post("/login/site", json={"projectId": project["projectId"], "password": "site-pass"})
    assert response.status_code == 200
    return auth_header(response.json()["data"]["accessToken"])


def submit(client, slug: str, car_number: str, custom_fields: dict = None):
    return client.post(f"/public/{slug}/application", json={
        "carNumber": car_number,
        "customFields": custom_fields or {},
    })


def count_rows(model) -> int:
    session = TestingSessionLocal()
    try:
        return session.query(model).count()
    finally:
        session.close()


