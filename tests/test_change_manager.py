import pytest
from starlette.websockets import WebSocketDisconnect

from core import schemas
from service.change_manager import ChangeManager, manager, APPLICATIONS_TABLE
from conftest import submit


class RecordingListener:
    def __init__(self):
        self.events = []

    def on_external_change(self, table_name, event):
        self.events.append((table_name, event))


class BrokenListener:
    def on_external_change(self, table_name, event):
        raise RuntimeError("listener failure")


def _event(project_id=1):
    return schemas.ChangeEvent(table=APPLICATIONS_TABLE, event="INSERT", project_id=project_id, row_ids=[10])


def test_publish_reaches_only_project_listeners():
    hub = ChangeManager()
    listener = RecordingListener()
    other = RecordingListener()
    hub.subscribe(1, listener)
    hub.subscribe(2, other)

    hub.publish(_event(1))
    assert [table for table, _ in listener.events] == [APPLICATIONS_TABLE]
    assert listener.events[0][1].row_ids == [10]
    assert other.events == []


def test_unsubscribe_removes_empty_project():
    hub = ChangeManager()
    listener = RecordingListener()
    hub.subscribe(1, listener)
    assert hub.get_listener_count(1) == 1

    hub.unsubscribe(1, listener)
    assert hub.get_listener_count(1) == 0
    assert 1 not in hub.listeners
    hub.publish(_event(1))
    assert listener.events == []


def test_listener_error_does_not_stop_others():
    hub = ChangeManager()
    listener = RecordingListener()
    hub.subscribe(1, BrokenListener())
    hub.subscribe(1, listener)

    hub.publish(_event(1))
    assert len(listener.events) == 1


def test_mutations_publish_events(client, project, master_headers, parking_types):
    listener = RecordingListener()
    manager.subscribe(project["projectId"], listener)

    created = submit(client, project["slug"], "12가3456").json()["data"]
    client.put(
        f"/project/{project['projectId']}/application/{created['applicationId']}/assign",
        json={"parkingTypeId": parking_types["2시간권"]["parkingTypeId"]},
        headers=master_headers
    )
    events = [(event.table, event.event, event.row_ids) for _, event in listener.events]
    assert events == [
        (APPLICATIONS_TABLE, "INSERT", [created["applicationId"]]),
        (APPLICATIONS_TABLE, "UPDATE", [created["applicationId"]]),
    ]


def test_failed_mutation_publishes_nothing(client, project):
    listener = RecordingListener()
    manager.subscribe(project["projectId"], listener)
    submit(client, project["slug"], "잘못된번호")
    assert listener.events == []


def test_websocket_forwards_events(client, project, master_token):
    with client.websocket_connect(f"/ws/changes/{project['projectId']}?token={master_token}") as websocket:
        submit(client, project["slug"], "12가3456")
        message = websocket.receive_json()
        assert message["table"] == APPLICATIONS_TABLE
        assert message["event"] == "INSERT"
        assert message["projectId"] == project["projectId"]


def test_websocket_rejects_other_project_site_session(client, master_headers, project, site_headers):
    other = client.post("/project", json={"projectName": "다른 현장", "slug": "other-site"}, headers=master_headers).json()["data"]
    token = site_headers["Authorization"].split(" ")[1]
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/ws/changes/{other['projectId']}?token={token}") as websocket:
            websocket.receive_json()


def test_websocket_rejects_invalid_token(client, project):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/ws/changes/{project['projectId']}?token=invalid") as websocket:
            websocket.receive_json()


def test_websocket_unsubscribes_after_disconnect(client, project, master_token):
    project_id = project["projectId"]
    with client.websocket_connect(f"/ws/changes/{project_id}?token={master_token}") as websocket:
        submit(client, project["slug"], "12가3456")
        websocket.receive_json()
        assert manager.get_listener_count(project_id) == 1
    assert manager.get_listener_count(project_id) == 0
