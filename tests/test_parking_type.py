def _url(project):
    return f"/project/{project['projectId']}/parking-type"


def test_add_parking_type_appends_sort_order(client, master_headers, project, parking_types):
    assert [parking_types[name]["sortOrder"] for name in ("2시간권", "번호없음", "거부")] == [1, 2, 3]

    response = client.post(_url(project), json={"parkingTypeName": "  종일권 ", "hours": 24}, headers=master_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["parkingTypeName"] == "종일권"
    assert data["sortOrder"] == 4


def test_add_parking_type_validation(client, master_headers, project):
    for body in [{"parkingTypeName": " ", "hours": 1}, {"parkingTypeName": "1시간권", "hours": -1}]:
        response = client.post(_url(project), json=body, headers=master_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "모든 필드를 올바르게 입력해주세요."


def test_reorder_parking_types(client, master_headers, project, parking_types):
    ids = [parking_types[name]["parkingTypeId"] for name in ("거부", "2시간권", "번호없음")]
    response = client.put(f"{_url(project)}/reorder", json={"parkingTypeIdList": ids}, headers=master_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert [item["parkingTypeId"] for item in data] == ids
    assert [item["sortOrder"] for item in data] == [1, 2, 3]


def test_reorder_requires_exact_id_set(client, master_headers, project, parking_types):
    ids = [item["parkingTypeId"] for item in parking_types.values()]
    for invalid in [ids[:2], ids + [999], [ids[0], ids[0], ids[1]]]:
        response = client.put(f"{_url(project)}/reorder", json={"parkingTypeIdList": invalid}, headers=master_headers)
        assert response.status_code == 400

    # 실패 후에도 이전 순서가 유지됩니다.
    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert [item["parkingTypeName"] for item in data] == ["2시간권", "번호없음", "거부"]


def test_remove_parking_type(client, master_headers, project, parking_types):
    type_id = parking_types["거부"]["parkingTypeId"]
    assert client.delete(f"{_url(project)}/{type_id}", headers=master_headers).status_code == 200
    assert client.delete(f"{_url(project)}/{type_id}", headers=master_headers).status_code == 404

    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert [item["parkingTypeName"] for item in data] == ["2시간권", "번호없음"]


def test_parking_type_for_unknown_project(client, master_headers):
    response = client.post("/project/999/parking-type", json={"parkingTypeName": "1시간권", "hours": 1}, headers=master_headers)
    assert response.status_code == 404
