import io
from PIL import Image


def _url(project):
    return f"/project/{project['projectId']}/qr-code"


def test_create_qr_code_with_defaults(client, master_headers, project):
    response = client.post(_url(project), json={}, headers=master_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["url"] == "https://parking.mnccom.com/test-site"
    assert data["size"] == 256
    assert data["fgColor"] == "#000000"
    assert data["bgColor"] == "#ffffff"


def test_create_qr_code_validation(client, master_headers, project):
    for body in [{"fgColor": "red"}, {"bgColor": "#12345"}, {"fgColor": "#000000\n"}, {"size": 32}, {"size": 4096}]:
        response = client.post(_url(project), json=body, headers=master_headers)
        assert response.status_code == 400


def test_edit_qr_code_keeps_url(client, master_headers, project):
    created = client.post(_url(project), json={}, headers=master_headers).json()["data"]
    response = client.put(
        f"{_url(project)}/{created['qrCodeId']}/edit",
        json={"size": 512, "fgColor": "#1A2B3C"},
        headers=master_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["size"] == 512
    assert data["fgColor"] == "#1A2B3C"
    assert data["bgColor"] == "#ffffff"
    assert data["url"] == created["url"]


def test_download_qr_code_png(client, master_headers, project):
    created = client.post(_url(project), json={"size": 300, "fgColor": "#ff0000"}, headers=master_headers).json()["data"]
    response = client.get(f"{_url(project)}/{created['qrCodeId']}/image", headers=master_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert 'filename="qr-test-site.png"' in response.headers["content-disposition"]

    image = Image.open(io.BytesIO(response.content))
    assert image.size == (300, 300)


def test_list_and_remove_qr_codes(client, master_headers, project):
    first = client.post(_url(project), json={}, headers=master_headers).json()["data"]
    second = client.post(_url(project), json={"size": 128}, headers=master_headers).json()["data"]

    data = client.get(_url(project), headers=master_headers).json()["data"]
    assert [item["qrCodeId"] for item in data] == [second["qrCodeId"], first["qrCodeId"]]

    assert client.delete(f"{_url(project)}/{first['qrCodeId']}", headers=master_headers).status_code == 200
    assert client.get(f"{_url(project)}/{first['qrCodeId']}/image", headers=master_headers).status_code == 404


def test_qr_code_requires_master(client, project, site_headers):
    assert client.get(_url(project), headers=site_headers).status_code == 403
