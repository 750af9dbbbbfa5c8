"""
Integration tests for the page data endpoints
"""


def test_home(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/interest-points", json_body=raw_points)

    resp = client.get("/views/home")

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["center"] == [-30.885, -55.51]
    assert body["zoom"] == 15
    assert [m["id"] for m in body["markers"]] == ["p1", "p2", "p4"]
    assert body["markers"][0]["imageUrl"] == "/api/files/p1/front.jpg"
    assert body["icons"]["default"]["iconUrl"] == "/leaflet/marker-icon.png"


def test_map_grouped_and_flat(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/interest-points", json_body=raw_points)

    grouped = client.get("/views/map").json()
    assert grouped["total"] == 3
    assert [g["size"] for g in grouped["groups"]] == [2, 1]
    assert grouped["groups"][0]["isCluster"] is True
    assert grouped["groups"][0]["key"] == "-30.88500|-55.51000"

    flat = client.get("/views/map", params={"grouped": "false"}).json()
    assert [g["size"] for g in flat["groups"]] == [1, 1, 1]


def test_points_list_filters(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/interest-points", json_body=raw_points)

    body = client.get("/views/points", params={"search": "praça", "neighborhood": "Centro"}).json()

    assert body["total"] == 3
    assert body["shown"] == 1
    assert body["points"][0]["objectId"] == "p2"
    assert body["points"][0]["type"]["id"] == "t1"
    assert body["categories"] == [{"id": "t1", "name": "Praça"}, {"id": "t2", "name": "Monumento"}]
    assert body["neighborhoods"] == ["Centro", "Zona Norte"]

    by_type = client.get("/views/points", params={"typeId": "t2"}).json()
    assert [p["objectId"] for p in by_type["points"]] == ["p4"]


def test_backend_failure_is_page_level_error(client, fake_backend):
    fake_backend.add("GET", "/api/interest-points", status=500, text="boom")

    resp = client.get("/views/points")

    assert resp.status_code == 500
    assert resp.json()["error"] == "boom"


def test_point_detail(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/interest-points/p2", json_body=raw_points[1])

    body = client.get("/views/points/p2").json()

    assert body["point"]["name"] == "Praça XV"
    assert body["point"]["lat"] == -30.8901
    assert body["categoryName"] == "Praça"
    assert body["previewUrl"] == "https://images.example/p2.jpg"
    assert body["zoom"] == 16
    assert body["icons"]["pin"]["iconSize"] == [32, 32]


def test_point_detail_unknown_and_invalid(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/interest-points/p3", json_body=raw_points[2])

    invalid = client.get("/views/points/p3")
    assert invalid.status_code == 502
    assert invalid.json()["error_code"] == "INVALID_POINT"

    missing = client.get("/views/points/zz")
    assert missing.status_code == 404


def test_point_children(client, fake_backend):
    fake_backend.add(
        "GET",
        "/api/interest-points/parent/p1/with-depth",
        json_body=[{"objectId": "c1", "name": "Placa", "lat": "-30,1"}, {"name": "no id"}],
    )

    body = client.get("/views/points/p1/children").json()
    assert [c["objectId"] for c in body] == ["c1"]
    assert body[0]["lat"] == -30.1


def test_new_point_form_options(client, fake_backend, raw_points):
    fake_backend.add("GET", "/api/types", json_body=[{"id": "t1", "name": "Praça"}])
    fake_backend.add("GET", "/api/interest-points", json_body=raw_points)

    body = client.get("/views/points/new").json()

    assert body == {
        "categories": [{"id": "t1", "name": "Praça"}],
        "neighborhoods": ["Centro", "Zona Norte"],
    }


def test_submit_point_with_images(client, fake_backend):
    fake_backend.add("POST", "/api/interest-points", json_body={"objectId": "n1", "name": "Ponte"})
    fake_backend.add("POST", "/api/images/upload-multiple", json_body={"ok": True})

    resp = client.post(
        "/views/points",
        data={"name": "Ponte", "lat": "-30,88", "lon": "-55.5", "typeId": "t1", "description": ""},
        files=[("images", ("ponte.jpg", b"jpeg", "image/jpeg"))],
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["objectId"] == "n1"
    assert body["redirect"] == "/pontos/n1"
    assert body["imagesUploaded"] is True

    payload = fake_backend.last_json("POST", "/api/interest-points")
    assert payload["lat"] == -30.88
    assert payload["typeId"] == "t1"
    assert payload["description"] is None
    upload = fake_backend.last("POST", "/api/images/upload-multiple").content
    assert b'name="files"; filename="ponte.jpg"' in upload


def test_submit_point_without_images(client, fake_backend):
    fake_backend.add("POST", "/api/interest-points", json_body={"objectId": "n2"})

    resp = client.post("/views/points", data={"name": "Ponte", "lat": "1", "lon": "2"})

    assert resp.status_code == 200, resp.text
    assert resp.json()["imagesUploaded"] is None
    assert all(r.url.path != "/api/images/upload-multiple" for r in fake_backend.requests)


def test_submit_invalid_point(client, fake_backend):
    resp = client.post("/views/points", data={"name": "", "lat": "1", "lon": "2"})

    assert resp.status_code == 422
    assert resp.json()["error"] == "Point name is required."
    assert fake_backend.requests == []
