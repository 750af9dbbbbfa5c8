def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["message"] == "Welcome to Uncovering History"


def test_health_reports_backend_configuration(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] in {"healthy", "degraded"}
    assert body["details"]["backend"]["status"] in {"configured", "not_configured"}
    assert "total_errors" in body["error_statistics"]


def test_request_id_round_trip(client):
    resp = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert client.get("/").headers["X-Request-ID"]
