"""Application-level endpoints and error envelope."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body


def test_api_info(client):
    body = client.get("/api").json()
    assert body["version"] == "1.0.0"
    assert body["endpoints"]["parts"] == "/api/parts"


def test_malformed_json_body(client, member_headers):
    response = client.post(
        "/api/vehicles",
        content=b"{not json",
        headers={**member_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Request body is not valid JSON"}


def test_unknown_field_is_named(client, member_headers):
    response = client.post(
        "/api/vehicles",
        json={"make": "Ford", "model": "GT", "year": 2020, "category": "GTE", "colour": "blue"},
        headers=member_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Unknown field: colour"
