"""Vehicle CRUD and cascade behaviour."""
from motorsports.models.lap_time import LapTime
from motorsports.models.part import Part
from motorsports.models.setup_sheet import SetupSheet
from motorsports.models.driver import Driver

NEW_VEHICLE = {"make": "Ferrari", "model": "296 GT3", "year": 2024, "category": "GT3", "vin": "ZFF123"}


def test_create_and_get(client, member_headers):
    response = client.post("/api/vehicles", json=NEW_VEHICLE, headers=member_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Vehicle created successfully"
    vehicle_id = body["data"]["id"]

    fetched = client.get(f"/api/vehicles/{vehicle_id}", headers=member_headers).json()["data"]
    assert fetched["make"] == "Ferrari"
    assert fetched["vin"] == "ZFF123"
    assert fetched["notes"] is None


def test_missing_required_field(client, member_headers):
    body = {k: v for k, v in NEW_VEHICLE.items() if k != "category"}
    response = client.post("/api/vehicles", json=body, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: category"


def test_blank_required_fields(client, member_headers):
    body = {**NEW_VEHICLE, "make": "", "model": "  ", "category": ""}
    response = client.post("/api/vehicles", json=body, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["error"] == (
        "Missing required field: make; Missing required field: model; Missing required field: category"
    )


def test_update_cannot_blank_make(client, member_headers, vehicle):
    response = client.put(f"/api/vehicles/{vehicle.id}", json={"make": ""}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: make"


def test_year_upper_bound(client, member_headers):
    response = client.post("/api/vehicles", json={**NEW_VEHICLE, "year": 3000}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid year")


def test_duplicate_vin(client, member_headers):
    client.post("/api/vehicles", json=NEW_VEHICLE, headers=member_headers)
    response = client.post("/api/vehicles", json=NEW_VEHICLE, headers=member_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "A vehicle with this VIN already exists"


def test_blank_vin_is_not_set(client, member_headers):
    first = client.post("/api/vehicles", json={**NEW_VEHICLE, "vin": ""}, headers=member_headers)
    second = client.post("/api/vehicles", json={**NEW_VEHICLE, "vin": ""}, headers=member_headers)
    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["data"]["vin"] is None
    assert second.json()["data"]["vin"] is None


def test_update_to_taken_vin(client, member_headers, vehicle):
    client.post("/api/vehicles", json=NEW_VEHICLE, headers=member_headers)
    response = client.put(f"/api/vehicles/{vehicle.id}", json={"vin": "ZFF123"}, headers=member_headers)
    assert response.status_code == 409


def test_update(client, member_headers, vehicle):
    response = client.put(
        f"/api/vehicles/{vehicle.id}", json={"number": "92", "notes": "New livery"}, headers=member_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["number"] == "92"
    assert data["make"] == "Porsche"


def test_not_found(client, viewer_headers):
    response = client.get("/api/vehicles/does-not-exist", headers=viewer_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Vehicle not found"}


def test_delete_cascades_and_unlinks_parts(client, db, member, member_headers, vehicle, event):
    driver = Driver(user_id=member.id)
    db.add(driver)
    db.commit()
    vehicle_id = vehicle.id
    db.add_all([
        SetupSheet(vehicle_id=vehicle_id, event_id=event.id, created_by_id=member.id, session_type="Race"),
        LapTime(driver_id=driver.id, vehicle_id=vehicle_id, event_id=event.id,
                lap_number=1, lap_time_ms=90000, session_type="Race"),
        Part(name="Brake disc", category="Brakes", quantity=4, vehicle_id=vehicle_id),
    ])
    db.commit()

    response = client.delete(f"/api/vehicles/{vehicle_id}", headers=member_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Vehicle deleted successfully"}

    db.expire_all()
    assert db.query(SetupSheet).count() == 0
    assert db.query(LapTime).count() == 0
    part = db.query(Part).one()
    assert part.vehicle_id is None
