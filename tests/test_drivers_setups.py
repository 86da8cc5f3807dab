"""Driver profiles and setup sheet ownership."""
import pytest


@pytest.fixture
def setup_body(vehicle, event):
    return {
        "vehicleId": vehicle.id,
        "eventId": event.id,
        "sessionType": "Qualifying",
        "tyreFrontLeft": "Soft",
        "tyrePressureFrontLeft": 26.5,
        "downforceLevel": "High",
        "brakeBias": 56.5,
        "driverFeedback": "Understeer in slow corners",
    }


class TestDrivers:
    def test_create_for_existing_user(self, client, member, member_headers):
        response = client.post(
            "/api/drivers",
            json={"userId": member.id, "licenseNumber": "FIA-77", "nationality": "British"},
            headers=member_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["licenseNumber"] == "FIA-77"
        assert data["user"]["email"] == member.email
        assert data["user"]["isActive"] is True

    def test_unknown_user(self, client, member_headers):
        response = client.post("/api/drivers", json={"userId": "nobody"}, headers=member_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "User not found."

    def test_one_profile_per_user(self, client, member, member_headers):
        client.post("/api/drivers", json={"userId": member.id}, headers=member_headers)
        response = client.post("/api/drivers", json={"userId": member.id}, headers=member_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "A driver profile already exists for this user."

    def test_update_and_clear_field(self, client, member, member_headers):
        created = client.post(
            "/api/drivers", json={"userId": member.id, "bio": "Karting champion"}, headers=member_headers
        ).json()["data"]
        response = client.put(
            f"/api/drivers/{created['id']}", json={"bio": None, "nationality": "Dutch"}, headers=member_headers
        )
        data = response.json()["data"]
        assert data["bio"] is None
        assert data["nationality"] == "Dutch"

    def test_profile_shows_on_me(self, client, member, member_headers):
        client.post("/api/drivers", json={"userId": member.id, "licenseNumber": "L1"}, headers=member_headers)
        me = client.get("/api/auth/me", headers=member_headers).json()["data"]
        assert me["driver"]["licenseNumber"] == "L1"


class TestSetupSheets:
    def test_create_records_creator(self, client, member, member_headers, setup_body):
        response = client.post("/api/setups", json=setup_body, headers=member_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["createdById"] == member.id
        assert data["createdBy"]["email"] == member.email
        assert data["vehicle"]["make"] == "Porsche"
        assert data["event"]["name"] == "Spa 6 Hours"
        assert data["tyrePressureFrontLeft"] == 26.5

    def test_invalid_downforce(self, client, member_headers, setup_body):
        response = client.post("/api/setups", json={**setup_body, "downforceLevel": "Max"}, headers=member_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid downforceLevel. Must be one of: Low, Medium, High"

    def test_missing_event(self, client, member_headers, setup_body):
        response = client.post("/api/setups", json={**setup_body, "eventId": "nope"}, headers=member_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Event not found"

    def test_only_creator_or_admin_may_update(self, client, make_user, headers_for, member_headers,
                                              admin_headers, setup_body):
        setup_id = client.post("/api/setups", json=setup_body, headers=member_headers).json()["data"]["id"]
        other_headers = headers_for(make_user())

        response = client.put(f"/api/setups/{setup_id}", json={"notes": "mine now"}, headers=other_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden. You can only update your own setup sheets."

        response = client.put(f"/api/setups/{setup_id}", json={"notes": "checked"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["notes"] == "checked"

    def test_other_user_cannot_delete(self, client, make_user, headers_for, member_headers, setup_body):
        setup_id = client.post("/api/setups", json=setup_body, headers=member_headers).json()["data"]["id"]
        response = client.delete(f"/api/setups/{setup_id}", headers=headers_for(make_user()))
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden. You can only delete your own setup sheets."

    def test_filter_by_event(self, client, member_headers, setup_body, event):
        client.post("/api/setups", json=setup_body, headers=member_headers)
        assert client.get(f"/api/setups?eventId={event.id}", headers=member_headers).json()["count"] == 1
        assert client.get("/api/setups?eventId=other", headers=member_headers).json()["count"] == 0
