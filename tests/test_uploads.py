"""Presign, confirm, list, download and delete of file uploads."""
import re

import pytest
from botocore.exceptions import ClientError

from motorsports.services.storage import ObjectStorage, build_file_key, sanitize_file_name


class TestFileKeys:
    def test_sanitize_replaces_and_collapses(self):
        assert sanitize_file_name("pit stop (final) #2.jpg") == "pit_stop_final_2.jpg"

    def test_sanitize_keeps_safe_characters(self):
        assert sanitize_file_name("Setup-v2_final.PDF") == "Setup-v2_final.PDF"

    def test_sanitize_truncates(self):
        assert len(sanitize_file_name("a" * 500 + ".png")) == 200

    def test_key_layout(self):
        key = build_file_key("vehicle", "v-1", "photo", "front wing.jpg")
        assert re.fullmatch(r"vehicles/v-1/photos/[0-9a-f-]{36}_front_wing\.jpg", key)


class TestPublicUrl:
    def test_default_aws_url(self, storage):
        assert storage.public_url("a/b.jpg") == "https://test-bucket.s3.eu-west-2.amazonaws.com/a/b.jpg"

    def test_configured_base(self, settings, storage_client):
        custom = settings.model_copy(update={"S3_PUBLIC_BASE_URL": "https://cdn.team.example/"})
        assert ObjectStorage(custom, client=storage_client).public_url("a/b.jpg") == "https://cdn.team.example/a/b.jpg"


def _presign_body(entity_id, **overrides):
    body = {
        "entityType": "vehicle",
        "entityId": entity_id,
        "fileName": "car front.jpg",
        "fileType": "image/jpeg",
        "category": "photo",
    }
    body.update(overrides)
    return body


def _confirm_body(entity_id, file_key, **overrides):
    body = {
        "fileKey": file_key,
        "entityType": "vehicle",
        "entityId": entity_id,
        "fileName": "car front.jpg",
        "mimeType": "image/jpeg",
        "category": "photo",
        "sizeBytes": 204800,
    }
    body.update(overrides)
    return body


@pytest.fixture
def uploaded(client, member_headers, vehicle):
    presign = client.post("/api/uploads/presign", json=_presign_body(vehicle.id), headers=member_headers)
    file_key = presign.json()["data"]["fileKey"]
    confirm = client.post("/api/uploads/confirm", json=_confirm_body(vehicle.id, file_key), headers=member_headers)
    return confirm.json()["data"]


class TestUploadRoutes:
    def test_presign(self, client, member_headers, vehicle, storage_client):
        response = client.post("/api/uploads/presign", json=_presign_body(vehicle.id), headers=member_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["fileKey"].startswith(f"vehicles/{vehicle.id}/photos/")
        assert data["fileKey"].endswith("_car_front.jpg")
        assert data["uploadUrl"].startswith("https://signed.example/put_object/")
        assert data["publicUrl"] == f"https://test-bucket.s3.eu-west-2.amazonaws.com/{data['fileKey']}"
        assert data["expiresIn"] == 3600

        storage_client.generate_presigned_url.assert_called_once()
        params = storage_client.generate_presigned_url.call_args.kwargs["Params"]
        assert params["ContentType"] == "image/jpeg"
        assert params["Bucket"] == "test-bucket"

    def test_presign_unknown_event(self, client, member_headers):
        response = client.post(
            "/api/uploads/presign",
            json=_presign_body("missing", entityType="event", fileType="application/pdf", category="document"),
            headers=member_headers,
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Event not found."

    def test_presign_mime_mismatch(self, client, member_headers, vehicle):
        response = client.post(
            "/api/uploads/presign", json=_presign_body(vehicle.id, fileType="text/csv"), headers=member_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == 'For category "photo", only image MIME types are accepted.'

    def test_viewer_cannot_presign(self, client, viewer_headers, vehicle):
        response = client.post("/api/uploads/presign", json=_presign_body(vehicle.id), headers=viewer_headers)
        assert response.status_code == 403

    def test_confirm_records_metadata(self, uploaded, member, vehicle):
        assert uploaded["uploadedById"] == member.id
        assert uploaded["vehicleId"] == vehicle.id
        assert uploaded["eventId"] is None
        assert uploaded["sizeBytes"] == 204800
        assert uploaded["fileUrl"].endswith(uploaded["fileKey"])

    def test_confirm_revalidates(self, client, member_headers, vehicle):
        response = client.post(
            "/api/uploads/confirm",
            json=_confirm_body(vehicle.id, f"vehicles/{vehicle.id}/photos/y.exe", mimeType="application/x-msdownload"),
            headers=member_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Unsupported file type."

    def test_confirm_rejects_key_of_another_entity(self, client, member_headers, vehicle, event, storage_client):
        foreign_key = f"events/{event.id}/documents/abc_setup.pdf"
        response = client.post(
            "/api/uploads/confirm", json=_confirm_body(vehicle.id, foreign_key), headers=member_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "fileKey does not belong to this entity and category."
        storage_client.delete_object.assert_not_called()

    def test_confirm_rejects_parent_segments(self, client, member_headers, vehicle, event):
        sneaky_key = f"vehicles/{vehicle.id}/photos/../../../events/{event.id}/documents/abc_setup.pdf"
        response = client.post(
            "/api/uploads/confirm", json=_confirm_body(vehicle.id, sneaky_key), headers=member_headers
        )
        assert response.status_code == 400

    def test_confirm_same_key_twice(self, client, member_headers, uploaded, vehicle):
        response = client.post(
            "/api/uploads/confirm", json=_confirm_body(vehicle.id, uploaded["fileKey"]), headers=member_headers
        )
        assert response.status_code == 409
        assert response.json()["error"] == "This file has already been recorded."

    def test_confirm_unknown_vehicle(self, client, member_headers):
        response = client.post("/api/uploads/confirm", json=_confirm_body("gone", "vehicles/gone/photos/k_car.jpg"), headers=member_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Vehicle not found."

    def test_list_with_uploader(self, client, viewer_headers, uploaded, vehicle):
        body = client.get(f"/api/uploads?entityType=vehicle&entityId={vehicle.id}", headers=viewer_headers).json()
        assert body["count"] == 1
        assert body["data"][0]["uploadedBy"]["firstName"] == "User"
        assert client.get("/api/uploads?category=document", headers=viewer_headers).json()["count"] == 0

    def test_download_url(self, client, viewer_headers, uploaded):
        response = client.get(f"/api/uploads/{uploaded['id']}/download", headers=viewer_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["expiresIn"] == 900
        assert data["downloadUrl"] == f"https://signed.example/get_object/{uploaded['fileKey']}?expires=900"

    def test_delete_by_other_user_forbidden(self, client, make_user, headers_for, uploaded):
        response = client.delete(f"/api/uploads/{uploaded['id']}", headers=headers_for(make_user()))
        assert response.status_code == 403
        assert response.json()["error"] == "You do not have permission to delete this file."

    def test_delete_by_uploader(self, client, member_headers, uploaded, storage_client):
        response = client.delete(f"/api/uploads/{uploaded['id']}", headers=member_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "File deleted successfully."
        storage_client.delete_object.assert_called_once_with(Bucket="test-bucket", Key=uploaded["fileKey"])
        assert client.get(f"/api/uploads/{uploaded['id']}/download", headers=member_headers).status_code == 404

    def test_delete_survives_storage_failure(self, client, admin_headers, uploaded, storage_client):
        storage_client.delete_object.side_effect = ClientError(
            {"Error": {"Code": "InternalError", "Message": "boom"}}, "DeleteObject"
        )
        response = client.delete(f"/api/uploads/{uploaded['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get("/api/uploads", headers=admin_headers).json()["count"] == 0

    def test_vehicle_delete_removes_upload_records(self, client, member_headers, uploaded, vehicle):
        client.delete(f"/api/vehicles/{vehicle.id}", headers=member_headers)
        assert client.get("/api/uploads", headers=member_headers).json()["count"] == 0
