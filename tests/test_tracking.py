"""
Tracking records: owner access and appended history.
"""
from proshift.shared.database.documents import TRACKINGS

from tests.conftest import auth_headers, parcel_payload

OWNER = "customer@proshift.com"


def create_parcel(client):
    return client.post("/api/v1/parcels", json=parcel_payload(OWNER), headers=auth_headers(OWNER)).json()


class TestTrackingAccess:

    def test_owner_reads_tracking(self, client):
        tracking_id = create_parcel(client)["tracking_id"]
        response = client.get(f"/api/v1/tracking/{tracking_id}", headers=auth_headers(OWNER))
        assert response.status_code == 200
        tracking = response.json()["tracking"]
        assert tracking["userEmail"] == OWNER
        assert tracking["history"][0]["status"] == "pending"

    def test_non_owner_is_forbidden(self, client):
        tracking_id = create_parcel(client)["tracking_id"]
        response = client.get(f"/api/v1/tracking/{tracking_id}", headers=auth_headers("intruder@proshift.com"))
        assert response.status_code == 403

    def test_admin_reads_any_tracking(self, client, seed_user):
        seed_user("admin@proshift.com", role="admin")
        tracking_id = create_parcel(client)["tracking_id"]
        response = client.get(f"/api/v1/tracking/{tracking_id}", headers=auth_headers("admin@proshift.com"))
        assert response.status_code == 200

    def test_unknown_tracking_id(self, client):
        response = client.get("/api/v1/tracking/PS-00000000-XXXXXX", headers=auth_headers(OWNER))
        assert response.status_code == 404


class TestTrackingUpdates:

    def test_rider_appends_history(self, client, db, seed_user):
        seed_user("rider@proshift.com", role="rider")
        tracking_id = create_parcel(client)["tracking_id"]

        response = client.post(
            f"/api/v1/tracking/{tracking_id}/updates",
            json={"status": "in-transit", "details": "Left the sorting center", "location": "Dhaka"},
            headers=auth_headers("rider@proshift.com")
        )
        assert response.status_code == 201

        tracking = db[TRACKINGS].find_one({"trackingId": tracking_id})
        assert tracking["currentStatus"] == "in-transit"
        assert [h["status"] for h in tracking["history"]] == ["pending", "in-transit"]
        assert tracking["history"][1]["location"] == "Dhaka"

    def test_customer_cannot_append(self, client, seed_user):
        seed_user(OWNER)
        tracking_id = create_parcel(client)["tracking_id"]
        response = client.post(
            f"/api/v1/tracking/{tracking_id}/updates",
            json={"status": "delivered"},
            headers=auth_headers(OWNER)
        )
        assert response.status_code == 403

    def test_update_unknown_tracking(self, client, seed_user):
        seed_user("admin@proshift.com", role="admin")
        response = client.post(
            "/api/v1/tracking/PS-00000000-XXXXXX/updates",
            json={"status": "delivered"},
            headers=auth_headers("admin@proshift.com")
        )
        assert response.status_code == 404
