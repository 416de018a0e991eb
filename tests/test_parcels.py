"""
Parcel submission, ownership checks, rider assignment and cashout approval.
"""
from datetime import datetime

from bson import ObjectId

from proshift.shared.database.documents import PARCELS, RIDERS, TRACKINGS

from tests.conftest import auth_headers, parcel_payload

OWNER = "customer@proshift.com"
ADMIN = "admin@proshift.com"


class TestParcelSubmission:

    def test_create_parcel_sets_initial_state_and_tracking(self, client, db):
        response = client.post("/api/v1/parcels", json=parcel_payload(OWNER), headers=auth_headers(OWNER))
        assert response.status_code == 201
        body = response.json()

        parcel = db[PARCELS].find_one({"_id": ObjectId(body["parcel_id"])})
        assert parcel["delivery_status"] == "pending"
        assert parcel["payment_status"] == "unpaid"
        assert parcel["cashout_status"] == "none"
        assert parcel["userEmail"] == OWNER
        assert parcel["totalCost"] == 250
        assert parcel["trackingId"] == body["tracking_id"]

        tracking = db[TRACKINGS].find_one({"trackingId": body["tracking_id"]})
        assert tracking["parcelId"] == body["parcel_id"]
        assert tracking["currentStatus"] == "pending"
        assert [h["status"] for h in tracking["history"]] == ["pending"]

    def test_cannot_create_parcel_for_someone_else(self, client, db):
        response = client.post(
            "/api/v1/parcels", json=parcel_payload("other@proshift.com"), headers=auth_headers(OWNER)
        )
        assert response.status_code == 403
        assert db[PARCELS].count_documents({}) == 0

    def test_missing_fields_are_rejected(self, client):
        response = client.post("/api/v1/parcels", json={"title": "x"}, headers=auth_headers(OWNER))
        assert response.status_code == 422


class TestParcelAccess:

    def test_owner_lists_own_parcels_newest_first(self, client, seed_parcel):
        first = seed_parcel(OWNER, title="First", creation_date=datetime(2024, 5, 1, 9, 0))
        second = seed_parcel(OWNER, title="Second", creation_date=datetime(2024, 5, 2, 9, 0))
        seed_parcel("other@proshift.com")

        response = client.get("/api/v1/parcels", params={"email": OWNER}, headers=auth_headers(OWNER))
        assert response.status_code == 200
        ids = [p["_id"] for p in response.json()["parcels"]]
        assert ids == [second, first]

    def test_list_filters_by_status(self, client, seed_parcel):
        seed_parcel(OWNER, payment_status="paid")
        seed_parcel(OWNER)

        response = client.get(
            "/api/v1/parcels", params={"email": OWNER, "payment_status": "paid"}, headers=auth_headers(OWNER)
        )
        assert response.json()["count"] == 1

    def test_non_owner_listing_is_forbidden(self, client, seed_parcel):
        seed_parcel(OWNER)
        response = client.get(
            "/api/v1/parcels", params={"email": OWNER}, headers=auth_headers("intruder@proshift.com")
        )
        assert response.status_code == 403

    def test_listing_without_email_requires_admin(self, client, seed_user, seed_parcel):
        seed_parcel(OWNER)
        seed_parcel("other@proshift.com")
        assert client.get("/api/v1/parcels", headers=auth_headers(OWNER)).status_code == 403

        seed_user(ADMIN, role="admin")
        response = client.get("/api/v1/parcels", headers=auth_headers(ADMIN))
        assert response.status_code == 200
        assert response.json()["count"] == 2

    def test_get_parcel_checks_owner(self, client, seed_parcel):
        parcel_id = seed_parcel(OWNER)
        assert client.get(f"/api/v1/parcels/{parcel_id}", headers=auth_headers(OWNER)).status_code == 200
        assert client.get(
            f"/api/v1/parcels/{parcel_id}", headers=auth_headers("intruder@proshift.com")
        ).status_code == 403

    def test_get_unknown_parcel(self, client):
        response = client.get(f"/api/v1/parcels/{ObjectId()}", headers=auth_headers(OWNER))
        assert response.status_code == 404

    def test_get_parcel_with_invalid_id(self, client):
        response = client.get("/api/v1/parcels/12345", headers=auth_headers(OWNER))
        assert response.status_code == 400

    def test_owner_deletes_parcel_and_its_tracking(self, client, db):
        created = client.post("/api/v1/parcels", json=parcel_payload(OWNER), headers=auth_headers(OWNER)).json()
        response = client.delete(f"/api/v1/parcels/{created['parcel_id']}", headers=auth_headers(OWNER))
        assert response.status_code == 200
        assert db[PARCELS].count_documents({}) == 0
        assert db[TRACKINGS].count_documents({}) == 0

    def test_non_owner_cannot_delete(self, client, db, seed_parcel):
        parcel_id = seed_parcel(OWNER)
        response = client.delete(f"/api/v1/parcels/{parcel_id}", headers=auth_headers("intruder@proshift.com"))
        assert response.status_code == 403
        assert db[PARCELS].count_documents({}) == 1


class TestAdminViews:

    def test_assignable_parcels_are_paid_and_pending(self, client, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        ready = seed_parcel(OWNER, payment_status="paid")
        seed_parcel(OWNER)
        seed_parcel(OWNER, payment_status="paid", delivery_status="delivered")

        response = client.get("/api/v1/parcels/assignable", headers=auth_headers(ADMIN))
        assert [p["_id"] for p in response.json()["parcels"]] == [ready]

    def test_status_counts(self, client, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        seed_parcel(OWNER)
        seed_parcel(OWNER)
        seed_parcel(OWNER, delivery_status="delivered")

        response = client.get("/api/v1/parcels/status-counts", headers=auth_headers(ADMIN))
        body = response.json()
        assert body["total"] == 3
        assert {c["status"]: c["count"] for c in body["counts"]} == {"delivered": 1, "pending": 2}


class TestAssignment:

    def test_assign_sets_cross_references(self, client, db, seed_user, seed_rider, seed_parcel):
        seed_user(ADMIN, role="admin")
        rider_id = seed_rider("rider@proshift.com")
        parcel_id = seed_parcel(OWNER, payment_status="paid")

        response = client.patch(
            f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
        )
        assert response.status_code == 200

        parcel = db[PARCELS].find_one({"_id": ObjectId(parcel_id)})
        assert parcel["delivery_status"] == "rider-assigned"
        assert parcel["assignedRider"] == rider_id
        assert parcel["assignedEmail"] == "rider@proshift.com"
        assert parcel["assigned_at"] is not None

        rider = db[RIDERS].find_one({"_id": ObjectId(rider_id)})
        assert rider["work_status"] == "assigned"
        assert rider["current_parcel"] == parcel_id

    def test_rider_in_transit_cannot_be_assigned(self, client, db, seed_user, seed_rider, seed_parcel):
        seed_user(ADMIN, role="admin")
        rider_id = seed_rider("rider@proshift.com", work_status="in-transit")
        parcel_id = seed_parcel(OWNER, payment_status="paid")

        response = client.patch(
            f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
        )
        assert response.status_code == 400
        assert db[PARCELS].find_one({"_id": ObjectId(parcel_id)})["delivery_status"] == "pending"

    def test_inactive_rider_cannot_be_assigned(self, client, seed_user, seed_rider, seed_parcel):
        seed_user(ADMIN, role="admin")
        rider_id = seed_rider("rider@proshift.com", status="Pending")
        parcel_id = seed_parcel(OWNER, payment_status="paid")

        response = client.patch(
            f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
        )
        assert response.status_code == 400

    def test_unknown_rider(self, client, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        parcel_id = seed_parcel(OWNER)
        response = client.patch(
            f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": str(ObjectId())}, headers=auth_headers(ADMIN)
        )
        assert response.status_code == 404

    def test_assignment_appends_tracking(self, client, db, seed_user, seed_rider):
        seed_user(ADMIN, role="admin")
        rider_id = seed_rider("rider@proshift.com")
        created = client.post("/api/v1/parcels", json=parcel_payload(OWNER), headers=auth_headers(OWNER)).json()

        client.patch(
            f"/api/v1/parcels/{created['parcel_id']}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
        )
        tracking = db[TRACKINGS].find_one({"trackingId": created["tracking_id"]})
        assert tracking["currentStatus"] == "rider-assigned"
        assert [h["status"] for h in tracking["history"]] == ["pending", "rider-assigned"]

    def test_reassignment_releases_previous_rider(self, client, db, seed_user, seed_rider, seed_parcel):
        seed_user(ADMIN, role="admin")
        first_rider = seed_rider("first@proshift.com")
        second_rider = seed_rider("second@proshift.com")
        parcel_id = seed_parcel(OWNER, payment_status="paid")

        for rider_id in (first_rider, second_rider):
            response = client.patch(
                f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
            )
            assert response.status_code == 200

        released = db[RIDERS].find_one({"_id": ObjectId(first_rider)})
        assert released["work_status"] == "available"
        assert released["current_parcel"] is None

        parcel = db[PARCELS].find_one({"_id": ObjectId(parcel_id)})
        assert parcel["assignedRider"] == second_rider
        assert parcel["assignedEmail"] == "second@proshift.com"

        available = client.get("/api/v1/riders/available", headers=auth_headers(ADMIN)).json()
        assert [r["email"] for r in available["riders"]] == ["first@proshift.com"]

    def test_picked_up_or_delivered_parcel_cannot_be_assigned(self, client, db, seed_user, seed_rider, seed_parcel):
        seed_user(ADMIN, role="admin")
        rider_id = seed_rider("rider@proshift.com")
        for delivery_status, cashout_status in (("in-transit", "none"), ("delivered", "cashed_out")):
            parcel_id = seed_parcel(
                OWNER,
                payment_status="paid",
                delivery_status=delivery_status,
                cashout_status=cashout_status,
                assignedEmail="old-rider@proshift.com"
            )
            response = client.patch(
                f"/api/v1/parcels/{parcel_id}/assign", json={"rider_id": rider_id}, headers=auth_headers(ADMIN)
            )
            assert response.status_code == 400

            parcel = db[PARCELS].find_one({"_id": ObjectId(parcel_id)})
            assert parcel["delivery_status"] == delivery_status
            assert parcel["assignedEmail"] == "old-rider@proshift.com"

        assert db[RIDERS].find_one({"_id": ObjectId(rider_id)})["work_status"] == "available"


class TestCashoutApproval:

    def test_pending_cashout_is_approved(self, client, db, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        parcel_id = seed_parcel(OWNER, delivery_status="delivered", cashout_status="pending")

        response = client.patch(f"/api/v1/parcels/{parcel_id}/cashout/approve", headers=auth_headers(ADMIN))
        assert response.status_code == 200
        parcel = db[PARCELS].find_one({"_id": ObjectId(parcel_id)})
        assert parcel["cashout_status"] == "cashed_out"
        assert parcel["cashed_out_at"] is not None

    def test_cashout_without_request_cannot_be_approved(self, client, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        parcel_id = seed_parcel(OWNER, delivery_status="delivered")
        response = client.patch(f"/api/v1/parcels/{parcel_id}/cashout/approve", headers=auth_headers(ADMIN))
        assert response.status_code == 400

    def test_cashed_out_parcel_cannot_be_approved_again(self, client, db, seed_user, seed_parcel):
        seed_user(ADMIN, role="admin")
        parcel_id = seed_parcel(OWNER, delivery_status="delivered", cashout_status="cashed_out")
        response = client.patch(f"/api/v1/parcels/{parcel_id}/cashout/approve", headers=auth_headers(ADMIN))
        assert response.status_code == 400
        assert db[PARCELS].find_one({"_id": ObjectId(parcel_id)})["cashout_status"] == "cashed_out"
