"""
Shared fixtures: an in-memory database injected into the app, tokens signed
with the configured identity key, and seed helpers.
"""
from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from proshift.config.database import ensure_indexes, get_db
from proshift.config.settings import settings
from proshift.main import app
from proshift.shared.database.documents import PARCELS, RIDERS, USERS


def make_token(email=None, expires_in=timedelta(hours=1), key=None, **claims):
    payload = dict(claims)
    if email is not None:
        payload["email"] = email
    payload["exp"] = datetime.utcnow() + expires_in
    return jwt.encode(payload, key or settings.identity_secret_key, algorithm=settings.identity_algorithm)


def auth_headers(email):
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
def db():
    database = mongomock.MongoClient()["ProShift_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed_user(db):
    def _seed(email, role="user", name=None):
        now = datetime.now()
        db[USERS].insert_one({
            "email": email,
            "name": name or email.split("@")[0],
            "photo": None,
            "role": role,
            "created_at": now,
            "last_login": now
        })
        return email
    return _seed


@pytest.fixture
def seed_rider(db, seed_user):
    def _seed(email, status="Active", work_status="available", district="Dhaka", with_user=True):
        if with_user:
            seed_user(email, role="rider" if status == "Active" else "user")
        result = db[RIDERS].insert_one({
            "name": email.split("@")[0].title(),
            "email": email,
            "phone": "01712345678",
            "age": 25,
            "region": "Dhaka",
            "district": district,
            "nid": "1990123456789",
            "status": status,
            "work_status": work_status,
            "current_parcel": None,
            "created_at": datetime.now()
        })
        return str(result.inserted_id)
    return _seed


@pytest.fixture
def seed_parcel(db):
    def _seed(owner="customer@proshift.com", **fields):
        document = {
            "title": "Books",
            "parcel_type": "non-document",
            "sender_name": "Nadia",
            "sender_region": "Dhaka",
            "sender_center": "Dhaka",
            "receiver_name": "Rafi",
            "receiver_region": "Dhaka",
            "receiver_center": "Dhaka",
            "userEmail": owner,
            "totalCost": 100,
            "trackingId": None,
            "delivery_status": "pending",
            "payment_status": "unpaid",
            "cashout_status": "none",
            "creation_date": datetime.now()
        }
        document.update(fields)
        return str(db[PARCELS].insert_one(document).inserted_id)
    return _seed


def parcel_payload(owner="customer@proshift.com", **overrides):
    payload = {
        "title": "Birthday gift",
        "parcel_type": "non-document",
        "weight": 2.5,
        "sender_name": "Nadia Islam",
        "sender_region": "Dhaka",
        "sender_center": "Dhaka",
        "receiver_name": "Rafi Ahmed",
        "receiver_region": "Chattogram",
        "receiver_center": "Chattogram",
        "userEmail": owner,
        "totalCost": 250
    }
    payload.update(overrides)
    return payload
