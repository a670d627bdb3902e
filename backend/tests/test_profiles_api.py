"""Tests for profile self-management endpoints."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from quickcut.models import Profile


class TestProfiles:
    def test_create_profile(self, client: TestClient, db_session) -> None:
        user_id = str(uuid.uuid4())
        response = client.post("/api/profiles", json={"id": user_id, "email": "new@example.com", "full_name": "New User"})

        assert response.status_code == 201
        assert response.json()["id"] == user_id
        assert db_session.query(Profile).count() == 1

    def test_create_duplicate_profile_conflicts(self, client: TestClient, owner) -> None:
        response = client.post("/api/profiles", json={"id": str(owner.id), "email": owner.email})
        assert response.status_code == 409

    def test_get_own_profile(self, client: TestClient, owner) -> None:
        response = client.get("/api/profiles/me", params={"user_id": str(owner.id)})
        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Doe"

    def test_get_missing_profile(self, client: TestClient) -> None:
        response = client.get("/api/profiles/me", params={"user_id": str(uuid.uuid4())})
        assert response.status_code == 404

    def test_update_own_profile(self, client: TestClient, db_session, owner) -> None:
        response = client.put(
            "/api/profiles/me", params={"user_id": str(owner.id)}, json={"full_name": "Jane Q. Doe"}
        )

        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Q. Doe"
        assert response.json()["email"] == "jane@example.com"
        db_session.expire_all()
        assert db_session.get(Profile, owner.id).full_name == "Jane Q. Doe"

    def test_email_cannot_be_cleared(self, client: TestClient, owner) -> None:
        response = client.put("/api/profiles/me", params={"user_id": str(owner.id)}, json={"email": ""})
        assert response.status_code == 400
