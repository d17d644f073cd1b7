"""
Tests for authentication, public user profiles and the admin featured toggle.

Tests cover:
- Register / login / logout / profile
- Bearer header and cookie token sources
- Password hashing
- Public profiles never leak credentials
- Featured flag is admin-only and only reorders on request
- Posted-offerings counts, completed-job history and the demo account
"""

import asyncio
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from app.adapters.memory_adapter import InMemoryAdapter
from app.config import settings
from app.dependencies import get_db
from app.domain.enums import UserRole
from app.seed import seed_demo_data
from app.services.auth_service import create_access_token
from app.services.user_service import UserService, hash_password, verify_password
from main import app


def _register(client, username="ivan_petrov", email="ivan@example.com", password="secret123"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


class TestRegister:
    def test_returns_user_and_token(self, client):
        resp = _register(client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Registration successful"
        assert body["token"]
        user = body["user"]
        assert user["username"] == "ivan_petrov"
        assert user["email"] == "ivan@example.com"
        assert user["role"] == "user"
        assert user["rating"] == 0.0
        assert user["completedJobs"] == 0
        assert "passwordHash" not in user

    def test_sets_http_only_cookie(self, client):
        resp = _register(client)
        cookie = resp.headers["set-cookie"]
        assert cookie.startswith(f"{settings.auth_cookie_name}=")
        assert "HttpOnly" in cookie

    def test_duplicate_username(self, client):
        _register(client)
        resp = _register(client, email="other@example.com")
        assert resp.status_code == 409

    def test_duplicate_email(self, client):
        _register(client)
        resp = _register(client, username="someone_else")
        assert resp.status_code == 409

    @pytest.mark.parametrize(
        "overrides",
        [
            {"username": "ab"},
            {"email": "not-an-email"},
            {"password": "123"},
        ],
    )
    def test_validation(self, client, overrides):
        resp = _register(client, **overrides)
        assert resp.status_code == 422

    def test_password_stored_hashed(self, db, client):
        _register(client)
        user = asyncio.run(db.find_user_by_login("ivan_petrov"))
        assert user["password_hash"] != "secret123"
        assert verify_password("secret123", user["password_hash"])


class TestLogin:
    @pytest.mark.parametrize("login", ["ivan_petrov", "ivan@example.com"])
    def test_login_by_username_or_email(self, client, login):
        _register(client)
        resp = client.post("/api/auth/login", json={"username": login, "password": "secret123"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login successful"
        assert body["user"]["username"] == "ivan_petrov"
        assert body["token"]

    def test_wrong_password(self, client):
        _register(client)
        resp = client.post("/api/auth/login", json={"username": "ivan_petrov", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials"

    def test_unknown_user(self, client):
        resp = client.post("/api/auth/login", json={"username": "ghost", "password": "secret123"})
        assert resp.status_code == 401


class TestProfile:
    def test_bearer_token(self, client):
        token = _register(client).json()["token"]
        resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "ivan_petrov"

    def test_cookie_token(self, client):
        token = _register(client).json()["token"]
        resp = client.get(
            "/api/auth/profile",
            headers={"Cookie": f"{settings.auth_cookie_name}={token}"},
        )
        assert resp.status_code == 200

    def test_missing_token(self, client):
        assert client.get("/api/auth/profile").status_code == 401

    def test_garbage_token(self, client):
        resp = client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401

    def test_expired_token(self, client):
        user = _register(client).json()["user"]
        token = jwt.encode(
            {
                "sub": user["id"],
                "username": user["username"],
                "exp": datetime.now(timezone.utc) - timedelta(hours=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token has expired"

    def test_token_for_deleted_user(self, client):
        token = create_access_token({"id": "ghost", "username": "ghost"})
        resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


class TestLogout:
    def test_clears_cookie(self, client):
        resp = client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Logout successful"}
        assert f"{settings.auth_cookie_name}=" in resp.headers["set-cookie"]


class TestPasswordHashing:
    def test_round_trip(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_long_passwords_truncated_consistently(self):
        long_password = "x" * 100
        hashed = hash_password(long_password)
        assert verify_password(long_password, hashed)


class TestUsers:
    def test_list_public_profiles(self, client, register):
        register("ivan_petrov")
        register("gosho_ivanov")
        resp = client.get("/api/users")
        assert resp.status_code == 200
        users = resp.json()
        assert {u["username"] for u in users} == {"ivan_petrov", "gosho_ivanov"}
        for user in users:
            assert "email" not in user
            assert "passwordHash" not in user

    def test_get_one(self, client, register):
        user, _ = register("ivan_petrov")
        resp = client.get(f"/api/users/{user['id']}")
        assert resp.status_code == 200
        assert resp.json()["username"] == "ivan_petrov"

    def test_missing(self, client):
        assert client.get("/api/users/nope").status_code == 404


@pytest.fixture
def admin_headers(db):
    admin = asyncio.run(
        db.create_user(
            {
                "username": "admin",
                "email": "admin@example.com",
                "password_hash": hash_password("admin123"),
                "role": UserRole.ADMIN.value,
                "rating": 0.0,
                "completed_jobs": 0,
            }
        )
    )
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


class TestFeatured:
    @pytest.fixture
    def offerings(self, client, register, offering_body):
        _, headers = register("ivan_petrov")
        return [
            client.post(
                "/api/offerings",
                json=offering_body(label=f"Task number {i}", paymentPerHour=pay),
                headers=headers,
            ).json()
            for i, pay in enumerate([10, 20, 30], start=1)
        ]

    def test_non_admin_forbidden(self, client, register, offerings):
        _, headers = register("gosho_ivanov")
        resp = client.patch(
            f"/api/admin/offerings/{offerings[0]['id']}/featured",
            json={"featured": True},
            headers=headers,
        )
        assert resp.status_code == 403

    def test_missing_offering(self, client, admin_headers):
        resp = client.patch(
            "/api/admin/offerings/nope/featured", json={"featured": True}, headers=admin_headers
        )
        assert resp.status_code == 404

    def test_featured_first_only_on_request(self, client, admin_headers, offerings):
        cheapest = offerings[0]["id"]
        resp = client.patch(
            f"/api/admin/offerings/{cheapest}/featured",
            json={"featured": True},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["featured"] is True

        params = {"sortBy": "payment", "sortOrder": "desc"}
        plain = client.get("/api/offerings", params=params).json()["offerings"]
        assert [o["paymentPerHour"] for o in plain] == [30, 20, 10]

        pinned = client.get(
            "/api/offerings", params={**params, "featuredFirst": "true"}
        ).json()["offerings"]
        assert [o["paymentPerHour"] for o in pinned] == [10, 30, 20]


class TestCreatedJobs:
    def test_counts_posted_offerings(self, client, register, offering_body):
        user, headers = register("ivan_petrov")
        register("gosho_ivanov")
        for label in ("Mow my yard", "Paint fence"):
            client.post("/api/offerings", json=offering_body(label=label), headers=headers)

        assert client.get(f"/api/users/{user['id']}").json()["createdJobs"] == 2
        listed = {u["username"]: u["createdJobs"] for u in client.get("/api/users").json()}
        assert listed == {"ivan_petrov": 2, "gosho_ivanov": 0}
        profile = client.get("/api/auth/profile", headers=headers).json()["user"]
        assert profile["createdJobs"] == 2


class TestCompletedJobs:
    @pytest.fixture
    def seeded(self, client, db):
        asyncio.run(seed_demo_data(db))
        return {u["username"]: u["id"] for u in client.get("/api/users").json()}

    def test_history_with_client_projection(self, client, seeded):
        resp = client.get(f"/api/users/{seeded['ivan_petrov']}/completed-jobs")
        assert resp.status_code == 200
        jobs = resp.json()
        assert len(jobs) == 1
        job = jobs[0]
        assert job["jobTitle"] == "Garden Cleanup Project"
        assert job["completedBy"] == seeded["ivan_petrov"]
        assert job["completedFor"] == seeded["gosho_ivanov"]
        assert job["totalPayment"] == 48
        assert job["completedForUser"] == {
            "username": "gosho_ivanov",
            "email": "gosho.ivanov@example.com",
        }

    def test_user_without_history(self, client, seeded):
        resp = client.get(f"/api/users/{seeded['vlado_shefa']}/completed-jobs")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_missing_user(self, client):
        assert client.get("/api/users/nope/completed-jobs").status_code == 404

    @pytest.mark.asyncio
    async def test_most_recent_first(self, db):
        user = await db.create_user({"username": "ivan", "email": "ivan@example.com"})
        client_user = await db.create_user({"username": "gosho", "email": "gosho@example.com"})
        for title, completed_at in [
            ("Older", datetime(2024, 1, 1, tzinfo=timezone.utc)),
            ("Newer", datetime(2024, 3, 1, tzinfo=timezone.utc)),
        ]:
            await db.create_completed_job(
                {
                    "job_title": title,
                    "payment_per_hour": 10,
                    "hours_worked": 2,
                    "total_payment": 20,
                    "completed_by": user["id"],
                    "completed_for": client_user["id"],
                    "completed_at": completed_at,
                }
            )

        jobs = await UserService(db).list_completed_jobs(user["id"])
        assert [j.job_title for j in jobs] == ["Newer", "Older"]


class TestDemoUser:
    def test_created_once_then_reported(self, client):
        first = client.post("/api/auth/demo-user")
        assert first.status_code == 201
        assert first.json() == {
            "message": "Demo user created successfully",
            "user": {"username": "demo", "password": "demo"},
        }

        second = client.post("/api/auth/demo-user")
        assert second.status_code == 200
        assert second.json()["message"] == "Demo user already exists"

    def test_credentials_log_in_as_regular_user(self, client):
        client.post("/api/auth/demo-user")
        resp = client.post("/api/auth/login", json={"username": "demo", "password": "demo"})
        assert resp.status_code == 200
        assert resp.json()["user"]["role"] == "user"


class _RacingStore(InMemoryAdapter):
    """Reports every login as free, so only the insert sees the clash."""

    async def find_user_by_login(self, login):
        return None


class TestRegisterRace:
    def test_insert_conflict_is_409(self):
        racing = _RacingStore()
        app.dependency_overrides[get_db] = lambda: racing
        body = {"username": "ivan_petrov", "email": "ivan@example.com", "password": "secret123"}
        try:
            with TestClient(app) as c:
                assert c.post("/api/auth/register", json=body).status_code == 201
                assert c.post("/api/auth/register", json=body).status_code == 409
        finally:
            app.dependency_overrides.clear()
