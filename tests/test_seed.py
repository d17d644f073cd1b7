"""
Tests for the demo data set and the in-memory store it loads into.
"""

import pytest

from app.domain.errors import DuplicateApplicationError, UserExistsError
from app.seed import (
    DEMO_APPLICATIONS,
    DEMO_COMPLETED_JOBS,
    DEMO_OFFERINGS,
    DEMO_USERS,
    ensure_demo_user,
    seed_demo_data,
)
from app.services.user_service import verify_password


class TestSeedDemoData:
    @pytest.mark.asyncio
    async def test_loads_everything(self, db):
        await seed_demo_data(db)

        assert len(await db.list_users()) == len(DEMO_USERS)
        offerings = await db.list_offerings()
        assert len(offerings) == len(DEMO_OFFERINGS)
        assert sum(o["applications_count"] for o in offerings) == len(DEMO_APPLICATIONS)
        assert sum(1 for o in offerings if o["featured"]) == 2

    @pytest.mark.asyncio
    async def test_counts_match_applications(self, db):
        await seed_demo_data(db)

        for offering in await db.list_offerings():
            applications = await db.list_applications_for_offering(offering["id"])
            assert offering["applications_count"] == len(applications)

    @pytest.mark.asyncio
    async def test_demo_user_is_admin_with_known_password(self, db):
        await seed_demo_data(db)

        demo = await db.find_user_by_login("demo")
        assert demo["role"] == "admin"
        assert verify_password("demo", demo["password_hash"])

    @pytest.mark.asyncio
    async def test_idempotent(self, db):
        await seed_demo_data(db)
        await seed_demo_data(db)

        assert len(await db.list_users()) == len(DEMO_USERS)
        assert len(await db.list_offerings()) == len(DEMO_OFFERINGS)


class TestInMemoryAdapter:
    @pytest.mark.asyncio
    async def test_returns_copies(self, db):
        created = await db.create_offering({"label": "Walk the dog", "requestor_id": "a"})
        created["label"] = "mutated"

        stored = await db.get_offering(created["id"])
        assert stored["label"] == "Walk the dog"

    @pytest.mark.asyncio
    async def test_list_by_requestor(self, db):
        await db.create_offering({"label": "One", "requestor_id": "a"})
        await db.create_offering({"label": "Two", "requestor_id": "b"})

        rows = await db.list_offerings(requestor_id="a")
        assert [r["label"] for r in rows] == ["One"]

    @pytest.mark.asyncio
    async def test_update_and_delete_missing(self, db):
        assert await db.update_offering("nope", {"label": "x"}) is None
        assert await db.delete_offering("nope") is False

    @pytest.mark.asyncio
    async def test_duplicate_application(self, db):
        await db.create_application({"offering_id": "o1", "applicant_id": "u1"})
        with pytest.raises(DuplicateApplicationError):
            await db.create_application({"offering_id": "o1", "applicant_id": "u1"})

    @pytest.mark.asyncio
    async def test_login_matches_username_or_email(self, db):
        await db.create_user({"username": "ivan", "email": "ivan@example.com"})

        assert (await db.find_user_by_login("ivan"))["username"] == "ivan"
        assert (await db.find_user_by_login("ivan@example.com"))["username"] == "ivan"
        assert await db.find_user_by_login("gosho") is None


class TestSeedHistoryAndDemoAccount:
    @pytest.mark.asyncio
    async def test_completed_jobs_loaded(self, db):
        await seed_demo_data(db)

        ivan = await db.find_user_by_login("ivan_petrov")
        jobs = await db.list_completed_jobs(ivan["id"])
        assert [j["job_title"] for j in jobs] == ["Garden Cleanup Project"]
        assert jobs[0]["total_payment"] == 48

        total = 0
        for user in await db.list_users():
            total += len(await db.list_completed_jobs(user["id"]))
        assert total == len(DEMO_COMPLETED_JOBS)

    @pytest.mark.asyncio
    async def test_ensure_demo_user_is_idempotent(self, db):
        assert await ensure_demo_user(db) is True
        assert await ensure_demo_user(db) is False

        demo = await db.find_user_by_login("demo")
        assert demo["role"] == "user"
        assert verify_password("demo", demo["password_hash"])

    @pytest.mark.asyncio
    async def test_seed_after_demo_account_reuses_it(self, db):
        await ensure_demo_user(db)
        await seed_demo_data(db)

        assert len(await db.list_users()) == len(DEMO_USERS)
        assert len(await db.list_offerings()) == len(DEMO_OFFERINGS)


class TestInMemoryUniqueUsers:
    @pytest.mark.asyncio
    async def test_duplicate_username_or_email_rejected(self, db):
        await db.create_user({"username": "ivan", "email": "ivan@example.com"})
        with pytest.raises(UserExistsError):
            await db.create_user({"username": "ivan", "email": "other@example.com"})
        with pytest.raises(UserExistsError):
            await db.create_user({"username": "other", "email": "ivan@example.com"})
