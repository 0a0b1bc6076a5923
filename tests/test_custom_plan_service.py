"""
Yoga Workout Backend — Session and Custom Plan Tests
======================================================

What:  SessionService login check, CustomPlanService listing with exercise
       counts, and the driver-error translation shared by all repositories.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import AutoReconnect

from yogaworkout.exceptions import AuthenticationError, DatabaseError
from yogaworkout.repositories.base import store_errors
from yogaworkout.services.custom_plan_service import CustomPlanService
from yogaworkout.services.session_service import SessionContext, SessionService


@pytest_asyncio.fixture
async def user_id(mongo_db):
    result = await mongo_db["users"].insert_one({"session": "s-123", "device_id": "device-1"})
    return result.inserted_id


class TestSessionCheck:
    async def test_matching_session(self, mongo_db, user_id):
        auth = await SessionService().authenticate(mongo_db, user_id, "s-123", "device-1")
        assert auth == SessionContext(user_id=user_id, authenticated=True)

    @pytest.mark.parametrize("session,device_id", [("other", "device-1"), ("s-123", "device-2")])
    async def test_mismatch(self, mongo_db, user_id, session, device_id):
        auth = await SessionService().authenticate(mongo_db, user_id, session, device_id)
        assert auth.authenticated is False

    async def test_unknown_user(self, mongo_db):
        assert await SessionService().check_user_login(mongo_db, ObjectId(), "s", "d") is False


class TestCustomPlanList:
    async def test_no_plans_is_success(self, mongo_db, user_id):
        result = await CustomPlanService().list_plans(
            mongo_db, SessionContext(user_id=user_id, authenticated=True)
        )

        assert result.success is True
        assert result.message == "No Custom Plans Added!"
        assert result.data.custom_plans == []

    async def test_plans_with_counts(self, mongo_db, user_id):
        base = datetime(2026, 3, 1, tzinfo=timezone.utc)
        older = (await mongo_db["customplans"].insert_one(
            {"user_id": user_id, "planName": "Morning", "createdAt": base}
        )).inserted_id
        newer = (await mongo_db["customplans"].insert_one(
            {"user_id": user_id, "planName": "Evening", "createdAt": base + timedelta(days=1)}
        )).inserted_id
        await mongo_db["customplans"].insert_one({"user_id": ObjectId(), "planName": "Not mine"})
        await mongo_db["customplanexercises"].insert_many(
            [{"custom_plan_id": older, "exercise": n} for n in range(3)]
        )

        result = await CustomPlanService().list_plans(
            mongo_db, SessionContext(user_id=user_id, authenticated=True)
        )

        plans = result.data.custom_plans
        assert [p["planName"] for p in plans] == ["Evening", "Morning"]
        assert [p["id"] for p in plans] == [str(newer), str(older)]
        assert [p["total_exercise"] for p in plans] == [0, 3]
        assert all(p["user_id"] == str(user_id) for p in plans)

    async def test_requires_authenticated_context(self, mongo_db):
        with pytest.raises(AuthenticationError, match="Please login first"):
            await CustomPlanService().list_plans(
                mongo_db, SessionContext(user_id=ObjectId(), authenticated=False)
            )


class TestStoreErrors:
    def test_driver_error_becomes_database_error(self):
        with pytest.raises(DatabaseError) as exc_info:
            with store_errors("list stretches", stretch_id="abc"):
                raise AutoReconnect("connection reset")

        assert exc_info.value.context["operation"] == "list stretches"
        assert exc_info.value.context["stretch_id"] == "abc"
        assert "connection reset" not in exc_info.value.message
