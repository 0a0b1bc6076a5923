"""
Yoga Workout Backend — API Endpoint Tests
===========================================

What:  Full HTTP round trips through the app (middleware, exception
       handlers, routes) with the database swapped for mongomock.

What we test:
    ✅ Envelope shape for success and every error class
    ✅ Malformed IDs answer 400 without touching the store
    ✅ Delete twice: 200 then 404
    ✅ Image upload, serving, replacement and traversal refusal
    ✅ Custom plan session outcomes: 400 / 401 / 200
"""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from yogaworkout.exceptions import AuthenticationError, DatabaseError
from yogaworkout.services.file_service import file_service


@pytest_asyncio.fixture
async def challenge_id(mongo_db):
    return (await mongo_db["challenges"].insert_one({"challengesName": "Beginner"})).inserted_id


async def add_stretch(test_client, name="Cat-Cow", image=None):
    files = {"image": image} if image else None
    response = await test_client.post("/addstretches", data={"stretchesName": name}, files=files)
    assert response.status_code == 201
    return response.json()["data"]


# ══════════════════════════════════════════════════════════════════════════
# Stretches
# ══════════════════════════════════════════════════════════════════════════

class TestStretchEndpoints:
    async def test_list_empty(self, test_client):
        response = await test_client.get("/stretches")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "No Stretches Added!"
        assert body["data"] == {"stretches": []}
        assert body["error"] is None
        assert "X-Request-ID" in response.headers

    async def test_add_and_list(self, test_client):
        created = await add_stretch(test_client, "Cat-Cow")

        response = await test_client.get("/stretches")

        stretches = response.json()["data"]["stretches"]
        assert [s["id"] for s in stretches] == [created["id"]]
        assert stretches[0]["name"] == "Cat-Cow"
        assert stretches[0]["is_active"] is True

    async def test_add_without_name(self, test_client):
        response = await test_client.post("/addstretches", data={"description": "no name"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "validation_error"
        assert body["message"] == "Enter Stretch Name!"

    async def test_add_with_image_then_serve(self, test_client, sample_image_bytes):
        created = await add_stretch(
            test_client, "Cobra", image=("cobra.jpg", sample_image_bytes, "image/jpeg")
        )
        assert created["image_url"].startswith("/uploads/stretches/")

        response = await test_client.get(created["image_url"])

        assert response.status_code == 200
        assert response.content == sample_image_bytes

    async def test_add_with_unsupported_image(self, test_client, mongo_db):
        response = await test_client.post(
            "/addstretches",
            data={"stretchesName": "Cobra"},
            files={"image": ("notes.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == 400
        assert "not supported" in response.json()["message"]
        assert await mongo_db["stretches"].count_documents({}) == 0

    async def test_add_with_script_named_as_image(self, test_client, mongo_db):
        files_before = set(file_service.storage_root.rglob("*"))

        response = await test_client.post(
            "/addstretches",
            data={"stretchesName": "Cobra"},
            files={"image": ("evil.jpg", b"#!/bin/sh\nrm -rf /\n", "application/x-sh")},
        )

        assert response.status_code == 400
        assert "content type" in response.json()["message"]
        assert await mongo_db["stretches"].count_documents({}) == 0
        assert set(file_service.storage_root.rglob("*")) == files_before

    async def test_update_empty_name(self, test_client):
        created = await add_stretch(test_client)

        response = await test_client.post(
            f"/updatestretches/{created['id']}", data={"stretchesName": ""}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Enter Stretch Name!"

    async def test_update_name_only_keeps_description(self, test_client, mongo_db):
        created = (await test_client.post(
            "/addstretches",
            data={"stretchesName": "Cobra", "description": "Back bend", "isActive": "false"},
        )).json()["data"]

        response = await test_client.post(
            f"/updatestretches/{created['id']}", data={"stretchesName": "King Cobra"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] == "Back bend"
        stored = await mongo_db["stretches"].find_one({"_id": ObjectId(created["id"])})
        assert stored["stretches"] == "King Cobra"
        assert stored["description"] == "Back bend"
        assert stored["isActive"] is False

    async def test_update_replaces_image(self, test_client, sample_image_bytes):
        created = await add_stretch(
            test_client, "Cobra", image=("a.jpg", sample_image_bytes, "image/jpeg")
        )

        response = await test_client.post(
            f"/updatestretches/{created['id']}",
            data={"stretchesName": "Cobra", "isActive": "false"},
            files={"image": ("b.png", sample_image_bytes, "image/png")},
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["is_active"] is False
        assert updated["image"] != created["image"]
        assert not (file_service.storage_root / created["image"]).exists()
        assert (await test_client.get(created["image_url"])).status_code == 404

    async def test_invalid_id_never_reaches_store(self, mock_db_client, mock_db):
        responses = [
            await mock_db_client.delete("/stretches/12345"),
            await mock_db_client.post("/updatestretches/12345", data={"stretchesName": "Cobra"}),
            await mock_db_client.post("/changeStretchesStatus", json={"id": "12345", "status": True}),
        ]

        for response in responses:
            assert response.status_code == 400
            assert response.json()["message"] == "Invalid Stretch ID"
        mock_db.__getitem__.assert_not_called()

    async def test_delete_twice(self, test_client):
        created = await add_stretch(test_client)

        first = await test_client.delete(f"/stretches/{created['id']}")
        second = await test_client.delete(f"/stretches/{created['id']}")

        assert first.status_code == 200
        assert first.json()["data"]["deleted_count"] == 1
        assert second.status_code == 404
        assert second.json()["error"] == "not_found"
        assert second.json()["message"] == "Stretch not found"

    async def test_delete_with_traversal_image_keeps_outside_file(self, test_client, mongo_db):
        outside = file_service.storage_root.parent / f"outside-{ObjectId()}.jpg"
        outside.write_bytes(b"keep me")
        inserted = await mongo_db["stretches"].insert_one(
            {"stretches": "Tampered", "isActive": True, "image": f"../{outside.name}"}
        )

        response = await test_client.delete(f"/stretches/{inserted.inserted_id}")

        assert response.status_code == 200
        assert response.json()["data"]["image_removed"] is False
        assert await mongo_db["stretches"].count_documents({}) == 0
        assert outside.exists()

    async def test_change_status(self, test_client, mongo_db):
        created = await add_stretch(test_client)

        response = await test_client.post(
            "/changeStretchesStatus", json={"id": created["id"], "status": False}
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False
        stored = await mongo_db["stretches"].find_one({"_id": ObjectId(created["id"])})
        assert stored["isActive"] is False

    async def test_change_status_missing_status(self, test_client):
        created = await add_stretch(test_client)

        response = await test_client.post("/changeStretchesStatus", json={"id": created["id"]})

        assert response.status_code == 400
        assert response.json()["message"] == "Select Stretch Status!"

    async def test_database_failure_is_generic_500(self, test_client):
        with patch(
            "yogaworkout.repositories.stretches.StretchRepository.list_all",
            new=AsyncMock(side_effect=DatabaseError(context={"error_type": "ServerSelectionTimeoutError"})),
        ):
            response = await test_client.get("/stretches")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "server_error"
        assert "ServerSelection" not in body["message"]


# ══════════════════════════════════════════════════════════════════════════
# Weeks
# ══════════════════════════════════════════════════════════════════════════

class TestWeekEndpoints:
    async def test_add_week(self, test_client, challenge_id):
        response = await test_client.post(
            "/addWeek", json={"challenges_id": str(challenge_id), "weekName": "Week 1"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Week Added successfully!"
        assert body["data"]["challenge_id"] == str(challenge_id)

    async def test_add_week_with_25_character_id(self, mock_db_client, mock_db):
        response = await mock_db_client.post(
            "/addWeek", json={"challenges_id": "a" * 25, "weekName": "Week 1"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid Challenges ID"
        mock_db.__getitem__.assert_not_called()

    async def test_get_weeks_empty(self, test_client):
        response = await test_client.get("/getWeeks")

        assert response.status_code == 200
        assert response.json()["message"] == "No Weeks Added!"

    async def test_get_weeks_by_challenge(self, test_client, challenge_id):
        await test_client.post("/addWeek", json={"challenges_id": str(challenge_id), "weekName": "Week 1"})

        response = await test_client.get(f"/getWeeksByChallengesId/{challenge_id}")

        weeks = response.json()["data"]["weeks"]
        assert len(weeks) == 1
        assert weeks[0]["challenge"] == {"id": str(challenge_id), "name": "Beginner"}

    async def test_get_weeks_by_invalid_challenge(self, test_client):
        response = await test_client.get("/getWeeksByChallengesId/not-an-id")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid Challenges ID"

    async def test_update_and_delete_week(self, test_client, challenge_id):
        created = (await test_client.post(
            "/addWeek", json={"challenges_id": str(challenge_id), "weekName": "Week 1"}
        )).json()["data"]

        updated = await test_client.post(f"/updateWeek/{created['id']}", json={"weekName": "Week One"})
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Week One"

        assert (await test_client.delete(f"/deleteWeek/{created['id']}")).status_code == 200
        assert (await test_client.delete(f"/deleteWeek/{created['id']}")).status_code == 404

    async def test_update_unknown_week(self, test_client):
        response = await test_client.post(f"/updateWeek/{ObjectId()}", json={"weekName": "Week One"})

        assert response.status_code == 404
        assert response.json()["message"] == "Week not found"

    async def test_malformed_json_body(self, test_client):
        response = await test_client.post(
            "/addWeek", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


# ══════════════════════════════════════════════════════════════════════════
# Custom Plans
# ══════════════════════════════════════════════════════════════════════════

class TestCustomPlanEndpoint:
    @pytest_asyncio.fixture
    async def user(self, mongo_db):
        user_id = (await mongo_db["users"].insert_one({"session": "s-1", "device_id": "d-1"})).inserted_id
        return {"user_id": str(user_id), "session": "s-1", "device_id": "d-1"}

    async def test_login_failure_is_401(self, test_client, user):
        response = await test_client.post("/getcustomplan", json={**user, "session": "stale"})

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "unauthorized"
        assert body["message"] == "Please login first"

    async def test_empty_plans_is_success(self, test_client, user):
        response = await test_client.post("/getcustomplan", json=user)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {"custom_plans": []}

    async def test_plans_with_counts(self, test_client, mongo_db, user):
        plan_id = (await mongo_db["customplans"].insert_one(
            {"user_id": ObjectId(user["user_id"]), "planName": "Morning"}
        )).inserted_id
        await mongo_db["customplanexercises"].insert_many(
            [{"custom_plan_id": plan_id}, {"custom_plan_id": plan_id}]
        )

        response = await test_client.post("/getcustomplan", json=user)

        plans = response.json()["data"]["custom_plans"]
        assert plans[0]["id"] == str(plan_id)
        assert plans[0]["planName"] == "Morning"
        assert plans[0]["total_exercise"] == 2

    @pytest.mark.parametrize("missing", ["user_id", "session", "device_id"])
    async def test_missing_credential(self, test_client, user, missing):
        payload = {k: v for k, v in user.items() if k != missing}

        response = await test_client.post("/getcustomplan", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    async def test_malformed_user_id(self, mock_db_client, mock_db):
        response = await mock_db_client.post(
            "/getcustomplan", json={"user_id": "nope", "session": "s", "device_id": "d"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid User ID"
        mock_db.__getitem__.assert_not_called()


# ══════════════════════════════════════════════════════════════════════════
# Files & Health
# ══════════════════════════════════════════════════════════════════════════

class TestFilesAndHealth:
    async def test_missing_file(self, test_client):
        response = await test_client.get("/uploads/stretches/2020/01/01/none.jpg")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_traversal_refused(self, test_client):
        response = await test_client.get("/uploads/..%2F..%2Fetc%2Fpasswd")

        assert response.status_code in (400, 404)
        assert response.json()["success"] is False

    async def test_health_connected(self, test_client):
        with patch("yogaworkout.routes.health.ping", new=AsyncMock()):
            response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    async def test_health_disconnected(self, test_client):
        with patch(
            "yogaworkout.routes.health.ping",
            new=AsyncMock(side_effect=ServerSelectionTimeoutError("no servers")),
        ):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


# ══════════════════════════════════════════════════════════════════════════
# Unexpected errors
# ══════════════════════════════════════════════════════════════════════════

class TestUnexpectedErrors:
    async def test_unhandled_error_keeps_request_id(self, test_client):
        with patch(
            "yogaworkout.routes.stretches.stretch_service.list_stretches",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            response = await test_client.get("/stretches", headers={"X-Request-ID": "trace-42"})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-42"
        assert "boom" not in body["message"]
        assert response.headers["X-Request-ID"] == "trace-42"

    async def test_authentication_error_is_401(self, test_client, mongo_db):
        user_id = (await mongo_db["users"].insert_one({"session": "s", "device_id": "d"})).inserted_id
        with patch(
            "yogaworkout.routes.custom_plans.custom_plan_service.list_plans",
            new=AsyncMock(side_effect=AuthenticationError()),
        ):
            response = await test_client.post(
                "/getcustomplan", json={"user_id": str(user_id), "session": "s", "device_id": "d"}
            )

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert response.json()["message"] == "Please login first"
