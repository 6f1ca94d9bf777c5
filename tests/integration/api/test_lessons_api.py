"""API tests for lesson and revenue endpoints"""

import pytest
from datetime import timedelta

from src.domain.base import utc_now


def lesson_payload(seed, start, hours=1.5):
    return {
        "workspace_id": seed["workspace"].id,
        "teacher_id": seed["teacher"].id,
        "customer_id": seed["customer"].id,
        "student_id": seed["student"].id,
        "title": "English B2",
        "start": start.isoformat(),
        "end": (start + timedelta(hours=hours)).isoformat(),
        "lesson_type": "online",
    }


@pytest.mark.asyncio
class TestLessonsApi:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_schedule_and_revenue_overview(self, client, seed):
        start = (utc_now() + timedelta(days=10)).replace(minute=0, second=0, microsecond=0)

        response = await client.post("/api/lessons", json=lesson_payload(seed, start))

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "scheduled"
        assert body["is_billable"] is True

        overview = await client.get(f"/api/revenue/{seed['workspace'].id}/{start.year}")
        assert overview.status_code == 200
        months = {m["month"]: m["amount"] for m in overview.json()["months"]}
        assert len(months) == 12
        assert float(months[start.month]) == 60.0

    async def test_invalid_lesson_time(self, client, seed):
        start = utc_now() + timedelta(days=1)
        payload = lesson_payload(seed, start, hours=-1)

        response = await client.post("/api/lessons", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LESSON_TIME"

    async def test_too_late_cancellation_is_conflict(self, client, seed):
        start = utc_now() + timedelta(hours=3)
        created = (await client.post("/api/lessons", json=lesson_payload(seed, start))).json()

        response = await client.post(
            f"/api/lessons/{created['lesson_id']}/status",
            json={"status": "cancelled_on_time", "user_id": seed["teacher"].id},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CANCELLATION_TOO_LATE"

    async def test_late_cancellation(self, client, seed):
        start = utc_now() + timedelta(hours=3)
        created = (await client.post("/api/lessons", json=lesson_payload(seed, start))).json()

        response = await client.post(
            f"/api/lessons/{created['lesson_id']}/status",
            json={"status": "cancelled_late", "user_id": seed["teacher"].id, "cancellation_reason": "Sick"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled_late"
        assert response.json()["is_billable"] is True

    async def test_unknown_lesson(self, client, seed):
        response = await client.post(
            "/api/lessons/9999/status", json={"status": "attended", "user_id": seed["teacher"].id}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LESSON_NOT_FOUND"

    async def test_delete_lesson(self, client, seed):
        start = utc_now() + timedelta(days=2)
        created = (await client.post("/api/lessons", json=lesson_payload(seed, start))).json()

        response = await client.delete(f"/api/lessons/{created['lesson_id']}")

        assert response.status_code == 200
        assert response.json()["detached_invoice_items"] == 0
