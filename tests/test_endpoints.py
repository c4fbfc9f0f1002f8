"""Endpoint tests — FastAPI app via httpx with a fake repository."""

from __future__ import annotations

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import app
from app.tracker.models import BacklogCategory, DayStatus, Quadrant

from tests.conftest import make_backlog_item, make_entry, make_goal, make_task


class TestMonthAnalyticsEndpoint:
    @pytest.mark.asyncio
    async def test_empty_month_200(self, client):
        resp = await client.get("/tracker/analytics/month?year=2025&month=2")
        assert resp.status_code == 200
        body = resp.json()
        assert body["year"] == 2025
        assert body["month"] == 2
        assert body["total_goals"] == 0
        assert body["best_performing_goal"] is None
        assert len(body["daily_hit_rate"]) == 28

    @pytest.mark.asyncio
    async def test_defaults_to_current_month(self, client, fixed_today):
        resp = await client.get("/tracker/analytics/month")
        assert resp.status_code == 200
        body = resp.json()
        assert (body["year"], body["month"]) == (fixed_today.year, fixed_today.month)

    @pytest.mark.asyncio
    async def test_queries_whole_month_range(self, client, fake_repository):
        await client.get("/tracker/analytics/month?year=2024&month=2")
        assert fake_repository.entry_queries == [(date(2024, 2, 1), date(2024, 2, 29))]

    @pytest.mark.asyncio
    async def test_with_data(self, client, fake_repository):
        fake_repository.goals = [make_goal("a"), make_goal("b")]
        fake_repository.entries = [
            make_entry("a", date(2025, 3, 1), DayStatus.hit),
            make_entry("a", date(2025, 3, 2), DayStatus.hit),
            make_entry("b", date(2025, 3, 1), DayStatus.miss, missed_reason="Travel"),
        ]
        # fixed_today is 2025-03-20, so March counts 20 days.
        resp = await client.get("/tracker/analytics/month?year=2025&month=3")
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_goals"] == 2
        assert body["best_performing_goal"] == "a"
        assert body["worst_performing_goal"] == "b"
        assert body["most_frequent_missed_reasons"] == [{"reason": "Travel", "count": 1}]
        assert body["daily_hit_rate"][0] == {"date": "2025-03-01", "rate": 50.0}
        ga = {g["goal_id"]: g for g in body["goal_analytics"]}
        assert ga["a"]["total_days"] == 20
        assert ga["a"]["hit_days"] == 2

    @pytest.mark.asyncio
    async def test_invalid_month_422(self, client):
        resp = await client.get("/tracker/analytics/month?year=2025&month=13")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_month_zero_422(self, client):
        resp = await client.get("/tracker/analytics/month?year=2025&month=0")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_other_user_sees_nothing(self, client, fake_repository):
        fake_repository.goals = [make_goal("a")]
        resp = await client.get(
            "/tracker/analytics/month?year=2025&month=3", headers={"X-User-Id": "someone-else"}
        )
        assert resp.status_code == 200
        assert resp.json()["total_goals"] == 0


class TestGoalAnalyticsEndpoint:
    @pytest.mark.asyncio
    async def test_goal_200(self, client, fake_repository):
        fake_repository.goals = [make_goal("a", allocated_minutes=15, weekend=True)]
        fake_repository.entries = [make_entry("a", date(2025, 2, 1), DayStatus.hit, actual_minutes=20)]

        resp = await client.get("/tracker/analytics/goals/a?year=2025&month=2")
        assert resp.status_code == 200
        body = resp.json()
        assert body["goal_id"] == "a"
        assert body["total_days"] == 8  # February 2025 has 8 weekend days
        assert body["hit_days"] == 1
        assert body["total_allocated_minutes"] == 120
        assert body["total_actual_minutes"] == 20
        assert body["current_streak"] == 0
        assert body["longest_streak"] == 1

    @pytest.mark.asyncio
    async def test_unknown_goal_404(self, client):
        resp = await client.get("/tracker/analytics/goals/missing?year=2025&month=3")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_foreign_goal_404(self, client, fake_repository):
        fake_repository.goals = [make_goal("a")]
        resp = await client.get("/tracker/analytics/goals/a", headers={"X-User-Id": "intruder"})
        assert resp.status_code == 404


class TestBoardEndpoints:
    @pytest.mark.asyncio
    async def test_operations(self, client, fake_repository):
        fake_repository.tasks = [
            make_task("1", Quadrant.do_first, date(2025, 3, 18), completed=date(2025, 3, 19)),
            make_task("2", Quadrant.delegate, date(2025, 3, 18)),
        ]
        resp = await client.get("/tracker/analytics/operations")
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 2
        assert body["completion_rate"] == 50.0
        assert len(body["quadrants"]) == 4
        assert len(body["weekly"]) == 8
        assert body["weekly"][-1] == {"week_start": "2025-03-17", "created": 2, "completed": 1}

    @pytest.mark.asyncio
    async def test_vision(self, client, fake_repository):
        fake_repository.backlog = [
            make_backlog_item("1", BacklogCategory.books, estimated_hours=4),
            make_backlog_item("2", BacklogCategory.concepts, completed=True),
        ]
        resp = await client.get("/tracker/analytics/vision")
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_items"] == 2
        assert body["estimated_hours"] == 4
        assert body["categories_with_items"] == 2


class TestCatalogEndpoint:
    @pytest.mark.asyncio
    async def test_catalog(self, client):
        resp = await client.get("/tracker/catalog")
        assert resp.status_code == 200
        data = resp.json()
        assert "Meeting" in data["missed_reasons"]
        assert [q["key"] for q in data["quadrants"]] == ["do-first", "schedule", "delegate", "eliminate"]
        assert len(data["backlog_categories"]) == 5
        assert data["goal_scopes"] == ["all", "weekday", "weekend"]


class TestGuards:
    @pytest.mark.asyncio
    async def test_missing_user_401(self, override_repository, monkeypatch):
        monkeypatch.setattr(settings, "default_user_id", None)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/tracker/analytics/month?year=2025&month=3")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_default_user_fallback(self, override_repository, monkeypatch):
        monkeypatch.setattr(settings, "default_user_id", override_repository.owner)
        override_repository.goals = [make_goal("a")]
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/tracker/analytics/month?year=2025&month=3")
        assert resp.status_code == 200
        assert resp.json()["total_goals"] == 1

    @pytest.mark.asyncio
    async def test_api_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "tracker_api_key", "secret")
        resp = await client.get("/tracker/catalog")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_api_key_header_accepted(self, client, monkeypatch):
        monkeypatch.setattr(settings, "tracker_api_key", "secret")
        resp = await client.get("/tracker/catalog", headers={"X-API-Key": "secret"})
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_bearer_token_accepted(self, client, monkeypatch):
        monkeypatch.setattr(settings, "tracker_api_key", "secret")
        resp = await client.get("/tracker/analytics/vision", headers={"Authorization": "Bearer secret"})
        assert resp.status_code == 200


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_root_lists_tracker_routes(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json()["tracker"]["month_analytics"] == "/tracker/analytics/month"
