"""
API tests for Checkday
Authentication, template, today's checklist, resets, recap and export
"""
from datetime import timedelta

import pytest

from checkday.core.dates import day_key
from checkday.dependencies import get_daily_store
from checkday.main import app
from checkday.services.auth import create_access_token
from checkday.services.confirmation import RESET_TEMPLATE, issue_confirmation


class TestAuthentication:
    """Authentication tests"""

    @pytest.mark.asyncio
    async def test_register_new_user(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"email": "New.User@Example.com", "password": "TestPassword123!"}
        )

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        data = response.json()
        assert "access_token" in data
        assert data["user"]["email"] == "new.user@example.com"
        assert "password_hash" not in data["user"]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client, registered_user):
        response = await client.post("/api/auth/register", json=registered_user["credentials"])

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "password": "TestPassword123!"},
        {"email": "short@example.com", "password": "123"},
    ])
    async def test_register_rejects_bad_input(self, client, payload):
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_login_success(self, client, registered_user):
        response = await client.post("/api/auth/login", json=registered_user["credentials"])

        assert response.status_code == 200
        assert response.json()["user"]["id"] == registered_user["user"]["id"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, registered_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": registered_user["credentials"]["email"], "password": "WrongPassword123!"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_current_user(self, client, registered_user):
        response = await client.get("/api/auth/me", headers=registered_user["headers"])

        assert response.status_code == 200
        assert response.json()["email"] == registered_user["credentials"]["email"]

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer invalid_token"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_unknown_user(self, client):
        token = create_access_token("ghost", "ghost@example.com")
        response = await client.get("/api/today", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_confirmation_token_is_not_a_login(self, client, registered_user):
        token = issue_confirmation(registered_user["user"]["id"], RESET_TEMPLATE, "any-state")
        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_auth(self, client):
        assert (await client.get("/api/today")).status_code == 401
        assert (await client.get("/api/template")).status_code == 401
        assert (await client.get("/api/recap")).status_code == 401


class TestTemplate:
    """Template endpoints"""

    @pytest.mark.asyncio
    async def test_default_template(self, client, registered_user):
        response = await client.get("/api/template", headers=registered_user["headers"])

        assert response.status_code == 200
        items = response.json()["items"]
        assert [i["priority"] for i in items] == ["med", "high", "low"]

    @pytest.mark.asyncio
    async def test_add_edit_remove(self, client, registered_user):
        headers = registered_user["headers"]

        response = await client.post(
            "/api/template/items", json={"title": "Plan tomorrow", "priority": "urgent"}, headers=headers
        )
        items = response.json()["items"]
        assert items[0]["title"] == "Plan tomorrow"
        assert items[0]["priority"] == "med"

        item_id = items[0]["id"]
        response = await client.put(
            f"/api/template/items/{item_id}", json={"title": "Plan the week", "priority": "high"}, headers=headers
        )
        assert response.json()["items"][0] == {"id": item_id, "title": "Plan the week", "priority": "high"}

        response = await client.delete(f"/api/template/items/{item_id}", headers=headers)
        assert item_id not in [i["id"] for i in response.json()["items"]]

    @pytest.mark.asyncio
    async def test_blank_title_is_ignored(self, client, registered_user):
        headers = registered_user["headers"]
        before = (await client.get("/api/template", headers=headers)).json()

        response = await client.post("/api/template/items", json={"title": "   "}, headers=headers)

        assert response.status_code == 200
        assert response.json() == before

    @pytest.mark.asyncio
    async def test_reset_needs_confirmation(self, client, registered_user):
        headers = registered_user["headers"]
        await client.post("/api/template/items", json={"title": "Custom"}, headers=headers)

        prompt = await client.post("/api/template/reset", headers=headers)
        assert prompt.status_code == 200
        assert prompt.json()["action"] == "reset_template"

        template = (await client.get("/api/template", headers=headers)).json()["items"]
        assert "Custom" in [i["title"] for i in template]

        response = await client.post(
            "/api/template/reset/confirm", json={"token": prompt.json()["confirm_token"]}, headers=headers
        )
        assert response.status_code == 200
        assert "Custom" not in [i["title"] for i in response.json()["items"]]
        assert len(response.json()["items"]) == 3

    @pytest.mark.asyncio
    async def test_reset_rejects_bad_token(self, client, registered_user):
        response = await client.post(
            "/api/template/reset/confirm", json={"token": "forged"}, headers=registered_user["headers"]
        )
        assert response.status_code == 400


    @pytest.mark.asyncio
    async def test_title_only_edit_keeps_priority(self, client, registered_user):
        headers = registered_user["headers"]
        high = (await client.get("/api/template", headers=headers)).json()["items"][1]

        response = await client.put(f"/api/template/items/{high['id']}", json={"title": "Chase replies"}, headers=headers)

        assert response.json()["items"][1] == {"id": high["id"], "title": "Chase replies", "priority": "high"}

    @pytest.mark.asyncio
    async def test_search_and_priority_filter(self, client, registered_user):
        headers = registered_user["headers"]

        response = await client.get("/api/template", params={"q": "  EMAIL "}, headers=headers)
        assert [i["title"] for i in response.json()["items"]] == ["Check incoming email"]

        response = await client.get("/api/template", params={"priority": "low"}, headers=headers)
        assert [i["title"] for i in response.json()["items"]] == ["Tidy up work documents"]

        response = await client.get("/api/template", params={"q": "email", "priority": "low"}, headers=headers)
        assert response.json()["items"] == []

    @pytest.mark.asyncio
    async def test_reset_token_works_once(self, client, registered_user):
        headers = registered_user["headers"]
        prompt = (await client.post("/api/template/reset", headers=headers)).json()
        token = {"token": prompt["confirm_token"]}

        assert (await client.post("/api/template/reset/confirm", json=token, headers=headers)).status_code == 200
        await client.post("/api/template/items", json={"title": "Added later"}, headers=headers)

        response = await client.post("/api/template/reset/confirm", json=token, headers=headers)
        assert response.status_code == 400
        template = (await client.get("/api/template", headers=headers)).json()["items"]
        assert template[0]["title"] == "Added later"


class TestToday:
    """Today's checklist endpoints"""

    @pytest.mark.asyncio
    async def test_first_visit_seeds(self, client, registered_user, today):
        response = await client.get("/api/today", headers=registered_user["headers"])

        assert response.status_code == 200
        data = response.json()
        assert data["day"] == day_key(today)
        assert len(data["tasks"]) == 3
        assert not any(t["done"] for t in data["tasks"])
        assert data["summary"] == {
            "total": 3, "done": 0, "undone": 3, "progress": 0, "high": 1, "med": 1, "low": 1
        }
        assert data["streak"] == 0

    @pytest.mark.asyncio
    async def test_mutations(self, client, registered_user):
        headers = registered_user["headers"]
        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]

        data = (await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)).json()
        assert data["tasks"][0]["done"] is True

        data = (await client.post("/api/today/items", json={"title": "Call mom", "priority": "high"}, headers=headers)).json()
        assert data["tasks"][0]["title"] == "Call mom"
        new_id = data["tasks"][0]["id"]

        data = (await client.put(f"/api/today/items/{new_id}", json={"title": "Call dad", "priority": "low"}, headers=headers)).json()
        assert data["tasks"][0]["title"] == "Call dad"
        assert data["tasks"][0]["priority"] == "low"

        data = (await client.delete(f"/api/today/items/{new_id}", headers=headers)).json()
        assert new_id not in [t["id"] for t in data["tasks"]]

        data = (await client.post("/api/today/complete-all", headers=headers)).json()
        assert data["summary"]["progress"] == 100
        assert data["streak"] == 1

        data = (await client.post("/api/today/clear-all", headers=headers)).json()
        assert data["summary"]["done"] == 0
        assert data["streak"] == 0

    @pytest.mark.asyncio
    async def test_template_edit_does_not_change_today(self, client, registered_user):
        headers = registered_user["headers"]
        before = (await client.get("/api/today", headers=headers)).json()["tasks"]
        template = (await client.get("/api/template", headers=headers)).json()["items"]

        await client.put(f"/api/template/items/{template[0]['id']}", json={"title": "Changed"}, headers=headers)

        after = (await client.get("/api/today", headers=headers)).json()["tasks"]
        assert after == before

    @pytest.mark.asyncio
    async def test_reset_flow(self, client, registered_user):
        headers = registered_user["headers"]
        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]
        await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)

        prompt = (await client.post("/api/today/reset", headers=headers)).json()
        assert prompt["action"] == "reset_today"
        assert prompt["expires_in_seconds"] > 0

        still = (await client.get("/api/today", headers=headers)).json()
        assert still["summary"]["done"] == 1

        data = (await client.post("/api/today/reset/confirm", json={"token": prompt["confirm_token"]}, headers=headers)).json()
        assert data["summary"]["done"] == 0
        assert len(data["tasks"]) == 3
        assert {t["id"] for t in data["tasks"]}.isdisjoint({t["id"] for t in tasks})

    @pytest.mark.asyncio
    async def test_reset_token_is_per_action(self, client, registered_user):
        headers = registered_user["headers"]
        prompt = (await client.post("/api/template/reset", headers=headers)).json()

        response = await client.post("/api/today/reset/confirm", json={"token": prompt["confirm_token"]}, headers=headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_store_outage_still_serves_list(self, client, registered_user, broken_store, reporter):
        app.dependency_overrides[get_daily_store] = lambda: broken_store

        response = await client.get("/api/today", headers=registered_user["headers"])

        assert response.status_code == 200
        assert len(response.json()["tasks"]) == 3
        assert response.json()["streak"] == 0
        assert "daily.load" in reporter.operations


    @pytest.mark.asyncio
    async def test_reset_token_cannot_be_replayed(self, client, registered_user):
        headers = registered_user["headers"]
        await client.get("/api/today", headers=headers)
        prompt = (await client.post("/api/today/reset", headers=headers)).json()
        token = {"token": prompt["confirm_token"]}

        tasks = (await client.post("/api/today/reset/confirm", json=token, headers=headers)).json()["tasks"]
        data = (await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)).json()
        assert data["summary"]["done"] == 1

        response = await client.post("/api/today/reset/confirm", json=token, headers=headers)

        assert response.status_code == 400
        assert (await client.get("/api/today", headers=headers)).json()["summary"]["done"] == 1

    @pytest.mark.asyncio
    async def test_reset_token_is_stale_after_a_change(self, client, registered_user):
        headers = registered_user["headers"]
        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]
        prompt = (await client.post("/api/today/reset", headers=headers)).json()

        await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)

        response = await client.post(
            "/api/today/reset/confirm", json={"token": prompt["confirm_token"]}, headers=headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_title_only_edit_keeps_priority(self, client, registered_user):
        headers = registered_user["headers"]
        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]
        high = next(t for t in tasks if t["priority"] == "high")

        data = (await client.put(f"/api/today/items/{high['id']}", json={"title": "renamed"}, headers=headers)).json()

        edited = next(t for t in data["tasks"] if t["id"] == high["id"])
        assert edited["title"] == "renamed"
        assert edited["priority"] == "high"

    @pytest.mark.asyncio
    async def test_add_without_priority_is_med(self, client, registered_user):
        data = (await client.post("/api/today/items", json={"title": "Stretch"}, headers=registered_user["headers"])).json()
        assert data["tasks"][0]["priority"] == "med"

    @pytest.mark.asyncio
    async def test_list_filters(self, client, registered_user):
        headers = registered_user["headers"]
        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]
        await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)

        data = (await client.get("/api/today", params={"status": "done"}, headers=headers)).json()
        assert [t["id"] for t in data["tasks"]] == [tasks[0]["id"]]
        assert data["summary"]["total"] == 3
        assert data["summary"]["done"] == 1

        data = (await client.get("/api/today", params={"status": "undone", "priority": "high"}, headers=headers)).json()
        assert [t["title"] for t in data["tasks"]] == ["Follow up on pending items"]

        data = (await client.get("/api/today", params={"q": "DOCUMENTS"}, headers=headers)).json()
        assert [t["title"] for t in data["tasks"]] == ["Tidy up work documents"]

        data = (await client.get("/api/today", params={"undone_first": "true"}, headers=headers)).json()
        assert [t["id"] for t in data["tasks"]] == [tasks[1]["id"], tasks[2]["id"], tasks[0]["id"]]

    @pytest.mark.asyncio
    async def test_unknown_filter_value_rejected(self, client, registered_user):
        response = await client.get("/api/today", params={"status": "pending"}, headers=registered_user["headers"])
        assert response.status_code == 422


class TestRecap:
    """Recap, streak and CSV export"""

    @pytest.mark.asyncio
    async def test_empty_recap(self, client, registered_user):
        response = await client.get("/api/recap", headers=registered_user["headers"])

        assert response.status_code == 200
        data = response.json()
        assert data["days"] == 7
        assert len(data["rows"]) == 7
        assert data["empty"] is True

    @pytest.mark.asyncio
    async def test_window_bounds(self, client, registered_user):
        headers = registered_user["headers"]
        assert (await client.get("/api/recap?days=30", headers=headers)).status_code == 200
        assert (await client.get("/api/recap?days=0", headers=headers)).status_code == 422
        assert (await client.get("/api/recap?days=31", headers=headers)).status_code == 422

    @pytest.mark.asyncio
    async def test_streak_breaks_at_empty_day(self, client, registered_user, daily_store, today):
        user_id = registered_user["user"]["id"]
        full = [{"id": "x", "title": "x", "done": True, "priority": "med"}]
        daily_store.put(user_id, day_key(today), full)
        daily_store.put(user_id, day_key(today - timedelta(days=1)), full)
        daily_store.put(user_id, day_key(today - timedelta(days=2)), [])
        daily_store.put(user_id, day_key(today - timedelta(days=3)), full)

        response = await client.get("/api/streak", headers=registered_user["headers"])

        assert response.json() == {"streak": 2}

    @pytest.mark.asyncio
    async def test_export_csv(self, client, registered_user, daily_store, today):
        user_id = registered_user["user"]["id"]
        daily_store.put(user_id, day_key(today), [
            {"id": str(i), "title": f"t{i}", "done": i < 3, "priority": "med"} for i in range(5)
        ])

        response = await client.get("/api/recap/export?days=7", headers=registered_user["headers"])

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert f'filename="recap_7days_{day_key(today)}.csv"' in response.headers["content-disposition"]
        lines = response.text.split("\n")
        assert lines[0] == "date,done,total,percent,fullDone"
        assert lines[1] == f"{day_key(today)},3,5,60,no"
        assert len(lines) == 8

    @pytest.mark.asyncio
    async def test_end_to_end_first_day(self, client, registered_user, today):
        """Default template, first load, two of three done"""
        headers = registered_user["headers"]

        template = (await client.get("/api/template", headers=headers)).json()["items"]
        assert len(template) == 3

        tasks = (await client.get("/api/today", headers=headers)).json()["tasks"]
        assert len(tasks) == 3

        await client.post(f"/api/today/items/{tasks[0]['id']}/toggle", headers=headers)
        data = (await client.post(f"/api/today/items/{tasks[1]['id']}/toggle", headers=headers)).json()
        assert data["summary"]["done"] == 2
        assert data["summary"]["progress"] == 67

        recap = (await client.get("/api/recap?days=1", headers=headers)).json()
        assert recap["rows"] == [
            {"date": day_key(today), "total": 3, "done": 2, "percent": 67, "full_done": False}
        ]
        assert recap["streak"] == 0
