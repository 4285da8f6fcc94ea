"""HTTP tests for the matching, moderation and admin routers."""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from swipematch.db.repositories.log_repository import LogRepository
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.main import app


def as_user(user_id: str) -> dict:
    return {"X-User-Id": user_id}


@pytest_asyncio.fixture
async def client(test_db):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin(make_profile):
    await make_profile("admin", index=9, is_admin=True)
    return "admin"


@pytest.mark.asyncio
class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

        resp = await client.get("/healthz")
        assert resp.json()["status"] == "healthy"

    async def test_request_id_echoed(self, client):
        resp = await client.get("/", headers={"x-request-id": "req-123"})
        assert resp.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
class TestSwipeEndpoint:
    """POST /swipes"""

    async def test_mutual_like_then_replay(self, client):
        resp = await client.post(
            "/swipes", json={"target_user_id": "u2", "direction": "like"}, headers=as_user("u1")
        )
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "matched": False}

        resp = await client.post(
            "/swipes", json={"target_user_id": "u1", "direction": "like"}, headers=as_user("u2")
        )
        assert resp.json() == {"ok": True, "matched": True}

        resp = await client.post(
            "/swipes", json={"target_user_id": "u1", "direction": "like"}, headers=as_user("u2")
        )
        assert resp.json() == {"ok": True, "matched": False}

    async def test_missing_identity(self, client):
        resp = await client.post("/swipes", json={"target_user_id": "u2", "direction": "like"})
        assert resp.status_code == 401

    async def test_invalid_direction(self, client):
        resp = await client.post(
            "/swipes", json={"target_user_id": "u2", "direction": "maybe"}, headers=as_user("u1")
        )
        assert resp.status_code == 400

    async def test_self_swipe(self, client):
        resp = await client.post(
            "/swipes", json={"target_user_id": "u1", "direction": "like"}, headers=as_user("u1")
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
class TestFeedEndpoint:
    """GET /feed"""

    async def test_feed_shrinks_as_viewer_swipes(self, client, make_profile):
        await make_profile("u2", index=2)
        await make_profile("u3", index=3)

        resp = await client.get("/feed", headers=as_user("u1"))
        assert resp.status_code == 200
        assert resp.json()["count"] == 2

        await client.post(
            "/swipes", json={"target_user_id": "u2", "direction": "pass"}, headers=as_user("u1")
        )

        resp = await client.get("/feed", params={"limit": 10}, headers=as_user("u1"))
        body = resp.json()
        assert [c["user_id"] for c in body["candidates"]] == ["u3"]

    async def test_invalid_limit(self, client):
        resp = await client.get("/feed", params={"limit": 0}, headers=as_user("u1"))
        assert resp.status_code == 400


@pytest.mark.asyncio
class TestMatchesEndpoints:
    """GET/DELETE /matches and POST /matches/contacts"""

    async def _match(self, client, a, b):
        for actor, target in ((a, b), (b, a)):
            await client.post(
                "/swipes",
                json={"target_user_id": target, "direction": "like"},
                headers=as_user(actor),
            )

    async def test_list_and_unmatch(self, client):
        await self._match(client, "u1", "u2")

        resp = await client.get("/matches", headers=as_user("u1"))
        matches = resp.json()["matches"]
        assert [m["counterpart_id"] for m in matches] == ["u2"]

        resp = await client.delete("/matches/u2", headers=as_user("u1"))
        assert resp.json() == {"ok": True, "deleted": True}

        resp = await client.get("/matches", headers=as_user("u2"))
        assert resp.json()["matches"] == []

    async def test_contacts_for_matched_only(self, client, make_contact):
        await self._match(client, "u1", "u2")
        await make_contact("u2", whatsapp="+15552220000")
        await make_contact("u3", whatsapp="+15553330000")

        resp = await client.post(
            "/matches/contacts", json={"user_ids": ["u2", "u3"]}, headers=as_user("u1")
        )
        assert resp.status_code == 200
        assert resp.json()["contacts"] == {"u2": "+15552220000"}


@pytest.mark.asyncio
class TestReportEndpoint:
    """POST /reports"""

    async def test_report_unmatches(self, client, make_contact):
        await make_contact("u2", whatsapp="+15552220000")
        for actor, target in (("u1", "u2"), ("u2", "u1")):
            await client.post(
                "/swipes",
                json={"target_user_id": target, "direction": "like"},
                headers=as_user(actor),
            )

        resp = await client.post(
            "/reports",
            json={"reported_user_id": "u2", "reason": "Spam"},
            headers=as_user("u1"),
        )
        assert resp.status_code == 200
        report = resp.json()["report"]
        assert report["status"] == "open"
        assert report["reporter_id"] == "u1"

        resp = await client.post(
            "/matches/contacts", json={"user_ids": ["u2"]}, headers=as_user("u1")
        )
        assert resp.json()["contacts"] == {}

    async def test_self_report(self, client):
        resp = await client.post(
            "/reports", json={"reported_user_id": "u1"}, headers=as_user("u1")
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
class TestAdminEndpoints:
    """/admin routes"""

    async def test_non_admin_forbidden(self, client, make_profile):
        await make_profile("u1")

        resp = await client.get("/admin/matches", headers=as_user("u1"))
        assert resp.status_code == 403

        resp = await client.get("/admin/metrics", headers=as_user("nobody"))
        assert resp.status_code == 403

    async def test_force_match_then_like_is_not_new(self, client, admin):
        resp = await client.post(
            "/admin/force-match", json={"target_user_id": "u1"}, headers=as_user(admin)
        )
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "created": True}

        resp = await client.post(
            "/swipes", json={"target_user_id": admin, "direction": "like"}, headers=as_user("u1")
        )
        assert resp.json()["matched"] is False

        async with UnitOfWork() as uow:
            logs = await uow.logs.get_by_event("admin.force_match")
            assert len(logs) == 1
            assert logs[0].actor_id == admin

    async def test_force_match_self(self, client, admin):
        resp = await client.post(
            "/admin/force-match", json={"target_user_id": admin}, headers=as_user(admin)
        )
        assert resp.status_code == 400

    async def test_list_search_and_delete_match(self, client, admin, make_profile):
        await make_profile("u1", index=1, display_name="Grace Hopper")
        await make_profile("u2", index=2, display_name="Alan Turing")
        for actor, target in (("u1", "u2"), ("u2", "u1")):
            await client.post(
                "/swipes",
                json={"target_user_id": target, "direction": "like"},
                headers=as_user(actor),
            )

        resp = await client.get("/admin/matches", params={"search": "grace"}, headers=as_user(admin))
        matches = resp.json()["matches"]
        assert len(matches) == 1
        assert matches[0]["user_a"]["display_name"] == "Grace Hopper"

        resp = await client.get("/admin/matches", params={"search": "nobody"}, headers=as_user(admin))
        assert resp.json()["matches"] == []

        match_id = matches[0]["id"]
        resp = await client.delete(f"/admin/matches/{match_id}", headers=as_user(admin))
        assert resp.status_code == 200

        resp = await client.delete(f"/admin/matches/{match_id}", headers=as_user(admin))
        assert resp.status_code == 404

        async with UnitOfWork() as uow:
            logs = await uow.logs.get_by_event("admin.unmatch")
            assert [log.match_id for log in logs] == [match_id]

    async def test_delete_match_kept_when_audit_write_fails(self, client, admin, monkeypatch):
        async with UnitOfWork() as uow:
            await uow.matches.upsert_pair("u1", "u2")
            await uow.commit()
            match_id = (await uow.matches.get_for_pair("u1", "u2")).id

        async def broken(self, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(LogRepository, "create_log", broken)

        resp = await client.delete(f"/admin/matches/{match_id}", headers=as_user(admin))
        assert resp.status_code == 503

        async with UnitOfWork() as uow:
            assert await uow.matches.exists_for_pair("u1", "u2") is True

    async def test_force_match_not_applied_when_audit_write_fails(
        self, client, admin, monkeypatch
    ):
        async def broken(self, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(LogRepository, "create_log", broken)

        resp = await client.post(
            "/admin/force-match", json={"target_user_id": "u1"}, headers=as_user(admin)
        )
        assert resp.status_code == 503

        async with UnitOfWork() as uow:
            assert await uow.matches.count() == 0
            assert await uow.swipes.count() == 0

    async def test_report_triage(self, client, admin):
        resp = await client.post(
            "/reports", json={"reported_user_id": "u2", "reason": "Spam"}, headers=as_user("u1")
        )
        report_id = resp.json()["report"]["id"]

        resp = await client.get("/admin/reports", params={"status": "open"}, headers=as_user(admin))
        assert [r["id"] for r in resp.json()["reports"]] == [report_id]

        resp = await client.patch(
            f"/admin/reports/{report_id}", json={"status": "resolved"}, headers=as_user(admin)
        )
        assert resp.status_code == 200
        assert resp.json()["report"]["status"] == "resolved"

        resp = await client.patch(
            f"/admin/reports/{report_id}", json={"status": "closed"}, headers=as_user(admin)
        )
        assert resp.status_code == 400

        resp = await client.patch(
            "/admin/reports/9999", json={"status": "resolved"}, headers=as_user(admin)
        )
        assert resp.status_code == 404

    async def test_metrics(self, client, admin):
        await client.post(
            "/swipes", json={"target_user_id": "u2", "direction": "like"}, headers=as_user("u1")
        )

        resp = await client.get("/admin/metrics", headers=as_user(admin))
        assert resp.status_code == 200
        assert resp.json()["swipes"]["likes"] == 1
