"""Contracts/Approvals API 흐름과 도메인 예외의 HTTP 상태 코드 매핑을 검증합니다."""

from datetime import datetime

from contract_lifecycle.services import seed_service
from tests.conftest import auth_headers


def _create(client, headers, **overrides):
    payload = {"name": "Master Services Agreement", "parties": "Example Corp, Acme Inc.", "content": "v1"}
    payload.update(overrides)
    resp = client.post("/api/contracts", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_login_and_me(client, seed_users):
    headers = auth_headers(client, "author@example.com")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "Author"

    assert client.post("/api/auth/login", json={"username": "nobody"}).status_code == 401


def test_register_user_and_duplicate(client, seed_users):
    resp = client.post(
        "/api/users",
        json={"username": "new.approver@example.com", "full_name": "New Approver", "role": "Approver"},
    )
    assert resp.status_code == 201
    assert resp.json()["initials"] == "NA"

    dup = client.post(
        "/api/users",
        json={"username": "NEW.approver@example.com", "full_name": "Dup", "role": "Approver"},
    )
    assert dup.status_code == 422


def test_full_lifecycle_over_http(client, seed_users, clock):
    author = auth_headers(client, "author@example.com")
    approver1 = auth_headers(client, "approver1@example.com")
    approver2 = auth_headers(client, "approver2@example.com")

    contract = _create(client, author, expiry_date="2026-12-31")
    cid = contract["contract_id"]
    assert contract["status"] == "Draft"

    resp = client.put(f"/api/contracts/{cid}", json={"content": "v2", "change_description": "edit"}, headers=author)
    assert resp.status_code == 200
    assert resp.json()["content"] == "v2"
    versions = client.get(f"/api/contracts/{cid}/versions", headers=author).json()
    assert [v["content"] for v in versions] == ["v1"]

    assert client.post(f"/api/contracts/{cid}/submit", headers=author).status_code == 200
    assert client.post(f"/api/contracts/{cid}/submit", headers=author).status_code == 409

    pending = client.get("/api/approvals", headers=approver1).json()
    assert len(pending) == 1
    assert len(pending[0]["approvals"]) == 2
    approval_id = pending[0]["approval"]["approval_id"]

    assert client.get("/api/approvals", headers=author).status_code == 403
    resp = client.post(f"/api/approvals/{approval_id}/review", json={"status": "Approved"}, headers=approver1)
    assert resp.status_code == 200
    assert resp.json()["status"] == "Approved"

    other_id = client.get("/api/approvals", headers=approver2).json()[0]["approval"]["approval_id"]
    resp = client.post(f"/api/approvals/{other_id}/review", json={"status": "Rejected"}, headers=approver2)
    assert resp.status_code == 422
    resp = client.post(f"/api/approvals/{other_id}/review", json={"status": "Approved"}, headers=approver2)
    assert resp.status_code == 200
    assert client.get(f"/api/contracts/{cid}", headers=author).json()["status"] == "Approved"

    assert client.post(f"/api/contracts/{cid}/execute", headers=approver1).status_code == 403
    assert client.post(f"/api/contracts/{cid}/execute", headers=author).status_code == 200

    clock.set(datetime(2027, 1, 2, 9, 0))
    resp = client.post("/api/contracts/check-expirations", headers=author)
    assert resp.json()["expired_contract_ids"] == [cid]
    resp = client.post("/api/contracts/check-expirations", headers=author)
    assert resp.json()["expired_contract_ids"] == []
    assert client.post(f"/api/contracts/{cid}/execute", headers=author).status_code == 409

    history = client.get(f"/api/contracts/{cid}/approvals", headers=author).json()
    assert len(history) == 2
    activity = client.get(f"/api/contracts/{cid}/activity", headers=author).json()
    assert activity[0]["action"] == "Contract expired"


def test_error_mapping(client, seed_users):
    author = auth_headers(client, "author@example.com")
    other = auth_headers(client, "second.author@example.com")
    approver = auth_headers(client, "approver1@example.com")

    assert client.get("/api/contracts/999", headers=author).status_code == 404
    assert client.post("/api/contracts", json={"name": "x", "parties": "y", "content": "z"}, headers=approver).status_code == 403

    cid = _create(client, author)["contract_id"]
    assert client.post(f"/api/contracts/{cid}/submit", headers=other).status_code == 403
    assert client.put(f"/api/contracts/{cid}", json={"content": "nope"}, headers=other).status_code == 403
    assert client.post(f"/api/contracts/{cid}/restore/999", headers=author).status_code == 404


def test_submit_without_approvers_returns_400(client):
    client.post("/api/users", json={"username": "solo", "full_name": "Solo Author", "role": "Author"})
    headers = auth_headers(client, "solo")
    cid = _create(client, headers)["contract_id"]
    resp = client.post(f"/api/contracts/{cid}/submit", headers=headers)
    assert resp.status_code == 400
    assert client.get(f"/api/contracts/{cid}", headers=headers).json()["status"] == "Draft"


def test_contract_filters_and_dashboard(client, seed_users):
    author = auth_headers(client, "author@example.com")
    other = auth_headers(client, "second.author@example.com")
    first = _create(client, author, name="Acme NDA")
    _create(client, other, name="Globex Lease", parties="Globex")
    client.post(f"/api/contracts/{first['contract_id']}/submit", headers=author)

    assert len(client.get("/api/contracts", headers=author).json()) == 2
    assert [c["name"] for c in client.get("/api/contracts?mine=true", headers=author).json()] == ["Acme NDA"]
    assert [c["name"] for c in client.get("/api/contracts?q=globex", headers=author).json()] == ["Globex Lease"]
    by_status = client.get("/api/contracts", params={"status": "Pending Approval"}, headers=author).json()
    assert [c["contract_id"] for c in by_status] == [first["contract_id"]]

    stats = client.get("/api/dashboard/stats", headers=author).json()
    assert stats["status_counts"]["Draft"] == 1
    assert stats["status_counts"]["Pending Approval"] == 1
    assert stats["status_counts"]["Expired"] == 0
    assert stats["expiring_soon"] == 0
    assert stats["recent_activities"][0]["action"] == "Contract submitted for approval"
    assert stats["recent_activities"][0]["user"]["username"] == "author@example.com"

    feed = client.get("/api/activity?limit=2", headers=author).json()
    assert len(feed) == 2


def test_seeded_templates_feed_contract_creation(client, seed_users, repo):
    assert seed_service.seed_templates(repo) == 3
    assert seed_service.seed_templates(repo) == 0

    author = auth_headers(client, "author@example.com")
    templates = client.get("/api/templates", headers=author).json()
    assert [t["name"] for t in templates] == ["Non-Disclosure Agreement", "Sales Agreement", "Purchase Order"]
    assert client.get("/api/templates/999", headers=author).status_code == 404

    resp = client.post(
        "/api/contracts",
        json={"name": "Acme NDA", "parties": "Us, Acme", "template_id": templates[0]["template_id"]},
        headers=author,
    )
    assert resp.status_code == 201
    assert resp.json()["content"].startswith("# NON-DISCLOSURE AGREEMENT")


def test_update_with_details_and_content_logs_once(client, seed_users):
    author = auth_headers(client, "author@example.com")
    cid = _create(client, author)["contract_id"]

    resp = client.put(
        f"/api/contracts/{cid}",
        json={"name": "Renamed MSA", "content": "v2", "change_description": "rename and edit"},
        headers=author,
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed MSA"
    assert resp.json()["content"] == "v2"

    actions = [a["action"] for a in client.get(f"/api/contracts/{cid}/activity", headers=author).json()]
    assert actions == ["Contract updated", "Contract created"]
    assert len(client.get(f"/api/contracts/{cid}/versions", headers=author).json()) == 1
