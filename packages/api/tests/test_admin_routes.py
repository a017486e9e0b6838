# This project was developed with assistance from AI tools.
"""Tests for the admin review JSON API."""

from unittest.mock import AsyncMock

import pytest
from producer_db.enums import ApplicationStatus
from sqlalchemy.exc import OperationalError

from producer_api.services.credentials import get_credential_store

from .factories import login_admin, make_application, make_mock_session


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


def test_login_accepts_any_non_blank_pair(make_client):
    client = make_client()

    resp = client.post("/api/admin/login", json={"email": "a@b.c", "password": "x"})

    assert resp.status_code == 200
    assert resp.json()["session"] == {"authenticated": True, "email": "a@b.c"}


@pytest.mark.parametrize(
    "payload",
    [{"email": "", "password": "x"}, {"email": "a@b.c", "password": "  "}],
)
def test_login_rejects_blank_fields(make_client, payload):
    client = make_client()

    resp = client.post("/api/admin/login", json=payload)

    assert resp.status_code == 422
    assert client.get("/api/admin/applications").status_code == 401


def test_logout_ends_session(make_client):
    client = make_client()
    login_admin(client)

    resp = client.post("/api/admin/logout")

    assert resp.json()["session"]["authenticated"] is False
    assert client.get("/api/admin/applications").status_code == 401


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/admin/applications"),
        ("get", "/api/admin/applications/app-0001"),
        ("post", "/api/admin/applications/app-0001/approve"),
        ("post", "/api/admin/applications/app-0001/reject"),
    ],
)
def test_admin_routes_require_session(make_client, method, path):
    session = make_mock_session(single=make_application())
    client = make_client(session=session)

    kwargs = {"json": {"confirm": True, "reason": "x"}} if method == "post" else {}
    resp = getattr(client, method)(path, **kwargs)

    assert resp.status_code == 401
    assert resp.json()["title"] == "Unauthorized"
    session.execute.assert_not_awaited()


# ---------------------------------------------------------------------------
# Dashboard + detail
# ---------------------------------------------------------------------------


def test_list_applications_with_counts(make_client):
    items = [make_application(id="b"), make_application(id="a", status=ApplicationStatus.APPROVED)]
    session = make_mock_session(
        items=items,
        rows=[(ApplicationStatus.PENDING, 1), (ApplicationStatus.APPROVED, 1)],
    )
    client = make_client(session=session)
    login_admin(client)

    resp = client.get("/api/admin/applications")

    assert resp.status_code == 200
    body = resp.json()
    assert [a["id"] for a in body["data"]] == ["b", "a"]
    assert body["counts"] == {"total": 2, "pending": 1, "approved": 1, "rejected": 0}


def test_list_applications_rejects_unknown_status(make_client):
    client = make_client()
    login_admin(client)

    resp = client.get("/api/admin/applications", params={"status": "ARCHIVED"})

    assert resp.status_code == 422


def test_detail_lists_actions_while_pending(make_client):
    client = make_client(session=make_mock_session(single=make_application()))
    login_admin(client)

    resp = client.get("/api/admin/applications/app-0001")

    assert resp.status_code == 200
    assert resp.json()["available_actions"] == ["approve", "reject"]


def test_detail_has_no_actions_once_decided(make_client):
    record = make_application(status=ApplicationStatus.APPROVED)
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.get("/api/admin/applications/app-0001")

    assert resp.json()["available_actions"] == []


def test_detail_unknown_returns_404(make_client):
    client = make_client(session=make_mock_session(single=None))
    login_admin(client)

    assert client.get("/api/admin/applications/missing").status_code == 404


# ---------------------------------------------------------------------------
# Approve / reject
# ---------------------------------------------------------------------------


def test_approve_returns_credentials_once(make_client):
    record = make_application()
    client = make_client(session=make_mock_session(single=record))
    login_admin(client, email="reviewer@example.com")

    resp = client.post("/api/admin/applications/app-0001/approve", json={"confirm": True})

    assert resp.status_code == 200
    body = resp.json()
    assert body["application"]["status"] == "APPROVED"
    assert body["application"]["notes"] == "Approved via admin review"
    assert body["application"]["reviewed_by"] == "reviewer@example.com"
    assert body["credentials"]["username"].startswith("producer_")
    assert len(body["credentials"]["password"]) == 10
    # the record itself never carries credentials
    assert "password" not in body["application"]
    assert get_credential_store().get("app-0001").username == body["credentials"]["username"]


def test_approve_without_confirm_returns_422(make_client):
    record = make_application()
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.post("/api/admin/applications/app-0001/approve", json={})

    assert resp.status_code == 422
    assert record.status == ApplicationStatus.PENDING


def test_approve_decided_returns_409(make_client):
    record = make_application(status=ApplicationStatus.REJECTED)
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.post("/api/admin/applications/app-0001/approve", json={"confirm": True})

    assert resp.status_code == 409
    assert record.status == ApplicationStatus.REJECTED


def test_approve_unknown_returns_404(make_client):
    client = make_client(session=make_mock_session(single=None))
    login_admin(client)

    resp = client.post("/api/admin/applications/missing/approve", json={"confirm": True})

    assert resp.status_code == 404


def test_reject_with_reason(make_client):
    record = make_application()
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.post(
        "/api/admin/applications/app-0001/reject",
        json={"confirm": True, "reason": "incomplete documents"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "REJECTED"
    assert body["notes"] == "incomplete documents"
    assert body["review_date"] is not None


def test_reject_without_reason_returns_422(make_client):
    record = make_application()
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.post("/api/admin/applications/app-0001/reject", json={"confirm": True})

    assert resp.status_code == 422
    assert "reason" in resp.json()["detail"]
    assert record.status == ApplicationStatus.PENDING


def test_reject_approved_returns_409(make_client):
    record = make_application(status=ApplicationStatus.APPROVED)
    client = make_client(session=make_mock_session(single=record))
    login_admin(client)

    resp = client.post(
        "/api/admin/applications/app-0001/reject",
        json={"confirm": True, "reason": "late"},
    )

    assert resp.status_code == 409


def test_database_failure_returns_503_problem(make_client):
    session = make_mock_session()
    session.execute = AsyncMock(
        side_effect=OperationalError("SELECT 1", {}, ConnectionRefusedError("db down"))
    )
    client = make_client(session=session)
    login_admin(client)

    resp = client.get("/api/admin/applications")

    assert resp.status_code == 503
    body = resp.json()
    assert body["title"] == "Service Unavailable"
    assert body["instance"] == "/api/admin/applications"


# ---------------------------------------------------------------------------
# Credential delivery
# ---------------------------------------------------------------------------


def test_marking_credentials_delivered_empties_store(make_client):
    client = make_client(session=make_mock_session(single=make_application()))
    login_admin(client)
    client.post("/api/admin/applications/app-0001/approve", json={"confirm": True})
    assert len(get_credential_store()) == 1

    resp = client.post("/api/admin/applications/app-0001/credentials/delivered")

    assert resp.status_code == 204
    assert len(get_credential_store()) == 0

    again = client.post("/api/admin/applications/app-0001/credentials/delivered")
    assert again.status_code == 404


def test_marking_delivered_requires_session(make_client):
    client = make_client()

    resp = client.post("/api/admin/applications/app-0001/credentials/delivered")

    assert resp.status_code == 401
