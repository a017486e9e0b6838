#!/usr/bin/env python3
# This project was developed with assistance from AI tools.
"""Live smoke suite for the Producer Onboarding API.

Drives a running server through the whole lifecycle: health, submission
with two generated PDFs, admin login, dashboard, approve, reject, and the
error paths that should leave records untouched.

Prerequisites:
  - API server running on localhost:8000
  - PostgreSQL migrated (alembic upgrade head) and MinIO reachable

Usage:
  ./scripts/live-tests.py                    # full suite
  ./scripts/live-tests.py --base http://host:8000
"""

import argparse
import asyncio
import sys
import uuid

import httpx

BASE = "http://localhost:8000"

# ---------------------------------------------------------------------------
# Test runner
# ---------------------------------------------------------------------------

PASS = 0
FAIL = 0
ERRORS: list[str] = []
SECTION = ""


def section(name: str):
    global SECTION
    SECTION = name
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}\n")


def ok(name: str, passed: bool, detail: str = ""):
    global PASS, FAIL
    if passed:
        PASS += 1
        print(f"  PASS  {name}")
    else:
        FAIL += 1
        msg = f"[{SECTION}] {name}: {detail}" if detail else f"[{SECTION}] {name}"
        ERRORS.append(msg)
        print(f"  FAIL  {name} -- {detail}")


def pdf(name: str, size: int = 64 * 1024) -> tuple[str, bytes, str]:
    body = b"%PDF-1.4\n" + b"0" * (size - 9)
    return (name, body, "application/pdf")


def applicant(tag: str) -> dict:
    return {
        "full_name": f"Live Test {tag}",
        "email": f"live-{tag}@example.com",
        "cooperative_name": "Smoke Test Co-op",
    }


# ---------------------------------------------------------------------------
# 1. Health
# ---------------------------------------------------------------------------


async def test_health(c: httpx.AsyncClient):
    section("Health")

    r = await c.get("/health/")
    ok("GET /health/ returns 200", r.status_code == 200)
    data = r.json()
    ok("API is healthy", any(s.get("name") == "API" and s.get("status") == "healthy" for s in data))
    ok("Database is healthy", any(s.get("name") == "Database" and s.get("status") == "healthy" for s in data))

    r = await c.get("/")
    ok("landing page renders", r.status_code == 200 and "/apply" in r.text)

    r = await c.get("/no-such-page")
    ok("unknown page returns 404 page", r.status_code == 404 and "Page not found" in r.text)


# ---------------------------------------------------------------------------
# 2. Submission
# ---------------------------------------------------------------------------


async def submit(c: httpx.AsyncClient, tag: str) -> str | None:
    files = {"aadhaar_file": pdf("aadhaar.pdf"), "land_record_file": pdf("land.pdf")}
    r = await c.post("/api/applications/", data=applicant(tag), files=files)
    if r.status_code != 201:
        ok(f"submit {tag} returns 201", False, f"got {r.status_code}: {r.text[:200]}")
        return None
    return r.json()["id"]


async def test_submission(c: httpx.AsyncClient) -> list[str]:
    section("Submission")
    tag = uuid.uuid4().hex[:8]

    ids = [i for i in [await submit(c, f"{tag}-a"), await submit(c, f"{tag}-b")] if i]
    ok("two applications created", len(ids) == 2)

    if ids:
        r = await c.get(f"/api/applications/{ids[0]}/status")
        body = r.json()
        ok("status lookup returns 200", r.status_code == 200)
        ok("new application is PENDING", body.get("status") == "PENDING")
        ok("both documents linked", body.get("is_submission_complete") is True)

    r = await c.post(
        "/api/applications/",
        data={**applicant(tag), "full_name": ""},
        files={"aadhaar_file": pdf("a.pdf"), "land_record_file": pdf("l.pdf")},
    )
    ok("blank name returns 422", r.status_code == 422)

    r = await c.post(
        "/api/applications/",
        data=applicant(tag),
        files={
            "aadhaar_file": pdf("big.pdf", size=6 * 1024 * 1024),
            "land_record_file": pdf("l.pdf"),
        },
    )
    ok("6 MB document returns 422", r.status_code == 422)

    r = await c.post(
        "/api/applications/",
        data=applicant(tag),
        files={
            "aadhaar_file": ("photo.jpg", b"\xff\xd8\xff", "image/jpeg"),
            "land_record_file": pdf("l.pdf"),
        },
    )
    ok("non-PDF document returns 422", r.status_code == 422)

    r = await c.get("/api/applications/does-not-exist/status")
    ok("unknown id returns 404", r.status_code == 404)
    ok("404 is problem+json", r.json().get("title") == "Not Found")

    return ids


# ---------------------------------------------------------------------------
# 3. Review
# ---------------------------------------------------------------------------


async def test_review(c: httpx.AsyncClient, ids: list[str]):
    section("Review")

    r = await c.get("/api/admin/applications")
    ok("dashboard requires session (401)", r.status_code == 401)

    r = await c.post("/api/admin/login", json={"email": "live@example.com", "password": "x"})
    ok("login returns 200", r.status_code == 200)

    r = await c.get("/api/admin/applications")
    ok("dashboard returns 200", r.status_code == 200)
    body = r.json()
    counts = body.get("counts", {})
    ok(
        "counts add up",
        counts.get("total") == counts.get("pending", 0) + counts.get("approved", 0) + counts.get("rejected", 0),
    )
    listed = [a["id"] for a in body.get("data", [])]
    ok("submitted applications listed", all(i in listed for i in ids))

    if len(ids) < 2:
        return
    approve_id, reject_id = ids

    r = await c.post(f"/api/admin/applications/{approve_id}/approve", json={})
    ok("unconfirmed approve returns 422", r.status_code == 422)

    r = await c.post(f"/api/admin/applications/{approve_id}/approve", json={"confirm": True})
    ok("approve returns 200", r.status_code == 200)
    creds = r.json().get("credentials", {})
    ok("username issued", creds.get("username", "").startswith("producer_"))
    ok("password issued", len(creds.get("password", "")) == 10)

    r = await c.post(f"/api/admin/applications/{approve_id}/reject", json={"confirm": True, "reason": "late"})
    ok("rejecting approved returns 409", r.status_code == 409)

    r = await c.post(f"/api/admin/applications/{reject_id}/reject", json={"confirm": True})
    ok("reject without reason returns 422", r.status_code == 422)

    r = await c.post(
        f"/api/admin/applications/{reject_id}/reject",
        json={"confirm": True, "reason": "incomplete documents"},
    )
    ok("reject returns 200", r.status_code == 200)
    ok("reason stored as notes", r.json().get("notes") == "incomplete documents")

    r = await c.get(f"/api/admin/applications/{reject_id}")
    ok("no actions once decided", r.json().get("available_actions") == [])

    r = await c.post("/api/admin/logout")
    ok("logout returns 200", r.status_code == 200)
    r = await c.get("/api/admin/applications")
    ok("dashboard locked after logout", r.status_code == 401)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


async def main():
    parser = argparse.ArgumentParser(description="Producer Onboarding live tests")
    parser.add_argument("--base", default=BASE, help="Server base URL")
    args = parser.parse_args()

    async with httpx.AsyncClient(base_url=args.base, timeout=15) as c:
        # Pre-flight: make sure server is up
        try:
            r = await c.get("/health/")
            if r.status_code != 200:
                print(f"\n  Server returned {r.status_code} on /health/ -- is it running?")
                sys.exit(2)
        except httpx.ConnectError:
            print(f"\n  Cannot connect to server at {args.base} -- is it running?")
            sys.exit(2)

        await test_health(c)
        ids = await test_submission(c)
        await test_review(c, ids)

    # Summary
    print(f"\n{'=' * 60}")
    print(f"  RESULTS: {PASS} passed, {FAIL} failed")
    print(f"{'=' * 60}")

    if ERRORS:
        print("\nFailures:")
        for e in ERRORS:
            print(f"  - {e}")

    sys.exit(0 if FAIL == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
