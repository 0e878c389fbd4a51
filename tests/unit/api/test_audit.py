"""Tests for GET /audit/{entry_id}: redacted view behind the view_redacted permission."""

import pytest


@pytest.mark.asyncio
async def test_audit_entry_shows_redacted_content_only(async_client):
    r = await async_client.post(
        "/secure-inquiry", json={"userId": "u1", "message": "Contact me at a@b.com"}
    )
    audit_id = r.json()["audit_id"]

    r = await async_client.get(f"/audit/{audit_id}", headers={"X-Role": "operator"})
    assert r.status_code == 200
    data = r.json()
    assert data["uuid"] == audit_id
    assert data["redacted-content"] == {"userId": "u1", "message": "Contact me at <REDACTED: emails>"}
    assert data["outcome"]["status"] == "success"
    assert "original-content" not in data
    assert "a@b.com" not in r.text


@pytest.mark.asyncio
async def test_unknown_audit_entry_returns_404(async_client):
    r = await async_client.get("/audit/does-not-exist", headers={"X-Role": "AUDITOR"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_audit_entry_requires_a_role(async_client):
    r = await async_client.get("/audit/any-id")
    assert r.status_code == 403
