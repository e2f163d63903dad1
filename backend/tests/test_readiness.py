"""Readiness assessment document storage."""

import pytest

from tests.conftest import bearer

ASSESSMENT = {
    "contactInfo": {"name": "Casey Morgan", "facilityName": "County General"},
    "facilityInfo": {"has24HourED": True, "hospitalType": "community"},
    "patientVolume": {"pediatricVolume": "medium"},
}


@pytest.mark.asyncio
async def test_empty_until_saved(client, user):
    r = await client.get("/api/readiness-assessment", headers=bearer(user))
    assert r.status_code == 200
    assert r.json() == {}


@pytest.mark.asyncio
async def test_save_then_fetch(client, user, other_user):
    r = await client.put("/api/readiness-assessment", json=ASSESSMENT, headers=bearer(user))
    assert r.status_code == 200
    assert r.json() == ASSESSMENT

    assert (await client.get("/api/readiness-assessment", headers=bearer(user))).json() == ASSESSMENT
    assert (await client.get("/api/readiness-assessment", headers=bearer(other_user))).json() == {}


@pytest.mark.asyncio
async def test_save_replaces_document(client, user):
    await client.put("/api/readiness-assessment", json=ASSESSMENT, headers=bearer(user))
    replacement = {"contactInfo": {"name": "Jordan Lee"}}
    await client.put("/api/readiness-assessment", json=replacement, headers=bearer(user))

    assert (await client.get("/api/readiness-assessment", headers=bearer(user))).json() == replacement


@pytest.mark.asyncio
async def test_rejects_non_object_body(client, user):
    r = await client.put("/api/readiness-assessment", json=["not", "an", "object"], headers=bearer(user))
    assert r.status_code == 400
