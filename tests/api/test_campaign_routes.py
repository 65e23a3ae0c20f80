"""Campaign Routes — HTTP tests for campaign creation, deactivation and activity.

Tests cover:
    - Verified organization creates campaigns (201)
    - Unverified organization and empty window rejected (409 / 400)
    - Deactivation by owner, 403 for others, 409 when repeated
    - Effective activity at the ledger clock or an explicit time
"""

ADMIN = "0xadmin"
ORG_A = "0xaaaa"


def _caller(address):
    return {"X-Caller-Address": address}


def _campaign_body(org_id, start=100, end=200, title="Clean water"):
    return {
        "organization_id": org_id, "title": title,
        "description": "Wells for the valley", "start_time": start, "end_time": end,
    }


async def test_create_campaign_returns_201(client, verified_org):
    res = await client.post(
        "/api/v1/campaigns", json=_campaign_body(verified_org), headers=_caller(ORG_A),
    )
    assert res.status_code == 201
    assert res.json()["result_id"] == 1

    campaign = (await client.get("/api/v1/campaigns/1")).json()
    assert campaign["organization_id"] == verified_org
    assert campaign["active"] is True


async def test_unverified_organization_returns_409(client):
    await client.post(
        "/api/v1/organizations",
        json={"name": "Org B", "registration_number": "R2", "tax_id": "T2"},
        headers=_caller("0xbbbb"),
    )
    res = await client.post(
        "/api/v1/campaigns", json=_campaign_body(1), headers=_caller("0xbbbb"),
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "NOT_VERIFIED"


async def test_empty_window_returns_400_and_is_audited(client, verified_org):
    res = await client.post(
        "/api/v1/campaigns",
        json=_campaign_body(verified_org, start=200, end=200),
        headers=_caller(ORG_A),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_WINDOW"

    audit = (await client.get("/api/v1/audit")).json()
    assert audit["entries"][-1]["error_code"] == "INVALID_WINDOW"


async def test_other_caller_cannot_create(client, verified_org):
    res = await client.post(
        "/api/v1/campaigns", json=_campaign_body(verified_org), headers=_caller(ADMIN),
    )
    assert res.status_code == 403


async def test_deactivate_campaign(client, campaign):
    res = await client.post(
        f"/api/v1/campaigns/{campaign}/deactivate", headers=_caller(ORG_A),
    )
    assert res.status_code == 200
    again = await client.post(
        f"/api/v1/campaigns/{campaign}/deactivate", headers=_caller(ORG_A),
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_INACTIVE"


async def test_deactivate_by_other_returns_403(client, campaign):
    res = await client.post(
        f"/api/v1/campaigns/{campaign}/deactivate", headers=_caller("0xother"),
    )
    assert res.status_code == 403


async def test_activity_uses_ledger_clock(client, clock, campaign):
    res = await client.get(f"/api/v1/campaigns/{campaign}/active")
    assert res.json() == {"campaign_id": campaign, "now": 100, "is_active": True}

    clock.set(201)
    assert (await client.get(f"/api/v1/campaigns/{campaign}/active")).json()["is_active"] is False


async def test_activity_at_explicit_time(client, campaign):
    res = await client.get(f"/api/v1/campaigns/{campaign}/active", params={"now": 200})
    assert res.json()["is_active"] is True


async def test_list_by_organization_and_count(client, verified_org, campaign):
    await client.post(
        "/api/v1/campaigns",
        json=_campaign_body(verified_org, title="Second"),
        headers=_caller(ORG_A),
    )
    listed = (await client.get(f"/api/v1/campaigns/organization/{verified_org}")).json()
    assert [c["title"] for c in listed["campaigns"]] == ["Clean water", "Second"]
    assert (await client.get("/api/v1/campaigns/count")).json() == {"count": 2}
    assert len((await client.get("/api/v1/campaigns")).json()["campaigns"]) == 2


async def test_unknown_campaign_returns_404(client):
    assert (await client.get("/api/v1/campaigns/9")).status_code == 404
    assert (await client.get("/api/v1/campaigns/9/active")).status_code == 404
