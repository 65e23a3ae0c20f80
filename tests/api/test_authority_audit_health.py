"""Authority, Audit and Health Routes — HTTP tests for the remaining surfaces.

Tests cover:
    - Reading and transferring the administrative authority
    - Audit log paging with since/limit, rejected attempts included
    - Liveness and readiness probes
"""

ADMIN = "0xadmin"
ORG_A = "0xaaaa"


def _caller(address):
    return {"X-Caller-Address": address}


# ─── Authority ──────────────────────────────────────────────────


async def test_get_authority(client):
    res = await client.get("/api/v1/authority")
    assert res.json() == {"authority": ADMIN}


async def test_transfer_authority(client):
    res = await client.post(
        "/api/v1/authority/transfer", json={"new_address": "0xNEW"}, headers=_caller(ADMIN),
    )
    assert res.status_code == 200
    assert (await client.get("/api/v1/authority")).json() == {"authority": "0xnew"}


async def test_transfer_by_non_authority_returns_403(client):
    res = await client.post(
        "/api/v1/authority/transfer", json={"new_address": "0xevil"}, headers=_caller("0xevil"),
    )
    assert res.status_code == 403
    assert (await client.get("/api/v1/authority")).json() == {"authority": ADMIN}


async def test_old_authority_loses_capability(client):
    await client.post(
        "/api/v1/authority/transfer", json={"new_address": "0xnew"}, headers=_caller(ADMIN),
    )
    await client.post(
        "/api/v1/organizations",
        json={"name": "Org A", "registration_number": "R1", "tax_id": "T1"},
        headers=_caller(ORG_A),
    )
    res = await client.post("/api/v1/organizations/1/verify", headers=_caller(ADMIN))
    assert res.status_code == 403


# ─── Audit ──────────────────────────────────────────────────────


async def test_audit_log_records_rejections(client):
    await client.post("/api/v1/organizations/1/verify", headers=_caller(ADMIN))
    body = (await client.get("/api/v1/audit")).json()
    assert body["length"] == 1
    entry = body["entries"][0]
    assert entry["sequence"] == 1
    assert entry["operation"] == "verify_organization"
    assert entry["outcome"] == "rejected"
    assert entry["error_code"] == "NOT_FOUND"
    assert entry["arguments"] == {"organization_id": 1}


async def test_audit_log_since_and_limit(client, campaign):
    body = (await client.get("/api/v1/audit", params={"since": 1, "limit": 1})).json()
    assert body["length"] == 3
    assert [e["sequence"] for e in body["entries"]] == [2]


# ─── Health ─────────────────────────────────────────────────────


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_ledger(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["ledger"] == "healthy"
