"""Organization Routes — HTTP tests for registration, verification and lookups.

Tests cover:
    - Registration returns 201 with the assigned id; caller controls the organization
    - Duplicate identity mapped to 409 with the error envelope
    - Verification and rejection restricted to the authority (403)
    - Lookups by id, wallet, registration number and tax id
    - Missing caller header and invalid bodies rejected with 400
"""

ADMIN = "0xadmin"
ORG_A = "0xaaaa"


def _caller(address):
    return {"X-Caller-Address": address}


async def _register(client, caller=ORG_A, reg="R1", tax="T1", name="Org A"):
    return await client.post(
        "/api/v1/organizations",
        json={"name": name, "registration_number": reg, "tax_id": tax},
        headers=_caller(caller),
    )


async def test_register_returns_201(client):
    res = await _register(client)
    assert res.status_code == 201
    assert res.json() == {"sequence": 1, "outcome": "committed", "result_id": 1}


async def test_registered_organization_is_controlled_by_caller(client):
    await _register(client, caller="0xAAAA")
    res = await client.get("/api/v1/organizations/1")
    assert res.status_code == 200
    body = res.json()
    assert body["controlling_address"] == ORG_A
    assert body["verified"] is False
    assert body["active"] is True


async def test_duplicate_registration_returns_409(client):
    await _register(client)
    res = await _register(client, caller="0xbbbb", tax="T2")
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_IDENTITY"
    assert error["context"]["sequence"] == 2


async def test_missing_caller_header_returns_400(client):
    res = await client.post(
        "/api/v1/organizations",
        json={"name": "Org A", "registration_number": "R1", "tax_id": "T1"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_blank_name_returns_400(client):
    res = await _register(client, name="   ")
    assert res.status_code == 400


async def test_authority_verifies(client):
    await _register(client)
    res = await client.post("/api/v1/organizations/1/verify", headers=_caller(ADMIN))
    assert res.status_code == 200
    assert res.json()["outcome"] == "committed"
    assert (await client.get("/api/v1/organizations/1")).json()["verified"] is True


async def test_non_authority_verify_returns_403(client):
    await _register(client)
    res = await client.post("/api/v1/organizations/1/verify", headers=_caller(ORG_A))
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_verify_twice_returns_409(client):
    await _register(client)
    await client.post("/api/v1/organizations/1/verify", headers=_caller(ADMIN))
    res = await client.post("/api/v1/organizations/1/verify", headers=_caller(ADMIN))
    assert res.status_code == 409
    assert res.json()["error"]["severity"] == "info"


async def test_reject_hides_organization_but_keeps_it_listed(client):
    await _register(client)
    res = await client.post("/api/v1/organizations/1/reject", headers=_caller(ADMIN))
    assert res.status_code == 200

    assert (await client.get("/api/v1/organizations/1")).status_code == 404
    listed = (await client.get("/api/v1/organizations")).json()["organizations"]
    assert [o["active"] for o in listed] == [False]
    assert (await client.get("/api/v1/organizations/count")).json() == {"count": 1}


async def test_lookups_by_identity_fields(client):
    await _register(client)
    assert (await client.get("/api/v1/organizations/wallet/0xAAAA")).json()["id"] == 1
    assert (await client.get("/api/v1/organizations/registration/R1")).json()["id"] == 1
    assert (await client.get("/api/v1/organizations/tax/T1")).json()["id"] == 1


async def test_unknown_organization_returns_404(client):
    res = await client.get("/api/v1/organizations/42")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"
