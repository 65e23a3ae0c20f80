"""API test fixtures — FastAPI app over an in-memory ledger.

Invariants:
    - Every test gets a fresh LedgerCore on a ManualClock
    - app.state.ledger set directly (ASGITransport does not run the lifespan)
    - The readiness probe sees no database (db_manager cleared for the test)

Design Decisions:
    - No audit store here: persistence is covered by tests/services
"""

import pytest
from httpx import ASGITransport, AsyncClient

import civictrust.infrastructure.database as db_module
from civictrust.core.clock import ManualClock
from civictrust.core.ledger_core import LedgerCore
from civictrust.main import app
from civictrust.services.ledger_service import LedgerService

ADMIN = "0xadmin"
ORG_A = "0xaaaa"


@pytest.fixture
def clock():
    return ManualClock(current=100)


@pytest.fixture
def ledger(clock):
    return LedgerService(LedgerCore(ADMIN, clock))


@pytest.fixture
async def client(ledger):
    original_manager = db_module.db_manager
    db_module.db_manager = None
    app.state.ledger = ledger

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    del app.state.ledger
    db_module.db_manager = original_manager


def as_caller(address: str) -> dict:
    return {"X-Caller-Address": address}


@pytest.fixture
async def verified_org(client):
    """Organization 1, controlled by 0xaaaa and verified by the authority."""
    res = await client.post(
        "/api/v1/organizations",
        json={"name": "Org A", "registration_number": "R1", "tax_id": "T1"},
        headers=as_caller(ORG_A),
    )
    org_id = res.json()["result_id"]
    await client.post(
        f"/api/v1/organizations/{org_id}/verify", headers=as_caller(ADMIN),
    )
    return org_id


@pytest.fixture
async def campaign(client, verified_org):
    """Campaign 1 of organization 1, window 100..200."""
    res = await client.post(
        "/api/v1/campaigns",
        json={
            "organization_id": verified_org, "title": "Clean water",
            "start_time": 100, "end_time": 200,
        },
        headers=as_caller(ORG_A),
    )
    return res.json()["result_id"]
