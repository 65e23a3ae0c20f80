"""Root conftest — shared test configuration and ledger fixtures."""

import os

import pytest

# Ensure tests never reach a real database
os.environ.setdefault(
    "CIVICTRUST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("CIVICTRUST_PERSIST_AUDIT_LOG", "false")

from civictrust.core.clock import ManualClock  # noqa: E402
from civictrust.core.ledger_core import LedgerCore  # noqa: E402

ADMIN = "0xadmin"
ORG_A = "0xaaaa"


@pytest.fixture
def clock():
    return ManualClock(current=100)


@pytest.fixture
def core(clock):
    return LedgerCore(ADMIN, clock)


@pytest.fixture
def verified_org(core):
    """Organization A registered by 0xaaaa and verified by the authority."""
    org_id = core.register_organization("Org A", "R1", "T1", ORG_A).result_id
    core.verify_organization(org_id, ADMIN)
    return org_id


@pytest.fixture
def open_campaign(core, verified_org):
    """Campaign C1 of organization A, window 100..200."""
    return core.create_campaign(
        verified_org, "Clean water", "Wells for the valley", 100, 200, ORG_A,
    ).result_id
