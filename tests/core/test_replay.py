"""Ledger Replay — tests for rebuilding state from a stored audit log.

Tests cover:
    - Replay reproduces entities, ids, authority and the log itself
    - Replay uses recorded timestamps, not the current clock
    - Divergent logs (gaps, altered outcomes) raise ReplayDivergenceError
"""

from dataclasses import replace

import pytest

from civictrust.core.clock import ManualClock
from civictrust.core.domain_types import Outcome
from civictrust.core.errors import ReplayDivergenceError
from civictrust.core.ledger_core import LedgerCore

ADMIN = "0xadmin"
ORG_A = "0xaaaa"
DONOR = "0xd0d0"


@pytest.fixture
def history(core, clock, open_campaign):
    """A core with a mixed history of committed and rejected mutations."""
    clock.set(150)
    core.record_donation(open_campaign, 50, "ref-1", DONOR)
    clock.set(250)
    core.record_donation(open_campaign, 50, "ref-2", DONOR)
    core.transfer_authority("0xnew", ADMIN)
    core.register_organization("Org B", "R2", "T2", "0xbbbb")
    core.verify_organization(2, ADMIN)
    return core


def test_replay_rebuilds_state(history):
    rebuilt = LedgerCore.replay(history.audit_entries(), ADMIN, ManualClock(9_999))

    assert rebuilt.audit_entries() == history.audit_entries()
    assert rebuilt.identities.authority == "0xnew"
    assert rebuilt.identities.list() == history.identities.list()
    assert rebuilt.campaigns.list() == history.campaigns.list()
    assert rebuilt.donations.by_campaign(1) == history.donations.by_campaign(1)


def test_replay_uses_recorded_timestamps(history):
    rebuilt = LedgerCore.replay(history.audit_entries(), ADMIN, ManualClock(0))
    assert rebuilt.donations.by_id(1).recorded_at == 150
    assert rebuilt.donations.count() == 1


def test_replayed_core_continues_numbering(history):
    rebuilt = LedgerCore.replay(history.audit_entries(), ADMIN, ManualClock(300))
    response = rebuilt.register_organization("Org C", "R3", "T3", "0xcccc")
    assert response.result_id == 3
    assert response.sequence == history.audit_length() + 1


def test_replay_from_dict_roundtrip(history):
    stored = [type(e).from_dict(e.to_dict()) for e in history.audit_entries()]
    rebuilt = LedgerCore.replay(stored, ADMIN, ManualClock(0))
    assert rebuilt.audit_entries() == history.audit_entries()


def test_replay_detects_sequence_gap(history):
    entries = list(history.audit_entries())
    del entries[1]
    with pytest.raises(ReplayDivergenceError) as exc_info:
        LedgerCore.replay(entries, ADMIN, ManualClock(0))
    assert exc_info.value.code == "REPLAY_DIVERGENCE"


def test_replay_detects_altered_outcome(history):
    entries = list(history.audit_entries())
    late = entries[4]
    assert late.outcome == Outcome.REJECTED
    entries[4] = replace(late, outcome=Outcome.COMMITTED, error_code=None, result_id=2)
    with pytest.raises(ReplayDivergenceError):
        LedgerCore.replay(entries, ADMIN, ManualClock(0))


def test_replay_with_wrong_genesis_authority_diverges(history):
    with pytest.raises(ReplayDivergenceError):
        LedgerCore.replay(history.audit_entries(), ORG_A, ManualClock(0))
