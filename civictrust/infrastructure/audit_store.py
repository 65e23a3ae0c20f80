"""Audit Store — SQLAlchemy implementation of AuditLogRepository.

Invariants:
    - append() inserts exactly one row per AuditEntry and commits it
    - load_all() returns entries ordered by sequence, ready for LedgerCore.replay
    - A duplicate sequence surfaces as DatabaseError (IntegrityError mapped by the session manager)
"""

import logging
from typing import Sequence

from sqlalchemy import func, select

from civictrust.core.audit_log import AuditEntry
from civictrust.core.domain_types import Operation, Outcome
from civictrust.infrastructure.database import DatabaseSessionManager
from civictrust.models.audit_entry import AuditEntryRecord

logger = logging.getLogger(__name__)


def _to_record(entry: AuditEntry) -> AuditEntryRecord:
    return AuditEntryRecord(
        sequence=entry.sequence,
        timestamp=entry.timestamp,
        operation=entry.operation.value,
        caller=entry.caller,
        arguments=dict(entry.arguments),
        outcome=entry.outcome.value,
        error_code=entry.error_code,
        result_id=entry.result_id,
    )


def _to_entry(record: AuditEntryRecord) -> AuditEntry:
    return AuditEntry(
        sequence=record.sequence,
        timestamp=record.timestamp,
        operation=Operation(record.operation),
        caller=record.caller,
        arguments=dict(record.arguments or {}),
        outcome=Outcome(record.outcome),
        error_code=record.error_code,
        result_id=record.result_id,
    )


class SqlAuditStore:
    """Durable audit log backed by the audit_entries table."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def append(self, entry: AuditEntry) -> None:
        async with self._manager.session() as db:
            db.add(_to_record(entry))
            await db.commit()

    async def load_all(self) -> Sequence[AuditEntry]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(AuditEntryRecord).order_by(AuditEntryRecord.sequence),
            )
            entries = [_to_entry(r) for r in result.scalars().all()]
        logger.info("Loaded stored audit log", extra={"entries": len(entries)})
        return entries

    async def count(self) -> int:
        async with self._manager.session() as db:
            result = await db.execute(
                select(func.count()).select_from(AuditEntryRecord),
            )
            return int(result.scalar_one())
