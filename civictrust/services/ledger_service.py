"""Ledger Service — imperative shell around LedgerCore: logging and audit persistence.

Invariants:
    - Every admitted request is logged with its operation, caller, outcome and sequence
    - When a store is configured, the in-memory audit log and the stored log hold the
      same entries once submit() returns or raises
    - A request whose audit entry fails to persist is NOT applied: the core is rolled
      back to the stored prefix and the caller gets DatabaseError
    - restore() rebuilds the core from the stored log before the API accepts requests

Design Decisions:
    - asyncio.Lock around admit + persist: no second request is admitted while an
      append is in flight, so a rollback only ever drops the failed entry
    - Rollback replays the in-memory log minus its last entry: needs no database
      round-trip and reproduces exactly what was stored
    - Rejections are returned, not raised; execute() re-raises them for the HTTP layer
      where the global LedgerError handler renders the envelope
"""

import asyncio
import logging

from civictrust.core.errors import DatabaseError, ErrorSeverity
from civictrust.core.ledger_core import LedgerCore, LedgerRequest, LedgerResponse
from civictrust.core.repository_protocols import AuditLogRepository, Clock

logger = logging.getLogger(__name__)


class LedgerService:
    """Owns one LedgerCore and, optionally, its durable audit store."""

    def __init__(self, core: LedgerCore, store: AuditLogRepository | None = None):
        self.core = core
        self._store = store
        self._lock = asyncio.Lock()

    @classmethod
    async def restore(
        cls, store: AuditLogRepository, authority: str, clock: Clock,
    ) -> "LedgerService":
        """Replay the stored audit log into a fresh core."""
        entries = await store.load_all()
        core = LedgerCore.replay(entries, authority, clock)
        logger.info(
            "Ledger state restored from audit log",
            extra={"entries": len(entries)},
        )
        return cls(core, store)

    async def submit(self, request: LedgerRequest) -> LedgerResponse:
        async with self._lock:
            response = self.core.submit(request)
            entry = self.core.audit_entries(since=response.sequence - 1)[0]
            if self._store is not None:
                try:
                    await self._store.append(entry)
                except DatabaseError:
                    self._roll_back_last_entry()
                    logger.error(
                        f"{entry.operation.value} not persisted; ledger rolled back",
                        extra={"sequence": entry.sequence, "operation": entry.operation.value},
                    )
                    raise
            self._log_outcome(response, entry.operation.value, entry.caller)
            return response

    async def execute(self, request: LedgerRequest) -> LedgerResponse:
        """submit() then raise the recovered LedgerError, if any."""
        response = await self.submit(request)
        return response.raise_for_error()

    def _roll_back_last_entry(self) -> None:
        persisted = self.core.audit_entries()[:-1]
        self.core = LedgerCore.replay(
            persisted, self.core.genesis_authority, self.core.clock,
        )

    def _log_outcome(self, response: LedgerResponse, operation: str, caller: str) -> None:
        extra = {
            "operation": operation,
            "caller": caller,
            "outcome": response.outcome.value,
            "sequence": response.sequence,
            "result_id": response.result_id,
        }
        if response.ok:
            logger.info(f"{operation} committed", extra=extra)
            return
        error = response.error
        extra["error_code"] = error.code
        level = logging.INFO if error.severity == ErrorSeverity.INFO else logging.WARNING
        logger.log(level, f"{operation} rejected: {error.message}", extra=extra)
