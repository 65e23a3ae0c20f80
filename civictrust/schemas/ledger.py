"""Ledger Schemas — uniform mutation result, counts and audit log entries."""

from typing import Any, Literal

from pydantic import BaseModel

from civictrust.core.audit_log import AuditEntry
from civictrust.core.ledger_core import LedgerResponse


class MutationResult(BaseModel):
    """Body returned for every committed mutation."""
    sequence: int
    outcome: Literal["committed", "rejected"]
    result_id: int | None = None

    @classmethod
    def from_response(cls, response: LedgerResponse) -> "MutationResult":
        return cls(
            sequence=response.sequence,
            outcome=response.outcome.value,
            result_id=response.result_id,
        )


class CountResponse(BaseModel):
    count: int


class AuditEntryResponse(BaseModel):
    sequence: int
    timestamp: int
    operation: str
    caller: str
    arguments: dict[str, Any]
    outcome: Literal["committed", "rejected"]
    error_code: str | None = None
    result_id: int | None = None

    @classmethod
    def from_entry(cls, entry: AuditEntry) -> "AuditEntryResponse":
        return cls(**entry.to_dict())


class AuditLogResponse(BaseModel):
    entries: list[AuditEntryResponse] = []
    length: int
