"""Audit Route — read the append-only audit log, optionally from a sequence onward."""

from fastapi import APIRouter, Depends, Query

from civictrust.api.dependencies import get_ledger_service
from civictrust.schemas.ledger import AuditEntryResponse, AuditLogResponse
from civictrust.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/audit", tags=["audit"])


@router.get("", response_model=AuditLogResponse)
async def get_audit_log(
    since: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Entries with sequence > since, oldest first."""
    entries = ledger.core.audit_entries(since)[:limit]
    return AuditLogResponse(
        entries=[AuditEntryResponse.from_entry(e) for e in entries],
        length=ledger.core.audit_length(),
    )
