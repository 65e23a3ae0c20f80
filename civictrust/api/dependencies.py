"""API Dependencies — ledger service and caller identity for route handlers.

Invariants:
    - The ledger service lives on app.state, created once by the lifespan
    - Caller identity comes from the X-Caller-Address header, already authenticated upstream;
      a missing header fails request validation (400) before any ledger call
"""

from fastapi import Header, Request

from civictrust.services.ledger_service import LedgerService


def get_ledger_service(request: Request) -> LedgerService:
    service = getattr(request.app.state, "ledger", None)
    if service is None:
        raise RuntimeError("Ledger not initialized")
    return service


def get_caller(
    x_caller_address: str = Header(alias="X-Caller-Address", min_length=1, max_length=255),
) -> str:
    return x_caller_address
