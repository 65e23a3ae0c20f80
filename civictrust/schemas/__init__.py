"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; ledger rules stay in core/
    - Responses are built from frozen core records, never from live registry state

Design Decisions:
    - Separate from core records: schemas are API contracts, records are domain values
"""
