"""Services Layer — async orchestration around the pure ledger core.

Invariants:
    - Services never re-implement ledger rules; they submit requests and persist results
"""
