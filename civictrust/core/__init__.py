"""Core Layer — the ledger state machine: registries, audit log, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Every outcome is a deterministic function of committed state, request and timestamp

Design Decisions:
    - Functional core separated from imperative shell
"""
