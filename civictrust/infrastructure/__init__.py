"""Infrastructure Layer — database, audit persistence, clock and logging.

Invariants:
    - Infrastructure never contains ledger rules; it only stores and restores audit entries
    - All database failures surface as DatabaseError
"""
