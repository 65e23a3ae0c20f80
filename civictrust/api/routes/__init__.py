"""Route Modules — one file per registry or concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to LedgerService / core queries)
"""
