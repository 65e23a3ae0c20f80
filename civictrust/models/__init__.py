"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - The audit log is the only persisted table; entity state is derived from it

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from civictrust.models.audit_entry import AuditEntryRecord  # noqa: F401
