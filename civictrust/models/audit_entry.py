"""AuditEntry ORM — durable copy of the ledger's append-only audit log.

Invariants:
    - sequence is the primary key: gapless, 1-based, same order as LedgerCore's log
    - Rows are inserted once and never updated or deleted
    - Both committed and rejected attempts are stored (replay needs the full log)

Design Decisions:
    - Only the audit log is persisted; organization, campaign and donation
      tables are derived state rebuilt by LedgerCore.replay on startup
    - JSON column for arguments: one table for all seven operation shapes
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, String, DateTime, JSON, Integer
from sqlalchemy.orm import Mapped, mapped_column

from civictrust.db.base import Base


class AuditEntryRecord(Base):
    """One attempted mutation, as stored."""
    __tablename__ = "audit_entries"

    sequence: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    operation: Mapped[str] = mapped_column(String(40), nullable=False)
    caller: Mapped[str] = mapped_column(String(255), nullable=False)
    arguments: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    outcome: Mapped[str] = mapped_column(String(20), nullable=False)
    error_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    result_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
