"""Audit Log — append-only, totally ordered record of every attempted mutation.

Invariants:
    - Sequence numbers start at 1 and are gapless
    - Entries are frozen; the log has no update or delete path
    - Both committed and rejected attempts are recorded
    - entries() returns a tuple copy, never the internal list

Design Decisions:
    - Owned by LedgerCore and appended under its serialization lock, so the
      log order IS the global mutation order
    - arguments stored as a plain JSON-safe dict: the same entry shape is
      persisted by the shell and fed back to LedgerCore.replay
"""

from dataclasses import dataclass, field
from typing import Any

from civictrust.core.domain_types import Operation, Outcome


@dataclass(frozen=True)
class AuditEntry:
    """One attempted mutation and its definite outcome."""
    sequence: int
    timestamp: int
    operation: Operation
    caller: str
    arguments: dict[str, Any] = field(default_factory=dict)
    outcome: Outcome = Outcome.COMMITTED
    error_code: str | None = None
    result_id: int | None = None

    @property
    def committed(self) -> bool:
        return self.outcome == Outcome.COMMITTED

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "timestamp": self.timestamp,
            "operation": self.operation.value,
            "caller": self.caller,
            "arguments": dict(self.arguments),
            "outcome": self.outcome.value,
            "error_code": self.error_code,
            "result_id": self.result_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        return cls(
            sequence=int(data["sequence"]),
            timestamp=int(data["timestamp"]),
            operation=Operation(data["operation"]),
            caller=data["caller"],
            arguments=dict(data.get("arguments") or {}),
            outcome=Outcome(data["outcome"]),
            error_code=data.get("error_code"),
            result_id=data.get("result_id"),
        )


class AuditLog:
    """In-memory append-only log. Not thread-safe on its own."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def next_sequence(self) -> int:
        return len(self._entries) + 1

    def append(
        self,
        timestamp: int,
        operation: Operation,
        caller: str,
        arguments: dict[str, Any],
        outcome: Outcome,
        error_code: str | None = None,
        result_id: int | None = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            sequence=self.next_sequence,
            timestamp=timestamp,
            operation=operation,
            caller=caller,
            arguments=dict(arguments),
            outcome=outcome,
            error_code=error_code,
            result_id=result_id,
        )
        self._entries.append(entry)
        return entry

    def entries(self, since: int = 0) -> tuple[AuditEntry, ...]:
        """Entries with sequence > since, in log order."""
        return tuple(self._entries[since:]) if since > 0 else tuple(self._entries)
