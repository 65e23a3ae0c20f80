"""Logical clocks for the ledger core. SystemClock lives in infrastructure/."""

from dataclasses import dataclass


@dataclass
class ManualClock:
    """Clock whose time only moves when told to. Used by tests and replay tooling."""
    current: int = 0

    def now(self) -> int:
        return self.current

    def set(self, value: int) -> None:
        self.current = value

    def advance(self, seconds: int) -> int:
        self.current += seconds
        return self.current
