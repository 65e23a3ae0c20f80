"""Ledger Core — the single serialization point for every mutation across the three registries.

Invariants:
    - One mutation is admitted, validated and committed (or rejected) before the next
    - Every admitted request produces exactly one AuditEntry, committed or rejected
    - LedgerError raised by a registry is recovered here and returned in the response,
      never re-raised by submit()
    - Timestamps come from the injected Clock, never from the caller
    - Registries are constructed here and wired acyclically:
      IdentityRegistry <- CampaignRegistry <- DonationLedger

Design Decisions:
    - threading.Lock around admission: the core is usable directly from several
      threads (workers, scripts, tests), and the lock makes admission order the
      one global order; the async shell adds its own lock around persistence
    - LedgerRequest validates its operation on construction, so submit() only
      ever sees a known Operation and every admitted request can be audited
    - Explicit Operation -> handler dict: every mapping visible in one place
    - Reads bypass the lock and see the last committed state
    - replay() re-submits a stored log with its recorded timestamps and checks
      each outcome, rebuilding state deterministically
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from civictrust.core.audit_log import AuditEntry, AuditLog
from civictrust.core.campaign_registry import CampaignRegistry
from civictrust.core.domain_types import Operation, Outcome, normalize_address
from civictrust.core.donation_ledger import DonationLedger
from civictrust.core.errors import (
    ErrorContext, InvalidInputError, LedgerError, ReplayDivergenceError,
)
from civictrust.core.identity_registry import IdentityRegistry
from civictrust.core.repository_protocols import (
    CampaignQueries, Clock, DonationQueries, IdentityQueries,
)


@dataclass(frozen=True)
class LedgerRequest:
    """Uniform mutation request. `arguments` must be JSON-safe."""
    operation: Operation
    caller: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        try:
            operation = Operation(self.operation)
        except ValueError:
            raise InvalidInputError(
                f"Unknown operation: {self.operation!r}", "operation",
            ) from None
        object.__setattr__(self, "operation", operation)


@dataclass(frozen=True)
class LedgerResponse:
    """Definite outcome of one admitted request."""
    sequence: int
    outcome: Outcome
    result_id: int | None = None
    error: LedgerError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.COMMITTED

    def raise_for_error(self) -> "LedgerResponse":
        """Re-raise the recovered error for shells that use exceptions for control flow."""
        if self.error is not None:
            raise self.error
        return self


def _arg(arguments: dict[str, Any], name: str) -> Any:
    if name not in arguments:
        raise InvalidInputError(f"Missing argument: {name}", name)
    return arguments[name]


class LedgerCore:
    """Orchestrates IdentityRegistry, CampaignRegistry and DonationLedger as one state machine."""

    def __init__(self, authority: str, clock: Clock):
        self._lock = threading.Lock()
        self._genesis_authority = authority
        self._clock = clock
        self._audit = AuditLog()
        self._identities = IdentityRegistry(authority)
        self._campaigns = CampaignRegistry(self._identities)
        self._donations = DonationLedger(self._campaigns)
        self._handlers: dict[Operation, Callable[[str, dict, int], int | None]] = {
            Operation.REGISTER_ORGANIZATION: self._register_organization,
            Operation.VERIFY_ORGANIZATION: self._verify_organization,
            Operation.REJECT_ORGANIZATION: self._reject_organization,
            Operation.TRANSFER_AUTHORITY: self._transfer_authority,
            Operation.CREATE_CAMPAIGN: self._create_campaign,
            Operation.DEACTIVATE_CAMPAIGN: self._deactivate_campaign,
            Operation.RECORD_DONATION: self._record_donation,
        }

    # ─── Read surfaces ───────────────────────────────────────────

    @property
    def identities(self) -> IdentityQueries:
        return self._identities

    @property
    def campaigns(self) -> CampaignQueries:
        return self._campaigns

    @property
    def donations(self) -> DonationQueries:
        return self._donations

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def genesis_authority(self) -> str:
        """Authority the core was constructed with; replay starts from it."""
        return self._genesis_authority

    def audit_entries(self, since: int = 0) -> tuple[AuditEntry, ...]:
        return self._audit.entries(since)

    def audit_length(self) -> int:
        return len(self._audit)

    # ─── Serialization point ─────────────────────────────────────

    def submit(self, request: LedgerRequest) -> LedgerResponse:
        """Admit one mutation. Never raises LedgerError; the outcome is in the response."""
        with self._lock:
            return self._admit(request, self._clock.now())

    def _admit(self, request: LedgerRequest, timestamp: int) -> LedgerResponse:
        operation = request.operation
        arguments = dict(request.arguments)
        caller = normalize_address(request.caller) if isinstance(request.caller, str) else ""
        sequence = self._audit.next_sequence
        try:
            handler = self._handlers[operation]
            result_id = handler(request.caller, arguments, timestamp)
        except LedgerError as e:
            e.context = ErrorContext(
                operation=operation.value, caller=caller, sequence=sequence,
            )
            self._audit.append(
                timestamp, operation, caller, arguments,
                Outcome.REJECTED, error_code=e.code,
            )
            return LedgerResponse(sequence, Outcome.REJECTED, error=e)

        self._audit.append(
            timestamp, operation, caller, arguments,
            Outcome.COMMITTED, result_id=result_id,
        )
        return LedgerResponse(sequence, Outcome.COMMITTED, result_id=result_id)

    # ─── Handlers (run under the lock) ───────────────────────────

    def _register_organization(self, caller: str, args: dict, now: int) -> int:
        return self._identities.register(
            _arg(args, "name"),
            _arg(args, "registration_number"),
            _arg(args, "tax_id"),
            args.get("controlling_address", caller),
        )

    def _verify_organization(self, caller: str, args: dict, now: int) -> None:
        self._identities.verify(_arg(args, "organization_id"), caller)

    def _reject_organization(self, caller: str, args: dict, now: int) -> None:
        self._identities.reject(_arg(args, "organization_id"), caller)

    def _transfer_authority(self, caller: str, args: dict, now: int) -> None:
        self._identities.transfer_authority(_arg(args, "new_address"), caller)

    def _create_campaign(self, caller: str, args: dict, now: int) -> int:
        return self._campaigns.create(
            _arg(args, "organization_id"),
            _arg(args, "title"),
            args.get("description", ""),
            _arg(args, "start_time"),
            _arg(args, "end_time"),
            caller,
        )

    def _deactivate_campaign(self, caller: str, args: dict, now: int) -> None:
        self._campaigns.deactivate(_arg(args, "campaign_id"), caller)

    def _record_donation(self, caller: str, args: dict, now: int) -> int:
        return self._donations.record(
            _arg(args, "campaign_id"),
            _arg(args, "amount"),
            args.get("external_reference", ""),
            caller,
            now,
        )

    # ─── Convenience wrappers ────────────────────────────────────

    def register_organization(
        self,
        name: str,
        registration_number: str,
        tax_id: str,
        controlling_address: str,
        caller: str | None = None,
    ) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.REGISTER_ORGANIZATION,
            caller if caller is not None else controlling_address,
            {
                "name": name,
                "registration_number": registration_number,
                "tax_id": tax_id,
                "controlling_address": controlling_address,
            },
        ))

    def verify_organization(self, organization_id: int, caller: str) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.VERIFY_ORGANIZATION, caller, {"organization_id": organization_id},
        ))

    def reject_organization(self, organization_id: int, caller: str) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.REJECT_ORGANIZATION, caller, {"organization_id": organization_id},
        ))

    def transfer_authority(self, new_address: str, caller: str) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.TRANSFER_AUTHORITY, caller, {"new_address": new_address},
        ))

    def create_campaign(
        self,
        organization_id: int,
        title: str,
        description: str,
        start_time: int,
        end_time: int,
        caller: str,
    ) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.CREATE_CAMPAIGN,
            caller,
            {
                "organization_id": organization_id,
                "title": title,
                "description": description,
                "start_time": start_time,
                "end_time": end_time,
            },
        ))

    def deactivate_campaign(self, campaign_id: int, caller: str) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.DEACTIVATE_CAMPAIGN, caller, {"campaign_id": campaign_id},
        ))

    def record_donation(
        self,
        campaign_id: int,
        amount: int,
        external_reference: str,
        donor_identity: str,
    ) -> LedgerResponse:
        return self.submit(LedgerRequest(
            Operation.RECORD_DONATION,
            donor_identity,
            {
                "campaign_id": campaign_id,
                "amount": amount,
                "external_reference": external_reference,
            },
        ))

    # ─── Replay ──────────────────────────────────────────────────

    @classmethod
    def replay(
        cls, entries: Iterable[AuditEntry], authority: str, clock: Clock,
    ) -> "LedgerCore":
        """Rebuild a core from a stored log. `authority` is the genesis authority."""
        core = cls(authority, clock)
        with core._lock:
            for entry in entries:
                expected_sequence = core._audit.next_sequence
                if entry.sequence != expected_sequence:
                    raise ReplayDivergenceError(
                        entry.sequence, f"sequence {expected_sequence}",
                        f"sequence {entry.sequence}",
                    )
                response = core._admit(
                    LedgerRequest(entry.operation, entry.caller, entry.arguments),
                    entry.timestamp,
                )
                actual_code = response.error.code if response.error else None
                if (
                    response.outcome != entry.outcome
                    or actual_code != entry.error_code
                    or response.result_id != entry.result_id
                ):
                    raise ReplayDivergenceError(
                        entry.sequence,
                        entry.error_code or entry.outcome.value,
                        actual_code or response.outcome.value,
                    )
        return core
