"""Boundary Protocols — contracts between registries, and between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Cross-registry reads go through read-only Protocols injected at construction;
      IdentityRegistry never references CampaignRegistry
    - All IO operations (audit persistence) accessed through Protocol types

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async only in AuditLogRepository: implementations do IO, but the core
      functions that produce audit entries are never async themselves;
      the shell orchestrates the async calls around the pure logic
"""

from typing import Protocol, Sequence

from civictrust.core.audit_log import AuditEntry
from civictrust.core.domain_types import CampaignId, DonationId, OrganizationId
from civictrust.core.records import Campaign, Donation, Organization


class IdentityReader(Protocol):
    """Read-only view of IdentityRegistry consumed by CampaignRegistry."""
    def lookup(self, organization_id: OrganizationId) -> Organization | None: ...


class CampaignActivityReader(Protocol):
    """Read-only view of CampaignRegistry consumed by DonationLedger."""
    def is_effectively_active(self, campaign_id: CampaignId, now: int) -> bool: ...
    def by_id(self, campaign_id: CampaignId) -> Campaign: ...


class IdentityQueries(Protocol):
    """Query surface of IdentityRegistry handed out by LedgerCore."""
    @property
    def authority(self) -> str: ...
    def by_id(self, organization_id: OrganizationId) -> Organization: ...
    def by_wallet(self, address: str) -> Organization: ...
    def by_registration_number(self, registration_number: str) -> Organization: ...
    def by_tax_id(self, tax_id: str) -> Organization: ...
    def list(self) -> Sequence[Organization]: ...
    def count(self) -> int: ...


class CampaignQueries(Protocol):
    """Query surface of CampaignRegistry handed out by LedgerCore."""
    def by_id(self, campaign_id: CampaignId) -> Campaign: ...
    def by_organization(self, organization_id: OrganizationId) -> Sequence[Campaign]: ...
    def is_effectively_active(self, campaign_id: CampaignId, now: int) -> bool: ...
    def list(self) -> Sequence[Campaign]: ...
    def count(self) -> int: ...


class DonationQueries(Protocol):
    """Query surface of DonationLedger handed out by LedgerCore."""
    def by_id(self, donation_id: DonationId) -> Donation: ...
    def by_campaign(self, campaign_id: CampaignId) -> Sequence[Donation]: ...
    def by_donor(self, donor_identity: str) -> Sequence[Donation]: ...
    def total_for_campaign(self, campaign_id: CampaignId) -> int: ...
    def count(self) -> int: ...


class Clock(Protocol):
    """Source of logical timestamps for admitted mutations."""
    def now(self) -> int: ...


class AuditLogRepository(Protocol):
    """Contract for durable audit log storage, implemented by shell."""
    async def append(self, entry: AuditEntry) -> None: ...
    async def load_all(self) -> Sequence[AuditEntry]: ...
    async def count(self) -> int: ...
