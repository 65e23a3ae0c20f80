"""Entity Records — frozen value snapshots for organizations, campaigns and donations.

Invariants:
    - Records are immutable; state changes produce a new record via dataclasses.replace
    - Registries hand out records by value, so callers can never mutate registry state
    - to_dict() is JSON-safe (ints, strings, bools only)
"""

from dataclasses import asdict, dataclass

from civictrust.core.domain_types import (
    Address, Amount, CampaignId, DonationId, OrganizationId, Timestamp,
)


@dataclass(frozen=True)
class Organization:
    """Organization snapshot. Identity fields never change after creation."""
    id: OrganizationId
    name: str
    registration_number: str
    tax_id: str
    controlling_address: Address
    verified: bool = False
    active: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Campaign:
    """Campaign snapshot. `active` is the manual flag, not effective activity."""
    id: CampaignId
    organization_id: OrganizationId
    title: str
    description: str
    start_time: Timestamp
    end_time: Timestamp
    active: bool = True

    def is_effectively_active(self, now: int) -> bool:
        """Manual flag and time window combined. Start time does not gate activity."""
        return self.active and now <= self.end_time

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Donation:
    """Donation snapshot, permanent once recorded."""
    id: DonationId
    campaign_id: CampaignId
    donor_identity: Address
    amount: Amount
    external_reference: str
    recorded_at: Timestamp

    def to_dict(self) -> dict:
        return asdict(self)
