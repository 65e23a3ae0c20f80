"""Donation Ledger — append-only donation records scoped to a campaign.

Invariants:
    - A donation is recorded only while its campaign is effectively active at `now`
    - amount > 0; recorded_at is supplied by the ledger core, never by the donor
    - No update or delete path exists

Design Decisions:
    - CampaignActivityReader injected at construction: read-only capability
    - by_donor is a secondary index kept alongside the by_campaign index
"""

from civictrust.core.domain_types import Address, CampaignId, DonationId
from civictrust.core.errors import CampaignInactiveError, InvalidAmountError, NotFoundError
from civictrust.core.records import Donation
from civictrust.core.repository_protocols import CampaignActivityReader
from civictrust.core.validate_input import (
    optional_text, require_address, require_non_negative_int,
)


class DonationLedger:
    """Owns every Donation."""

    def __init__(self, campaigns: CampaignActivityReader):
        self._campaigns = campaigns
        self._donations: dict[DonationId, Donation] = {}
        self._by_campaign: dict[CampaignId, list[DonationId]] = {}
        self._by_donor: dict[Address, list[DonationId]] = {}
        self._next_id = 1

    def record(
        self,
        campaign_id: CampaignId,
        amount: int,
        external_reference: str,
        donor_identity: str,
        now: int,
    ) -> DonationId:
        donor = require_address(donor_identity, "donor_identity")
        amount = require_non_negative_int(amount, "amount")
        external_reference = optional_text(external_reference, "external_reference")
        now = require_non_negative_int(now, "now")

        campaign = self._campaigns.by_id(campaign_id)
        if not self._campaigns.is_effectively_active(campaign.id, now):
            raise CampaignInactiveError(campaign_id)
        if amount == 0:
            raise InvalidAmountError()

        donation_id = DonationId(self._next_id)
        self._next_id += 1
        self._donations[donation_id] = Donation(
            id=donation_id,
            campaign_id=campaign.id,
            donor_identity=donor,
            amount=amount,
            external_reference=external_reference,
            recorded_at=now,
        )
        self._by_campaign.setdefault(campaign.id, []).append(donation_id)
        self._by_donor.setdefault(donor, []).append(donation_id)
        return donation_id

    # ─── Queries ─────────────────────────────────────────────────

    def by_id(self, donation_id: DonationId) -> Donation:
        donation = self._donations.get(donation_id)
        if donation is None:
            raise NotFoundError("Donation", donation_id)
        return donation

    def by_campaign(self, campaign_id: CampaignId) -> list[Donation]:
        ids = tuple(self._by_campaign.get(campaign_id, ()))
        return [self._donations[i] for i in ids]

    def by_donor(self, donor_identity: str) -> list[Donation]:
        donor = require_address(donor_identity, "donor_identity")
        ids = tuple(self._by_donor.get(donor, ()))
        return [self._donations[i] for i in ids]

    def total_for_campaign(self, campaign_id: CampaignId) -> int:
        return sum(d.amount for d in self.by_campaign(campaign_id))

    def count(self) -> int:
        return self._next_id - 1
