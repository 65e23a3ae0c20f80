"""Campaign Registry — fundraising campaigns scoped to verified organizations.

Invariants:
    - create() requires caller == the organization's controlling address AND the
      organization currently verified and active, re-read from IdentityReader every call
    - end_time > start_time for every stored campaign
    - Effective activity (active and now <= end_time) is derived, never stored
    - Campaigns are never deleted and never reactivated
    - Campaigns of a later-rejected organization stay queryable (no retroactive invalidation)

Design Decisions:
    - IdentityReader injected at construction: read-only capability, no back-reference
    - No cached organization data on Campaign beyond organization_id
"""

from dataclasses import replace

from civictrust.core.domain_types import CampaignId, OrganizationId
from civictrust.core.errors import (
    AlreadyInactiveError,
    InvalidWindowError,
    NotFoundError,
    NotVerifiedError,
    UnauthorizedError,
)
from civictrust.core.records import Campaign
from civictrust.core.repository_protocols import IdentityReader
from civictrust.core.validate_input import (
    optional_text, require_address, require_non_negative_int, require_text,
)


class CampaignRegistry:
    """Owns every Campaign. Authorization is pulled from IdentityReader at decision time."""

    def __init__(self, identities: IdentityReader):
        self._identities = identities
        self._campaigns: dict[CampaignId, Campaign] = {}
        self._by_organization: dict[OrganizationId, list[CampaignId]] = {}
        self._next_id = 1

    def create(
        self,
        organization_id: OrganizationId,
        title: str,
        description: str,
        start_time: int,
        end_time: int,
        caller: str,
    ) -> CampaignId:
        caller = require_address(caller, "caller")
        title = require_text(title, "title")
        description = optional_text(description, "description")
        start_time = require_non_negative_int(start_time, "start_time")
        end_time = require_non_negative_int(end_time, "end_time")

        org = self._identities.lookup(organization_id)
        if org is None:
            raise NotFoundError("Organization", organization_id)
        if caller != org.controlling_address:
            raise UnauthorizedError(
                "Only the organization's controlling address may create campaigns",
            )
        if not (org.verified and org.active):
            raise NotVerifiedError(organization_id)
        if end_time <= start_time:
            raise InvalidWindowError(start_time, end_time)

        campaign_id = CampaignId(self._next_id)
        self._next_id += 1
        self._campaigns[campaign_id] = Campaign(
            id=campaign_id,
            organization_id=org.id,
            title=title,
            description=description,
            start_time=start_time,
            end_time=end_time,
        )
        self._by_organization.setdefault(org.id, []).append(campaign_id)
        return campaign_id

    def deactivate(self, campaign_id: CampaignId, caller: str) -> None:
        """Manual shutdown by the owning organization. Double deactivation is an error."""
        caller = require_address(caller, "caller")
        campaign = self.by_id(campaign_id)
        org = self._identities.lookup(campaign.organization_id)
        if org is None or caller != org.controlling_address:
            raise UnauthorizedError(
                "Only the organization's controlling address may deactivate this campaign",
            )
        if not campaign.active:
            raise AlreadyInactiveError(campaign_id)
        self._campaigns[campaign_id] = replace(campaign, active=False)

    def is_effectively_active(self, campaign_id: CampaignId, now: int) -> bool:
        return self.by_id(campaign_id).is_effectively_active(now)

    # ─── Queries ─────────────────────────────────────────────────

    def by_id(self, campaign_id: CampaignId) -> Campaign:
        campaign = self._campaigns.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    def by_organization(self, organization_id: OrganizationId) -> list[Campaign]:
        """Campaigns of one organization in creation order. Unknown org -> empty list."""
        ids = tuple(self._by_organization.get(organization_id, ()))
        return [self._campaigns[i] for i in ids]

    def count(self) -> int:
        return self._next_id - 1

    def list(self) -> list[Campaign]:
        return list(self._campaigns.values())
