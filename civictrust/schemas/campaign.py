"""Campaign Schemas — request/response models for campaign endpoints.

Invariants:
    - start_time/end_time are non-negative logical timestamps
    - end_time > start_time is NOT checked here: the ledger core owns that rule
      and records the InvalidWindow rejection in the audit log
"""

from pydantic import BaseModel, Field

from civictrust.core.records import Campaign


class CampaignCreate(BaseModel):
    organization_id: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=5_000)
    start_time: int = Field(ge=0)
    end_time: int = Field(ge=0)


class CampaignResponse(BaseModel):
    """Campaign snapshot. `active` is the manual flag; see CampaignActivity for effective state."""
    id: int
    organization_id: int
    title: str
    description: str
    start_time: int
    end_time: int
    active: bool

    @classmethod
    def from_record(cls, campaign: Campaign) -> "CampaignResponse":
        return cls(**campaign.to_dict())


class CampaignList(BaseModel):
    campaigns: list[CampaignResponse] = []


class CampaignActivity(BaseModel):
    campaign_id: int
    now: int
    is_active: bool
