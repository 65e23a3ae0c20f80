"""Donation Schemas — request/response models for donation endpoints."""

from pydantic import BaseModel, Field

from civictrust.core.records import Donation


class DonationRecord(BaseModel):
    """Donation body. The donor is the caller; recorded_at is assigned by the ledger."""
    campaign_id: int = Field(ge=1)
    # zero passes here so the ledger can reject it as INVALID_AMOUNT
    amount: int = Field(ge=0)
    external_reference: str = Field("", max_length=500)


class DonationResponse(BaseModel):
    id: int
    campaign_id: int
    donor_identity: str
    amount: int
    external_reference: str
    recorded_at: int

    @classmethod
    def from_record(cls, donation: Donation) -> "DonationResponse":
        return cls(**donation.to_dict())


class DonationList(BaseModel):
    donations: list[DonationResponse] = []
    total_amount: int = 0
