"""Donation Routes — record donations and read the donation trail.

Invariants:
    - The caller is the donor; the ledger assigns recorded_at
    - There is no update or delete endpoint
"""

from fastapi import APIRouter, Depends, status

from civictrust.api.dependencies import get_caller, get_ledger_service
from civictrust.core.domain_types import Operation
from civictrust.core.ledger_core import LedgerRequest
from civictrust.schemas.donation import DonationList, DonationRecord, DonationResponse
from civictrust.schemas.ledger import CountResponse, MutationResult
from civictrust.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/donations", tags=["donations"])


@router.post(
    "", response_model=MutationResult, status_code=status.HTTP_201_CREATED,
)
async def record_donation(
    body: DonationRecord,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    response = await ledger.execute(LedgerRequest(
        Operation.RECORD_DONATION, caller, body.model_dump(),
    ))
    return MutationResult.from_response(response)


@router.get("/count", response_model=CountResponse)
async def count_donations(ledger: LedgerService = Depends(get_ledger_service)):
    return CountResponse(count=ledger.core.donations.count())


@router.get("/campaign/{campaign_id}", response_model=DonationList)
async def list_donations_by_campaign(
    campaign_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    donations = ledger.core.donations.by_campaign(campaign_id)
    return DonationList(
        donations=[DonationResponse.from_record(d) for d in donations],
        total_amount=sum(d.amount for d in donations),
    )


@router.get("/donor/{address}", response_model=DonationList)
async def list_donations_by_donor(
    address: str, ledger: LedgerService = Depends(get_ledger_service),
):
    donations = ledger.core.donations.by_donor(address)
    return DonationList(
        donations=[DonationResponse.from_record(d) for d in donations],
        total_amount=sum(d.amount for d in donations),
    )


@router.get("/{donation_id}", response_model=DonationResponse)
async def get_donation(
    donation_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    return DonationResponse.from_record(ledger.core.donations.by_id(donation_id))
