"""Campaign Routes — creation, deactivation, activity checks and campaign reads.

Invariants:
    - Only the organization's controlling address (the caller) can create or deactivate
    - /campaigns/{id}/active evaluates effective activity at the ledger clock
      unless an explicit `now` is given
"""

from fastapi import APIRouter, Depends, Query, status

from civictrust.api.dependencies import get_caller, get_ledger_service
from civictrust.core.domain_types import Operation
from civictrust.core.ledger_core import LedgerRequest
from civictrust.schemas.campaign import (
    CampaignActivity, CampaignCreate, CampaignList, CampaignResponse,
)
from civictrust.schemas.ledger import CountResponse, MutationResult
from civictrust.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/campaigns", tags=["campaigns"])


@router.post(
    "", response_model=MutationResult, status_code=status.HTTP_201_CREATED,
)
async def create_campaign(
    body: CampaignCreate,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    response = await ledger.execute(LedgerRequest(
        Operation.CREATE_CAMPAIGN, caller, body.model_dump(),
    ))
    return MutationResult.from_response(response)


@router.post("/{campaign_id}/deactivate", response_model=MutationResult)
async def deactivate_campaign(
    campaign_id: int,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    response = await ledger.execute(LedgerRequest(
        Operation.DEACTIVATE_CAMPAIGN, caller, {"campaign_id": campaign_id},
    ))
    return MutationResult.from_response(response)


@router.get("", response_model=CampaignList)
async def list_campaigns(ledger: LedgerService = Depends(get_ledger_service)):
    return CampaignList(campaigns=[
        CampaignResponse.from_record(c) for c in ledger.core.campaigns.list()
    ])


@router.get("/count", response_model=CountResponse)
async def count_campaigns(ledger: LedgerService = Depends(get_ledger_service)):
    return CountResponse(count=ledger.core.campaigns.count())


@router.get("/organization/{organization_id}", response_model=CampaignList)
async def list_campaigns_by_organization(
    organization_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    """Campaigns of one organization in creation order, including a rejected organization's."""
    return CampaignList(campaigns=[
        CampaignResponse.from_record(c)
        for c in ledger.core.campaigns.by_organization(organization_id)
    ])


@router.get("/{campaign_id}/active", response_model=CampaignActivity)
async def get_campaign_activity(
    campaign_id: int,
    now: int | None = Query(None, ge=0),
    ledger: LedgerService = Depends(get_ledger_service),
):
    at = now if now is not None else ledger.core.clock.now()
    return CampaignActivity(
        campaign_id=campaign_id,
        now=at,
        is_active=ledger.core.campaigns.is_effectively_active(campaign_id, at),
    )


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    return CampaignResponse.from_record(ledger.core.campaigns.by_id(campaign_id))
