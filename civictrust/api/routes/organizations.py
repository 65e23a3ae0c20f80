"""Organization Routes — registration, verification, rejection and identity lookups.

Invariants:
    - Mutations go through LedgerService.execute (serialized, audited, persisted)
    - Static paths (/count, /wallet/..., /registration/..., /tax/...) registered
      before /{organization_id}
    - The registering caller becomes the controlling address
"""

from fastapi import APIRouter, Depends, status

from civictrust.api.dependencies import get_caller, get_ledger_service
from civictrust.core.domain_types import Operation
from civictrust.core.ledger_core import LedgerRequest
from civictrust.schemas.ledger import CountResponse, MutationResult
from civictrust.schemas.organization import (
    OrganizationList, OrganizationRegister, OrganizationResponse,
)
from civictrust.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/v1/organizations", tags=["organizations"])


@router.post(
    "", response_model=MutationResult, status_code=status.HTTP_201_CREATED,
)
async def register_organization(
    body: OrganizationRegister,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Self-service registration. Starts unverified."""
    response = await ledger.execute(LedgerRequest(
        Operation.REGISTER_ORGANIZATION,
        caller,
        {
            "name": body.name,
            "registration_number": body.registration_number,
            "tax_id": body.tax_id,
            "controlling_address": caller,
        },
    ))
    return MutationResult.from_response(response)


@router.post("/{organization_id}/verify", response_model=MutationResult)
async def verify_organization(
    organization_id: int,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    response = await ledger.execute(LedgerRequest(
        Operation.VERIFY_ORGANIZATION, caller, {"organization_id": organization_id},
    ))
    return MutationResult.from_response(response)


@router.post("/{organization_id}/reject", response_model=MutationResult)
async def reject_organization(
    organization_id: int,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Remove an organization. Its campaigns and donations stay on record."""
    response = await ledger.execute(LedgerRequest(
        Operation.REJECT_ORGANIZATION, caller, {"organization_id": organization_id},
    ))
    return MutationResult.from_response(response)


@router.get("", response_model=OrganizationList)
async def list_organizations(
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Every organization ever registered, removed ones included."""
    return OrganizationList(organizations=[
        OrganizationResponse.from_record(o) for o in ledger.core.identities.list()
    ])


@router.get("/count", response_model=CountResponse)
async def count_organizations(
    ledger: LedgerService = Depends(get_ledger_service),
):
    return CountResponse(count=ledger.core.identities.count())


@router.get("/wallet/{address}", response_model=OrganizationResponse)
async def get_organization_by_wallet(
    address: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return OrganizationResponse.from_record(ledger.core.identities.by_wallet(address))


@router.get("/registration/{registration_number}", response_model=OrganizationResponse)
async def get_organization_by_registration_number(
    registration_number: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return OrganizationResponse.from_record(
        ledger.core.identities.by_registration_number(registration_number),
    )


@router.get("/tax/{tax_id}", response_model=OrganizationResponse)
async def get_organization_by_tax_id(
    tax_id: str, ledger: LedgerService = Depends(get_ledger_service),
):
    return OrganizationResponse.from_record(ledger.core.identities.by_tax_id(tax_id))


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: int, ledger: LedgerService = Depends(get_ledger_service),
):
    return OrganizationResponse.from_record(ledger.core.identities.by_id(organization_id))
