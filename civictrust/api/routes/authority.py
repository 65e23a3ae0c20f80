"""Authority Routes — read and transfer the single administrative authority."""

import logging

from fastapi import APIRouter, Depends

from civictrust.api.dependencies import get_caller, get_ledger_service
from civictrust.core.domain_types import Operation
from civictrust.core.ledger_core import LedgerRequest
from civictrust.schemas.ledger import MutationResult
from civictrust.schemas.organization import AuthorityResponse, AuthorityTransfer
from civictrust.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/authority", tags=["authority"])


@router.get("", response_model=AuthorityResponse)
async def get_authority(ledger: LedgerService = Depends(get_ledger_service)):
    return AuthorityResponse(authority=ledger.core.identities.authority)


@router.post("/transfer", response_model=MutationResult)
async def transfer_authority(
    body: AuthorityTransfer,
    caller: str = Depends(get_caller),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Hand the authority to a new address. The caller loses it immediately."""
    response = await ledger.execute(LedgerRequest(
        Operation.TRANSFER_AUTHORITY, caller, {"new_address": body.new_address},
    ))
    logger.info(
        "Administrative authority transferred",
        extra={"caller": caller, "sequence": response.sequence},
    )
    return MutationResult.from_response(response)
